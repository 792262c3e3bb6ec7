"""Health check of a MongoDB server."""

from __future__ import annotations

import logging
from typing import Any

import pymongo
from bson import json_util

from probekit.client.conf import ClientConfigError, ClientOptions

__all__ = ["MongoClient", "KIND", "get_db_collection"]

KIND = "Mongo"

logger = logging.getLogger(__name__)


def get_db_collection(text: str) -> tuple[str, str]:
    """Split "database:collection" into its two names."""
    if not text.strip():
        raise ClientConfigError("Database Collection name is empty")
    fields = text.split(":")
    if len(fields) != 2:
        raise ClientConfigError(f"Invalid Format - [{text}] (syntax: database.collection) ")
    return fields[0], fields[1]


def _parse_filter(value: str) -> Any:
    try:
        return json_util.loads(value)
    except (ValueError, TypeError) as exc:
        raise ClientConfigError(f"invalid JSON input: {exc}") from exc


class MongoClient:
    """Pings a MongoDB server or checks that configured documents exist."""

    kind = KIND

    def __init__(self, options: ClientOptions) -> None:
        self.options = options
        timeout_ms = int(options.timeout * 1000)
        if options.password:
            self.conn_str = (
                f"mongodb://{options.username}:{options.password}@{options.host}"
                f"/?connectTimeoutMS={timeout_ms}"
            )
        else:
            self.conn_str = f"mongodb://{options.host}/?connectTimeoutMS={timeout_ms}"

        logger.debug(
            "[%s / %s / %s] - Connection - %s",
            options.probe_kind, options.probe_name, options.probe_tag, self.conn_str,
        )

        self.client_options: dict[str, Any] = {
            "serverSelectionTimeoutMS": timeout_ms,
            "connectTimeoutMS": timeout_ms,
            "maxConnecting": 1,
            "maxPoolSize": 1,
            "minPoolSize": 1,
        }
        try:
            tls = options._tls_context()
        except ClientConfigError as exc:
            logger.error(
                "[%s / %s / %s] - %s",
                options.probe_kind, options.probe_name, options.probe_tag, exc,
            )
            raise
        if tls is not None:
            self.client_options["tls"] = True
            if options.ca:
                self.client_options["tlsCAFile"] = options.ca
            if options.cert:
                self.client_options["tlsCertificateKeyFile"] = options.cert
            self.client_options["authMechanism"] = "MONGODB-X509"

        self.check_data()

    def check_data(self) -> None:
        """Validate every configured collection name and filter document."""
        for key, value in self.options.data.items():
            get_db_collection(key)
            _parse_filter(value)

    def probe(self) -> tuple[bool, str]:
        """Run the health check and return (ok, message)."""
        opts = self.options
        try:
            client = pymongo.MongoClient(self.conn_str, **self.client_options)
        except Exception as exc:
            return False, str(exc)
        try:
            if opts.data:
                for key, value in opts.data.items():
                    logger.debug(
                        "[%s / %s / %s] - Verifying Data - [%s]: [%s]",
                        opts.probe_kind, opts.probe_name, opts.probe_tag, key, value,
                    )
                    try:
                        db_name, collection_name = get_db_collection(key)
                    except ClientConfigError as exc:
                        return False, f"[{key}] Error - {exc}"
                    try:
                        query = _parse_filter(value)
                    except ClientConfigError as exc:
                        return False, f"[{value}] Error - {exc}"
                    try:
                        doc = client[db_name][collection_name].find_one(query)
                    except Exception as exc:
                        return False, f"Find [{value}] Error - {exc}"
                    if doc is None:
                        return False, f"Find [{value}] Error - mongo: no documents in result"
                    logger.debug(
                        "[%s / %s / %s] - Find [%s] - %r",
                        opts.probe_kind, opts.probe_name, opts.probe_tag, value, doc,
                    )
            else:
                try:
                    client.admin.command("ping")
                except Exception as exc:
                    return False, str(exc)
        finally:
            client.close()
        return True, "Check MongoDB Server Successfully!"