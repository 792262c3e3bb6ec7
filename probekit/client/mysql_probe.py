"""Health check of a MySQL server."""

from __future__ import annotations

import logging
import re
from typing import Any

import pymysql

from probekit.client.conf import ClientConfigError, ClientOptions, ClientProbeError

__all__ = ["MySQLClient", "KIND"]

KIND = "MySQL"

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _quote_ident(name: str) -> str:
    return name.replace("`", "``")


class MySQLClient:
    """Pings a MySQL server or verifies configured values in its tables."""

    kind = KIND

    def __init__(self, options: ClientOptions) -> None:
        self.options = options
        try:
            self.tls = options._tls_context()
        except ClientConfigError as exc:
            logger.error(
                "[%s / %s / %s] - %s",
                options.probe_kind,
                options.probe_name,
                options.probe_tag,
                exc,
            )
            raise
        self.check_data()

    def get_sql(self, text: str) -> str:
        """Turn "database:table:column:key:value" into a SELECT statement."""
        if not text.strip():
            raise ClientConfigError("Empty SQL data")
        fields = text.split(":")
        if len(fields) != 5:
            raise ClientConfigError(
                f"Invalid SQL data - [{text}]. (syntax: database:table:field:key:value)"
            )
        db, table, column, key, value = (_quote_ident(f) for f in fields)
        if not _INT_RE.fullmatch(value):
            raise ClientConfigError(f"Invalid SQL data - [{text}], the value must be int")
        return f"SELECT `{column}` FROM `{db}`.`{table}` WHERE `{key}` = {value}"

    def check_data(self) -> None:
        """Validate every configured data key."""
        for key in self.options.data:
            self.get_sql(key)

    def _connect(self) -> Any:
        host, port = self.options._endpoint(3306)
        kwargs: dict[str, Any] = {
            "host": host,
            "port": port,
            "user": self.options.username,
            "password": self.options.password,
            "connect_timeout": max(1, round(self.options.timeout)),
        }
        if self.tls is not None:
            kwargs["ssl"] = self.tls
        return pymysql.connect(**kwargs)

    def probe(self) -> tuple[bool, str]:
        """Run the health check and return (ok, message)."""
        try:
            conn = self._connect()
        except Exception as exc:
            return False, str(exc)
        try:
            if self.options.data:
                self.probe_with_data(conn)
            else:
                self.probe_with_ping(conn)
        except Exception as exc:
            return False, str(exc)
        finally:
            conn.close()
        return True, "Check MySQL Server Successfully!"

    def probe_with_ping(self, conn: Any) -> None:
        """Ping the server and run a trivial status query."""
        conn.ping(reconnect=False)
        with conn.cursor() as cursor:
            cursor.execute('show status like "uptime"')

    def probe_with_data(self, conn: Any) -> None:
        """Check that every configured row holds the expected value."""
        opts = self.options
        for key, expected in opts.data.items():
            logger.debug(
                "[%s / %s / %s] - Verifying Data - [%s] : [%s]",
                opts.probe_kind, opts.probe_name, opts.probe_tag, key, expected,
            )
            sql = self.get_sql(key)
            with conn.cursor() as cursor:
                cursor.execute(sql)
                row = cursor.fetchone()
            if row is None:
                raise ClientProbeError(f"No data found for [{key}]")
            value = str(row[0])
            if value != expected:
                raise ClientProbeError(
                    f"Value not match for [{key}] expected [{expected}] got [{value}] "
                )
            logger.debug(
                "[%s / %s / %s] - Data Verified Successfully! - [%s] : [%s]",
                opts.probe_kind, opts.probe_name, opts.probe_tag, key, expected,
            )