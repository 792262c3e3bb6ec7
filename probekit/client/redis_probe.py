"""Health check of a Redis server."""

from __future__ import annotations

import logging
from typing import Any

import redis

from probekit.client.conf import ClientConfigError, ClientOptions

__all__ = ["RedisClient", "KIND"]

KIND = "Redis"

logger = logging.getLogger(__name__)


class RedisClient:
    """Pings a Redis server or verifies configured key values."""

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

    def _client(self) -> Any:
        opts = self.options
        host, port = opts._endpoint(6379)
        ssl_kwargs: dict[str, Any] = {}
        if self.tls is not None:
            ssl_kwargs = {
                "ssl": True,
                "ssl_ca_certs": opts.ca or None,
                "ssl_certfile": opts.cert or None,
                "ssl_keyfile": opts.key or None,
            }
        return redis.Redis(
            host=host,
            port=port,
            password=opts.password or None,
            db=0,
            socket_connect_timeout=opts.timeout,
            socket_timeout=opts.timeout,
            decode_responses=True,
            **ssl_kwargs,
        )

    def probe(self) -> tuple[bool, str]:
        """Run the health check and return (ok, message)."""
        opts = self.options
        client = self._client()
        try:
            if opts.data:
                for key, expected in opts.data.items():
                    logger.debug(
                        "[%s / %s / %s] Verifying Data - key = [%s], value = [%s]",
                        opts.probe_kind, opts.probe_name, opts.probe_tag, key, expected,
                    )
                    try:
                        value = client.get(key)
                    except Exception as exc:
                        return False, f"Get Key [{key}] Error - {exc}"
                    if value is None:
                        return False, f"Get Key [{key}] Error - redis: nil"
                    if value != expected:
                        return False, f"Key [{key}] expected [{expected}] got [{value}]"
            else:
                try:
                    client.ping()
                except Exception as exc:
                    return False, str(exc)
        finally:
            client.close()
        return True, "Ping Redis Server Successfully!"