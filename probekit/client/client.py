"""A native client probe that dispatches to the configured driver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from probekit.client.conf import ClientConfigError, ClientOptions, DriverType
from probekit.client.memcache_probe import MemcacheClient
from probekit.client.mongo_probe import MongoClient
from probekit.client.mysql_probe import MySQLClient
from probekit.client.redis_probe import RedisClient

__all__ = ["Client"]

logger = logging.getLogger(__name__)

_DRIVERS: dict[DriverType, Any] = {
    DriverType.MYSQL: MySQLClient,
    DriverType.REDIS: RedisClient,
    DriverType.MEMCACHE: MemcacheClient,
    DriverType.MONGO: MongoClient,
}


@dataclass
class Client:
    """A probe that checks a server through its native client."""

    options: ClientOptions = field(default_factory=ClientOptions)
    _driver: Any = field(default=None, init=False, repr=False)

    def config(self) -> None:
        """Validate the options and create the driver."""
        opts = self.options
        opts.probe_kind = "client"
        opts.probe_tag = str(opts.driver)
        opts.check()
        factory = _DRIVERS.get(opts.driver)
        if factory is None:
            opts.driver = DriverType.UNKNOWN
            raise ClientConfigError("Unknown Driver Type")
        self._driver = factory(opts)
        logger.debug(
            "[%s / %s / %s ] configuration: %r",
            opts.probe_kind, opts.probe_tag, opts.probe_name, self,
        )

    def do_probe(self) -> tuple[bool, str]:
        """Run the driver's health check and return (ok, message)."""
        if self.options.driver is DriverType.UNKNOWN:
            return False, "Wrong Driver Type"
        if self._driver is None:
            raise RuntimeError("the client is not configured")
        return self._driver.probe()