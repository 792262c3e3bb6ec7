"""Configuration shared by the native client probes."""

from __future__ import annotations

import enum
import re
import ssl
from dataclasses import dataclass, field

__all__ = [
    "DriverType",
    "ClientOptions",
    "ClientConfigError",
    "ClientProbeError",
    "parse_driver",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")


class ClientConfigError(ValueError):
    """The client configuration is not valid."""


class ClientProbeError(Exception):
    """A client probe found the server in a bad state."""


class DriverType(enum.Enum):
    """The kind of server a native client talks to."""

    UNKNOWN = "unknown"
    MYSQL = "mysql"
    REDIS = "redis"
    MEMCACHE = "memcache"
    KAFKA = "kafka"
    MONGO = "mongo"
    POSTGRESQL = "postgres"
    ZOOKEEPER = "zookeeper"

    def __str__(self) -> str:
        return self.value


def parse_driver(name: str) -> DriverType:
    """The driver with the given name; UNKNOWN when there is none."""
    try:
        return DriverType(name)
    except ValueError:
        return DriverType.UNKNOWN


def _split_host_port(address: str) -> tuple[str, str]:
    """Split "host:port" or "[host]:port"; raise ValueError like a resolver would."""
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError(f"address {address}: missing ']' in address")
        rest = address[end + 1 :]
        if not rest:
            raise ValueError(f"address {address}: missing port in address")
        if not rest.startswith(":"):
            raise ValueError(f"address {address}: unexpected ']' in address")
        if ":" in rest[1:]:
            raise ValueError(f"address {address}: too many colons in address")
        host, port = address[1:end], rest[1:]
        if "[" in host:
            raise ValueError(f"address {address}: unexpected '[' in address")
        return host, port

    colon = address.rfind(":")
    if colon < 0:
        raise ValueError(f"address {address}: missing port in address")
    host, port = address[:colon], address[colon + 1 :]
    if ":" in host:
        raise ValueError(f"address {address}: too many colons in address")
    if "[" in host:
        raise ValueError(f"address {address}: unexpected '[' in address")
    if "]" in host:
        raise ValueError(f"address {address}: unexpected ']' in address")
    return host, port


@dataclass
class ClientOptions:
    """Settings of a native client probe."""

    host: str = ""
    driver: DriverType = DriverType.UNKNOWN
    username: str = ""
    password: str = ""
    data: dict[str, str] = field(default_factory=dict)
    probe_name: str = ""
    probe_kind: str = ""
    probe_tag: str = ""
    timeout: float = 30.0
    ca: str = ""
    cert: str = ""
    key: str = ""

    def check(self) -> None:
        """Validate the host, the port and the driver."""
        try:
            _, port = _split_host_port(self.host)
        except ValueError as exc:
            raise ClientConfigError(f"Invalid Host: {self.host}. {exc}") from exc
        if not _INT_RE.fullmatch(port) or not 1 <= int(port) <= 65535:
            raise ClientConfigError(f"Invalid Port: {port}")
        if self.driver is DriverType.UNKNOWN:
            raise ClientConfigError("Unknown driver")

    def _endpoint(self, default_port: int) -> tuple[str, int]:
        """Host and port to connect to, falling back to the default port."""
        try:
            host, port = _split_host_port(self.host)
        except ValueError:
            return self.host, default_port
        if _INT_RE.fullmatch(port):
            return host, int(port)
        return host, default_port

    def _tls_context(self) -> ssl.SSLContext | None:
        """An SSL context from the CA, certificate and key files, if any is set."""
        if not (self.ca or self.cert or self.key):
            return None
        try:
            context = ssl.create_default_context(cafile=self.ca or None)
            if self.cert:
                context.load_cert_chain(self.cert, self.key or None)
        except (OSError, ssl.SSLError) as exc:
            raise ClientConfigError(f"TLS Config Error - {exc}") from exc
        return context