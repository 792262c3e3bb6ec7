"""Health check of a Memcache server over its text protocol."""

from __future__ import annotations

import logging
import socket
from types import TracebackType

from probekit.client.conf import ClientOptions, ClientProbeError

__all__ = ["MemcacheClient", "KIND"]

KIND = "Memcache"

logger = logging.getLogger(__name__)


def _legal_key(key: str) -> bool:
    if len(key) > 250 or not key:
        return False
    return all(32 < ord(char) < 127 for char in key)


class _MemcacheConnection:
    """A single connection speaking the memcache text protocol."""

    def __init__(self, host: str, port: int, timeout: float) -> None:
        self._sock = socket.create_connection((host, port), timeout=timeout)
        self._reader = self._sock.makefile("rb")

    def __enter__(self) -> _MemcacheConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._reader.close()
        self._sock.close()

    def _send(self, line: str) -> None:
        self._sock.sendall(line.encode() + b"\r\n")

    def _readline(self) -> bytes:
        line = self._reader.readline()
        if not line.endswith(b"\r\n"):
            raise ClientProbeError("memcache: unexpected end of response")
        line = line[:-2]
        if line == b"ERROR" or line.startswith((b"SERVER_ERROR", b"CLIENT_ERROR")):
            raise ClientProbeError(f"memcache: server error: {line.decode(errors='replace')}")
        return line

    def version(self) -> str:
        self._send("version")
        line = self._readline()
        if not line.startswith(b"VERSION "):
            raise ClientProbeError(f"memcache: unexpected response line: {line!r}")
        return line[len(b"VERSION ") :].decode(errors="replace")

    def get_multi(self, keys: list[str]) -> dict[str, bytes]:
        for key in keys:
            if not _legal_key(key):
                raise ClientProbeError("malformed: key is too long or contains invalid characters")
        self._send("gets " + " ".join(keys))
        items: dict[str, bytes] = {}
        while True:
            line = self._readline()
            if line == b"END":
                return items
            parts = line.split(b" ")
            if len(parts) < 4 or parts[0] != b"VALUE" or not parts[3].isdigit():
                raise ClientProbeError(f"memcache: unexpected line in get response: {line!r}")
            size = int(parts[3])
            payload = self._reader.read(size + 2)
            if len(payload) != size + 2 or not payload.endswith(b"\r\n"):
                raise ClientProbeError("memcache: corrupt get result read")
            items[parts[1].decode()] = payload[:-2]


class MemcacheClient:
    """Pings a Memcache server or verifies configured key values."""

    kind = KIND

    def __init__(self, options: ClientOptions) -> None:
        self.options = options

    def data_keys(self) -> list[str]:
        """The keys of the configured data."""
        return list(self.options.data)

    def validate_key_values(self, items: dict[str, bytes]) -> tuple[bool, str]:
        """Compare fetched values with the configured ones; blank ones are skipped."""
        opts = self.options
        for key, raw in items.items():
            value = raw.decode(errors="replace")
            logger.debug(
                "[%s / %s / %s] Got key: %s with value: %s",
                opts.probe_kind, opts.probe_name, opts.probe_tag, key, value,
            )
            expected = opts.data.get(key, "")
            if not expected.strip():
                logger.debug(
                    "[%s / %s / %s] Skipping value check for item %s",
                    opts.probe_kind, opts.probe_name, opts.probe_tag, key,
                )
                continue
            if value != expected:
                return (
                    False,
                    f"Memcache value for key {key} returned {value}, expected {expected}",
                )
        return True, "Memcache key values match successfully"

    def probe(self) -> tuple[bool, str]:
        """Run the health check and return (ok, message)."""
        opts = self.options
        host, port = opts._endpoint(11211)
        try:
            with _MemcacheConnection(host, port, opts.timeout) as conn:
                if opts.data:
                    items = conn.get_multi(self.data_keys())
                else:
                    logger.debug(
                        "[%s / %s %s] Data empty, Pinging",
                        opts.probe_kind, opts.probe_name, opts.probe_tag,
                    )
                    conn.version()
                    items = None
        except (OSError, ClientProbeError) as exc:
            return False, str(exc)

        if items is None:
            return True, "Memcache key fetched Successfully!"
        if len(items) != len(opts.data):
            return False, f"Number of fetched keys {len(items)} expected {len(opts.data)}"
        return self.validate_key_values(items)