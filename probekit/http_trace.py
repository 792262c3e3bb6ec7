"""Timing of the phases of an HTTP request."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

__all__ = ["TraceStats", "to_ms"]

logger = logging.getLogger(__name__)


def to_ms(seconds: float) -> float:
    """Convert a duration in seconds to milliseconds."""
    return seconds * 1000.0


def _since(start: float) -> float:
    return time.perf_counter() - start


@dataclass
class TraceStats:
    """Start times (perf_counter, 0.0 when unset) and durations (seconds)."""

    kind: str = ""
    tag: str = ""
    name: str = ""

    conn_start_at: float = 0.0
    conn_took: float = 0.0
    dns_start_at: float = 0.0
    dns_took: float = 0.0
    send_start_at: float = 0.0
    send_took: float = 0.0
    tls_start_at: float = 0.0
    tls_took: float = 0.0
    total_start_at: float = 0.0
    total_took: float = 0.0
    transfer_start_at: float = 0.0
    transfer_took: float = 0.0
    wait_start_at: float = 0.0
    wait_took: float = 0.0

    def _log(self, fmt: str, *args: Any) -> None:
        logger.debug("[%s %s %s] - " + fmt, self.kind, self.tag, self.name, *args)

    def get_conn(self, host_port: str) -> None:
        self.total_start_at = time.perf_counter()
        self._log("total - start get connection to %s", host_port)

    def dns_start(self, host: str) -> None:
        self.dns_start_at = time.perf_counter()
        self._log("dns - start resolve %s", host)

    def dns_done(self, addrs: list[str], error: BaseException | None = None) -> None:
        self.dns_took = _since(self.dns_start_at)
        if error is not None:
            return
        self._log("dns - resolve ip %s, time %.3fms", addrs, to_ms(self.dns_took))

    def connect_start(self, network: str, addr: str) -> None:
        if not self.conn_start_at:
            self.conn_start_at = time.perf_counter()
        self._log("conn - start %s connect to %s", network, addr)

    def connect_done(self, network: str, addr: str, error: BaseException | None = None) -> None:
        self.conn_took = _since(self.conn_start_at)
        if error is not None:
            return
        self._log(
            "conn - %s connection created to %s. time: %.3fms",
            network, addr, to_ms(self.conn_took),
        )

    def tls_start(self) -> None:
        self.tls_start_at = time.perf_counter()
        self._log("tls - start negotiation")

    def tls_done(self, server_name: str, error: BaseException | None = None) -> None:
        self.tls_took = _since(self.tls_start_at)
        if error is not None:
            return
        self._log("tls - negotiated to %r, time: %.3fms", server_name, to_ms(self.tls_took))

    def got_conn(self, reused: bool, was_idle: bool, idle_time: float) -> None:
        self._log(
            "connection established. reused: %s idle: %s idle time: %dms",
            reused, was_idle, int(idle_time * 1000),
        )

    def wrote_header_field(self, key: str, value: list[str]) -> None:
        if not self.send_start_at:
            self.send_start_at = time.perf_counter()
        self._log("send - start write header field %s %s", key, value)

    def wrote_headers(self) -> None:
        self.send_took = _since(self.send_start_at)
        self._log("send - headers written, time: %.3fms", to_ms(self.send_took))

    def wrote_request(self, error: BaseException | None = None) -> None:
        self.wait_start_at = time.perf_counter()
        self._log("wait - start write request")

    def got_first_response_byte(self) -> None:
        self.wait_took = _since(self.wait_start_at)
        self.transfer_start_at = time.perf_counter()
        self._log("transfer - start transfer the response")
        self._log("wait - got first response byte, time: %.3fms", to_ms(self.wait_took))

    def put_idle_conn(self, error: BaseException | None = None) -> None:
        self.done()

    def done(self) -> None:
        """Finish the trace and report it."""
        self.total_took = _since(self.total_start_at)
        self.transfer_took = _since(self.transfer_start_at)
        self._log("transfer - done, time: %.3fms", to_ms(self.transfer_took))
        self._log("total - done , time: %.3fms", to_ms(self.total_took))
        self.report()

    def report(self) -> None:
        """Log a table of the phase durations in milliseconds."""
        prefix = f"[{self.kind} {self.tag} {self.name}]"
        logger.debug("%s ======================== Trace Stats ======================", prefix)
        logger.debug("%s DNS\tConnect\tTLS\tSend\tWait\tTrans\tTotal", prefix)
        logger.debug(
            "%s %.2f\t%.2f\t%.2f\t%.2f\t%.2f\t%.2f\t%.2f",
            prefix,
            to_ms(self.dns_took),
            to_ms(self.conn_took),
            to_ms(self.tls_took),
            to_ms(self.send_took),
            to_ms(self.wait_took),
            to_ms(self.transfer_took),
            to_ms(self.total_took),
        )
        logger.debug("%s ===========================================================", prefix)