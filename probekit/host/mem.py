"""Memory usage as reported by free."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from probekit.host.common import HostMetric, MetricParseError, ResourceUsage, str_float, str_int
from probekit.host.threshold import DEFAULT_MEM_THRESHOLD, Threshold

__all__ = ["Mem"]

logger = logging.getLogger(__name__)


@dataclass
class Mem(ResourceUsage, HostMetric):
    """Used and total memory in MiB with the usage percentage."""

    name: ClassVar[str] = "mem"

    threshold: float = 0.0

    def command(self) -> str:
        return """free -m | awk 'NR==2{printf "%s %s %.2f\\n", $3,$2,$3*100/$2 }'"""

    def output_lines(self) -> int:
        return 1

    def config(self, server: Any) -> None:
        if server.threshold.mem == 0:
            server.threshold.mem = DEFAULT_MEM_THRESHOLD
            logger.debug(
                "[%s / %s] Memory threshold is not set, using default value: %.2f",
                server.probe_kind,
                server.probe_name,
                server.threshold.mem,
            )
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        self.threshold = threshold.mem

    def parse(self, lines: list[str]) -> None:
        if len(lines) < self.output_lines():
            raise MetricParseError("invalid memory output")
        fields = lines[0].split(" ")
        if len(fields) < 3:
            raise MetricParseError("invalid memory output")
        self.used = str_int(fields[0])
        self.total = str_int(fields[1])
        self.usage = str_float(fields[2])

    def usage_info(self) -> str:
        return f"Memory: {self.usage:.2f}%"

    def check_threshold(self) -> tuple[bool, str]:
        if self.threshold > 0 and self.threshold <= self.usage / 100:
            return False, "Memory threshold alert!"
        return True, ""