"""Disk usage of mount points as reported by df."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from probekit.host.common import HostMetric, MetricParseError, ResourceUsage, str_float, str_int
from probekit.host.threshold import DEFAULT_DISK_THRESHOLD, Threshold

__all__ = ["Disks"]

logger = logging.getLogger(__name__)


@dataclass
class Disks(HostMetric):
    """Usage of each monitored mount point."""

    name: ClassVar[str] = "disk"

    mount: list[str] = field(default_factory=list)
    usage: list[ResourceUsage] = field(default_factory=list)
    threshold: float = 0.0

    def command(self) -> str:
        return (
            "df -h "
            + " ".join(self.mount)
            + """ 2>/dev/null | awk '(NR>1){printf "%d %d %s %s\\n", $3,$2,$5,$6}'"""
        )

    def output_lines(self) -> int:
        return len(self.mount)

    def config(self, server: Any) -> None:
        if not server.disks:
            server.disks = ["/"]
        self.mount = list(server.disks)
        self.usage = [ResourceUsage() for _ in self.mount]
        if server.threshold.disk == 0:
            server.threshold.disk = DEFAULT_DISK_THRESHOLD
            logger.debug(
                "[%s / %s] Disk threshold is not set, using default value: %.2f",
                server.probe_kind,
                server.probe_name,
                server.threshold.disk,
            )
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        self.threshold = threshold.disk

    def parse(self, lines: list[str]) -> None:
        if len(lines) != self.output_lines():
            raise MetricParseError("invalid disk output")
        if len(self.usage) != len(lines):
            self.usage = [ResourceUsage() for _ in lines]
        for index, line in enumerate(lines):
            fields = line.split(" ")
            if len(fields) < 4:
                raise MetricParseError("invalid disk output")
            self.usage[index] = ResourceUsage(
                used=str_int(fields[0]),
                total=str_int(fields[1]),
                usage=str_float(fields[2][:-1]),
                tag=fields[3],
            )

    def usage_info(self) -> str:
        return "Disk: " + ", ".join(f"`{disk.tag}` {disk.usage:.2f}%" for disk in self.usage)

    def check_threshold(self) -> tuple[bool, str]:
        low_disks = [
            disk.tag
            for disk in self.usage
            if self.threshold > 0 and self.threshold <= disk.usage / 100
        ]
        if low_disks:
            return False, f"Disk Space threshold alert! - [{', '.join(low_disks)}]"
        return True, ""