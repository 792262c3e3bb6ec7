"""Basic host information: host name, operating system and core count."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from probekit.host.common import HostMetric, MetricParseError, str_int
from probekit.host.threshold import Threshold

__all__ = ["Basic"]


@dataclass
class Basic(HostMetric):
    """Host name, OS name and number of processors."""

    name: ClassVar[str] = "basic"

    hostname: str = ""
    os: str = ""
    core: int = 0

    def command(self) -> str:
        return (
            "hostname;\n"
            "awk -F= '/^NAME/{print $2}' /etc/os-release | tr -d '\\\"';\n"
            "grep -c ^processor /proc/cpuinfo;"
        )

    def output_lines(self) -> int:
        return 3

    def config(self, server: Any) -> None:
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        """Basic information has no threshold."""

    def parse(self, lines: list[str]) -> None:
        if len(lines) < self.output_lines():
            raise MetricParseError("invalid basic output")
        self.hostname = lines[0]
        self.os = lines[1]
        self.core = str_int(lines[2])

    def usage_info(self) -> str:
        return ""

    def check_threshold(self) -> tuple[bool, str]:
        return True, ""