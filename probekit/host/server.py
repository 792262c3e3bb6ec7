"""A host probe server: builds the metrics command and checks its output."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field

from probekit.host.common import HostMetric, MetricParseError, add_message
from probekit.host.info import Info
from probekit.host.threshold import Threshold
from probekit.textcheck import check_empty

__all__ = ["HostServer"]

logger = logging.getLogger(__name__)


@dataclass
class HostServer:
    """One monitored host with its thresholds and disks."""

    probe_name: str = ""
    host: str = ""
    threshold: Threshold = field(default_factory=Threshold)
    disks: list[str] = field(default_factory=list)
    probe_kind: str = ""
    probe_tag: str = ""
    command: str = ""
    endpoint: str = ""
    info: Info = field(default_factory=Info, repr=False)

    _metrics: list[HostMetric] = field(default_factory=list, init=False, repr=False)
    _output_lines: int = field(default=0, init=False, repr=False)

    def config(self) -> None:
        """Configure every metric and combine their commands."""
        self.probe_kind = "host"
        self.probe_tag = "server"
        self._metrics = self.info.metrics()
        self._output_lines = 0
        self.command = ""
        for metric in self._metrics:
            metric.config(self)
            self.command += metric.command() + "\n"
            self._output_lines += metric.output_lines()
            logger.debug(
                "[%s / %s] - metric [%s] configured!", self.probe_kind, self.probe_name, metric.name
            )
        logger.debug("[%s / %s]\n%s", self.probe_kind, self.probe_name, self.command)
        self.endpoint = str(self.threshold)

    def parse_host_info(self, output: str) -> Info:
        """Parse the combined command output into the metrics."""
        lines = output.split("\n")
        if len(lines) < self._output_lines:
            raise MetricParseError("invalid output lines")
        remaining = iter(lines)
        for metric in self._metrics:
            metric.parse(list(itertools.islice(remaining, metric.output_lines())))
        return self.info

    def usage(self) -> str:
        """Summary of all resource usages."""
        head = "".join(
            text + " - " for text in (m.usage_info() for m in self._metrics[:-1]) if text
        )
        last = self._metrics[-1].usage_info() if self._metrics else ""
        return f" ( {head}{last} )"

    def check_threshold(self) -> tuple[bool, str]:
        """Check every metric against its threshold."""
        status = True
        message = ""
        for metric in self._metrics:
            ok, text = metric.check_threshold()
            if not ok:
                status = False
                message = add_message(message, text)
        if message == "":
            message = "Fine!"
        return status, message + self.usage()

    def check_output(self, output: str) -> tuple[bool, str]:
        """Parse the command output and return (ok, message)."""
        logger.debug("[%s / %s] - %s", self.probe_kind, self.probe_name, check_empty(output))
        try:
            info = self.parse_host_info(output)
        except MetricParseError as exc:
            logger.error("[%s / %s] %s", self.probe_kind, self.probe_name, exc)
            return False, f"Prase the output failed: {exc}"
        logger.debug("[%s / %s] - %r", self.probe_kind, self.probe_name, info)
        return self.check_threshold()