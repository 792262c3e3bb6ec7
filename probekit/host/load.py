"""Load average of the host, normalised by the number of cores."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, ClassVar

from probekit.host.common import HostMetric, MetricParseError, str_float, str_int
from probekit.host.threshold import DEFAULT_LOAD_THRESHOLD, Threshold

__all__ = ["Load"]

logger = logging.getLogger(__name__)

_KEYS = ("m1", "m5", "m15")


def _per_core(value: float, core: int) -> float:
    if core:
        return value / core
    if value == 0 or math.isnan(value):
        return math.nan
    return math.copysign(math.inf, value)


@dataclass
class Load(HostMetric):
    """The 1, 5 and 15 minute load averages and the core count."""

    name: ClassVar[str] = "load"

    core: int = 0
    metrics: dict[str, float] = field(default_factory=dict)
    threshold: dict[str, float] | None = None

    def command(self) -> str:
        return "grep -c ^processor /proc/cpuinfo;\ncat /proc/loadavg | awk '{print $1,$2,$3}';"

    def output_lines(self) -> int:
        return 2

    def config(self, server: Any) -> None:
        self.metrics = {}
        load = server.threshold.load
        if load is None:
            server.threshold.load = {key: DEFAULT_LOAD_THRESHOLD for key in _KEYS}
            logger.debug(
                "[%s / %s] All of load average threshold is not set, using default value: %.2f",
                server.probe_kind,
                server.probe_name,
                DEFAULT_LOAD_THRESHOLD,
            )
        else:
            for key, value in list(load.items()):
                load[key.lower()] = value
            for key in _KEYS:
                if key not in load:
                    load[key] = DEFAULT_LOAD_THRESHOLD
                    logger.debug(
                        "[%s / %s] Load average threshold for %s is not set, "
                        "using default value: %.2f",
                        server.probe_kind,
                        server.probe_name,
                        key,
                        load[key],
                    )
        self.set_threshold(server.threshold)

    def set_threshold(self, threshold: Threshold) -> None:
        self.threshold = threshold.load

    def parse(self, lines: list[str]) -> None:
        if len(lines) < self.output_lines():
            raise MetricParseError("invalid load average output")
        self.core = str_int(lines[0])
        load = lines[1].split(" ")
        if len(load) < 3:
            raise MetricParseError("invalid load average output")
        for key, text in zip(_KEYS, load):
            self.metrics[key] = str_float(text)

    def usage_info(self) -> str:
        return "Load: " + "/".join(f"{value:.2f}" for value in self.metrics.values())

    def check_threshold(self) -> tuple[bool, str]:
        limits = self.threshold or {}
        for key, value in self.metrics.items():
            if _per_core(value, self.core) > limits.get(key, 0.0):
                return False, f"Load Average threshold {key} alert! - {value:.2f}"
        return True, ""