"""Alert thresholds of a host probe."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "DEFAULT_CPU_THRESHOLD",
    "DEFAULT_MEM_THRESHOLD",
    "DEFAULT_DISK_THRESHOLD",
    "DEFAULT_LOAD_THRESHOLD",
    "Threshold",
]

DEFAULT_CPU_THRESHOLD = 0.8
DEFAULT_MEM_THRESHOLD = 0.8
DEFAULT_DISK_THRESHOLD = 0.95
DEFAULT_LOAD_THRESHOLD = 0.8


@dataclass
class Threshold:
    """CPU, memory and disk fractions and the load-average limits."""

    cpu: float = 0.0
    mem: float = 0.0
    disk: float = 0.0
    load: dict[str, float] | None = None

    def __str__(self) -> str:
        load = "/".join(f"{v:.2f}" for v in (self.load or {}).values())
        return f"CPU: {self.cpu:.2f}, Mem: {self.mem:.2f}, Disk: {self.disk:.2f}, Load: {load}"