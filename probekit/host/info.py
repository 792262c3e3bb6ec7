"""All metrics gathered from a host."""

from __future__ import annotations

from dataclasses import dataclass, field

from probekit.host.basic import Basic
from probekit.host.common import HostMetric
from probekit.host.cpu import CPU
from probekit.host.disk import Disks
from probekit.host.load import Load
from probekit.host.mem import Mem

__all__ = ["Info"]


@dataclass
class Info:
    """The host's basic information, CPU, memory, disks and load average."""

    basic: Basic = field(default_factory=Basic)
    cpu: CPU = field(default_factory=CPU)
    memory: Mem = field(default_factory=Mem)
    disks: Disks = field(default_factory=Disks)
    load: Load = field(default_factory=Load)

    @property
    def hostname(self) -> str:
        return self.basic.hostname

    @property
    def os(self) -> str:
        return self.basic.os

    @property
    def core(self) -> int:
        return self.basic.core

    def metrics(self) -> list[HostMetric]:
        """Every metric of the host, in the order their output is printed."""
        return [self.basic, self.cpu, self.memory, self.disks, self.load]