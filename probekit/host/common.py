"""Shared pieces of the host metrics: the metric interface and value parsing."""

from __future__ import annotations

import math
import re
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from probekit.host.threshold import Threshold

__all__ = [
    "ResourceUsage",
    "HostMetric",
    "MetricParseError",
    "first",
    "str_float",
    "str_int",
    "add_message",
]

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT_RE = re.compile(r"[+-]?[0-9]+")


class MetricParseError(ValueError):
    """The command output for a metric could not be parsed."""


@dataclass
class ResourceUsage:
    """Used and total amounts of a resource, with the usage percentage."""

    used: int = 0
    total: int = 0
    usage: float = 0.0
    tag: str = ""


class HostMetric(ABC):
    """A metric gathered from a host by running a shell command."""

    name: ClassVar[str] = ""

    @abstractmethod
    def command(self) -> str:
        """The shell command that prints the metric."""

    @abstractmethod
    def output_lines(self) -> int:
        """Number of output lines the command prints."""

    @abstractmethod
    def config(self, server: Any) -> None:
        """Configure the metric from the server settings."""

    @abstractmethod
    def set_threshold(self, threshold: Threshold) -> None:
        """Take the metric's threshold."""

    @abstractmethod
    def parse(self, lines: list[str]) -> None:
        """Parse the command output; raise MetricParseError on bad input."""

    @abstractmethod
    def usage_info(self) -> str:
        """A short human-readable summary of the usage."""

    @abstractmethod
    def check_threshold(self) -> tuple[bool, str]:
        """Return (ok, message) against the threshold."""


def first(text: str) -> str:
    """The first space-separated field of the trimmed text."""
    return text.strip().split(" ")[0]


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def str_float(text: str) -> float:
    """Parse a single-precision float; 0.0 when the text is not a number."""
    stripped = text.strip()
    if "_" in stripped:
        return 0.0
    try:
        value = float(stripped)
    except ValueError:
        return 0.0
    return _to_float32(value)


def str_int(text: str) -> int:
    """Parse a 32-bit integer, clamped to range; 0 when the text is not a number."""
    stripped = text.strip()
    if not _INT_RE.fullmatch(stripped):
        return 0
    return max(_INT32_MIN, min(_INT32_MAX, int(stripped)))


def add_message(msg: str, message: str) -> str:
    """Join two messages with " | "; an empty part yields the second message."""
    if msg == "" or message == "":
        return message
    return msg + " | " + message