from types import SimpleNamespace

import pytest

from probekit.host.basic import Basic
from probekit.host.common import MetricParseError
from probekit.host.threshold import Threshold


def _server():
    return SimpleNamespace(
        threshold=Threshold(), probe_kind="host", probe_name="dummy host", probe_tag="server"
    )


def test_parse_host_info():
    b = Basic()
    b.parse(["t01", "Ubuntu", "4"])
    assert b.hostname == "t01"
    assert b.os == "Ubuntu"
    assert b.core == 4


def test_bad_parse():
    with pytest.raises(MetricParseError, match="invalid basic output"):
        Basic().parse([])


def test_threshold_is_always_fine():
    b = Basic()
    server = _server()
    b.config(server)
    assert server.threshold == Threshold()
    assert b.check_threshold() == (True, "")
    assert b.usage_info() == ""


def test_command_has_one_line_per_output():
    b = Basic()
    assert b.output_lines() == 3
    assert len(b.command().split("\n")) == b.output_lines()
    assert b.name == "basic"