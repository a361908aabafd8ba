from __future__ import annotations

import logging

import pytest

from outcomes.config import config_scope
from outcomes.telemetry import SimpleReporter, TelemetryContext, TelemetryReporter

pytestmark = pytest.mark.unit


def test_disabled_context_is_shared_no_op() -> None:
    ctx = TelemetryContext(enabled=False)
    assert ctx is TelemetryContext(enabled=False)
    assert not ctx.is_enabled
    with ctx("anything") as inner:
        inner.count("ignored")


def test_enabled_follows_config() -> None:
    with config_scope(telemetry_enabled=True):
        assert TelemetryContext().is_enabled
    assert not TelemetryContext().is_enabled


def test_nested_scopes_build_dotted_paths() -> None:
    reporter = SimpleReporter()
    ctx = TelemetryContext(reporter, enabled=True)
    with ctx("outer"), ctx("inner"):
        ctx.count("hits", 2)

    assert set(reporter.timings) == {"outer", "outer.inner"}
    _, meta = reporter.timings["outer.inner"][0]
    assert meta["parent_scope"] == "outer"
    assert reporter.total("outer.inner.hits") == 2
    _, metric_meta = reporter.metrics["outer.inner.hits"][0]
    assert metric_meta["metric_type"] == "counter"


def test_empty_scope_name_rejected() -> None:
    ctx = TelemetryContext(SimpleReporter(), enabled=True)
    with pytest.raises(ValueError, match="non-empty"), ctx(""):
        pass


def test_failing_reporter_is_logged_not_raised(caplog) -> None:
    class Broken:
        def record_timing(self, scope, duration, **metadata):
            raise RuntimeError("reporter down")

        def record_metric(self, scope, value, **metadata):
            raise RuntimeError("reporter down")

    assert isinstance(Broken(), TelemetryReporter)
    ctx = TelemetryContext(Broken(), enabled=True)
    with caplog.at_level(logging.ERROR, logger="outcomes"):
        with ctx("work"):
            ctx.count("n")
    assert caplog.text.count("reporter down") >= 2


def test_reporter_reset_and_snapshot() -> None:
    reporter = SimpleReporter()
    reporter.record_metric("m", 1)
    assert reporter.as_dict() == {"timings": {}, "metrics": {"m": [(1, {})]}}
    reporter.reset()
    assert reporter.as_dict() == {"timings": {}, "metrics": {}}
