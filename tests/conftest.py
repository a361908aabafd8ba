"""Pytest configuration and fixtures.

Provides environment isolation for ``OUTCOMES_*`` settings and telemetry
helpers. Fixtures are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import os

import pytest

from outcomes.config import reset_config_cache
from outcomes.telemetry import SimpleReporter, TelemetryContext

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_outcomes_env(monkeypatch):
    """Clear OUTCOMES_* variables and the cached config around each test."""
    for key in list(os.environ.keys()):
        if key.startswith("OUTCOMES_"):
            monkeypatch.delenv(key, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


# =============================================================================
# Telemetry
# =============================================================================


@pytest.fixture
def reporter() -> SimpleReporter:
    """In-memory reporter for asserting on recorded metrics."""
    return SimpleReporter()


@pytest.fixture
def telemetry(reporter):
    """Enabled telemetry context wired to the ``reporter`` fixture."""
    return TelemetryContext(reporter, enabled=True)
