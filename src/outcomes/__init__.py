"""outcomes: tri-state optionals, Outcome (Try) values and write-once cells.

Public API:
    - Option: Present / Empty / Unknown optional value
    - Outcome: Success / Failure result of a computation, plus ``safe``
    - WormCell: thread-safe write-once, read-many cell over ``Option``
    - Errors: ``OutcomesError`` and its error kinds
"""

from __future__ import annotations

import logging

from outcomes.config import config_scope, get_config, resolve_config
from outcomes.core.option import Option, OptionTag
from outcomes.core.outcome import Outcome, OutcomeTag, safe
from outcomes.core.worm import WormCell
from outcomes.errors import (
    ConfigurationError,
    IllegalStateError,
    InvalidArgumentError,
    NoSuchElementError,
    OutcomesError,
    UnsupportedOperationError,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("outcomes")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("outcomes").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "IllegalStateError",
    "InvalidArgumentError",
    "NoSuchElementError",
    "Option",
    "OptionTag",
    "Outcome",
    "OutcomeTag",
    "OutcomesError",
    "UnsupportedOperationError",
    "WormCell",
    "config_scope",
    "get_config",
    "resolve_config",
    "safe",
]
