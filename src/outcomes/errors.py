"""Exception hierarchy for outcomes.

Each error kind also inherits the closest built-in so callers can catch it
with plain ``except ValueError`` / ``except LookupError`` where that reads
better than the library type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class OutcomesError(Exception):
    """Base exception for all outcomes errors."""

    def __init__(self, message: str | None, *, hint: str | None = None) -> None:
        self.hint = hint
        super().__init__(str(message) if message is not None else "None")

    def __str__(self) -> str:
        """Return the message followed by the hint, when one is set."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(OutcomesError):
    """Configuration validation or resolution failed."""


class InvalidArgumentError(OutcomesError, ValueError):
    """A required value or function was None where it is forbidden."""


class NoSuchElementError(OutcomesError, LookupError):
    """Extraction attempted on a variant that holds no value."""


class IllegalStateError(OutcomesError, RuntimeError):
    """An operation violates a single-assignment invariant."""


class UnsupportedOperationError(OutcomesError, NotImplementedError):
    """The operation is meaningless for the current variant."""


HINTS = {
    "none_value": "Use Option.of() when the value may be None.",
    "already_set": "A WormCell accepts exactly one set() or set_unknown() call.",
    "success_with_error": "Use Outcome.failure() to wrap an exception.",
    "not_an_error": "Failure wraps exception instances only.",
}


def walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        context = cur.__context__
        if isinstance(context, BaseException) and not cur.__suppress_context__:
            stack.append(context)
        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)


__all__ = [
    "HINTS",
    "ConfigurationError",
    "IllegalStateError",
    "InvalidArgumentError",
    "NoSuchElementError",
    "OutcomesError",
    "UnsupportedOperationError",
    "walk_exception_chain",
]
