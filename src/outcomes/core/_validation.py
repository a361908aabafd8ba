"""Internal validation helpers shared by the core types.

Centralizes argument checks so misuse fails at the call site with a
consistent error type and message.
"""

from __future__ import annotations

import typing

from outcomes.errors import InvalidArgumentError


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = InvalidArgumentError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _require_callable(func: typing.Any, field_name: str) -> None:
    _require(
        condition=func is not None,
        message="cannot be None",
        field_name=field_name,
    )
    _require(
        condition=callable(func),
        message=f"must be callable, got {type(func).__name__}",
        field_name=field_name,
    )


def _callable_error(func: typing.Any, field_name: str) -> InvalidArgumentError | None:
    """Return the error ``_require_callable`` would raise, without raising it."""
    try:
        _require_callable(func, field_name)
    except InvalidArgumentError as e:
        return e
    return None
