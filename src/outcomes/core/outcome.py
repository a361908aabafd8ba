"""Outcome (Try) type for composable error handling.

An ``Outcome`` is either a ``Success`` wrapping a non-``None`` value or a
``Failure`` wrapping an exception. ``map``, ``flat_map`` and ``filter``
catch ``Exception`` raised by the user function and return it as a Failure,
so a chain of combinators needs error handling only where the value is
finally extracted. ``MemoryError`` is re-raised, and ``BaseException``
subclasses outside ``Exception`` are never caught.
"""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
import enum
import functools
import logging
import traceback as _traceback
import typing

from outcomes.config import get_config
from outcomes.errors import (
    HINTS,
    InvalidArgumentError,
    NoSuchElementError,
    UnsupportedOperationError,
    walk_exception_chain,
)

from ._validation import _callable_error, _require, _require_callable
from .option import Option

logger = logging.getLogger(__name__)


class OutcomeTag(enum.Enum):
    """Variant tag of an ``Outcome``."""

    SUCCESS = "success"
    FAILURE = "failure"


def _report_misuse(message: str, *, hint: str) -> None:
    """Raise in strict mode, otherwise log a warning unless disabled."""
    cfg = get_config()
    if cfg.strict:
        raise InvalidArgumentError(message, hint=hint)
    if cfg.warn_on_misuse:
        logger.warning("%s. %s", message, hint)


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Outcome[T]:
    """Immutable result of a computation: Success(value) or Failure(error).

    Two Failures are equal when they wrap the same exception object, since
    Python exceptions compare by identity.
    """

    tag: OutcomeTag
    _value: T | None = None
    _error: BaseException | None = None

    def __post_init__(self) -> None:
        match self.tag:
            case OutcomeTag.SUCCESS:
                _require(
                    condition=self._value is not None and self._error is None,
                    message="Success wraps exactly one non-None value",
                    field_name="value",
                )
            case OutcomeTag.FAILURE:
                _require(
                    condition=isinstance(self._error, BaseException)
                    and self._value is None,
                    message="Failure wraps exactly one exception",
                    field_name="error",
                )
            case _:
                raise InvalidArgumentError(
                    f"tag: must be an OutcomeTag, got {self.tag!r}"
                )

    # --- Factories ---

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        """Wrap a successful *value*.

        Passing an exception is treated as a mistaken call: a warning is logged
        and a Failure is returned (strict mode raises instead).

        Raises:
            InvalidArgumentError: If *value* is ``None``.
        """
        if isinstance(value, BaseException):
            _report_misuse(
                "an exception should not be passed to Outcome.success()",
                hint=HINTS["success_with_error"],
            )
            return cls.failure(value)
        if value is None:
            raise InvalidArgumentError(
                "value cannot be None", hint=HINTS["none_value"]
            )
        return cls(OutcomeTag.SUCCESS, value)

    @classmethod
    def failure(cls, error: BaseException | None) -> Outcome[T]:
        """Wrap *error*.

        ``None`` is replaced by an ``InvalidArgumentError`` describing the
        mistake, and a warning is logged (strict mode raises instead).

        Raises:
            InvalidArgumentError: If *error* is not an exception.
        """
        if error is None:
            _report_misuse(
                "Outcome.failure() called with None",
                hint=HINTS["not_an_error"],
            )
            substitute = InvalidArgumentError("error cannot be None")
            return cls(OutcomeTag.FAILURE, _error=substitute)
        if not isinstance(error, BaseException):
            raise InvalidArgumentError(
                f"error must be an exception, got {type(error).__name__}",
                hint=HINTS["not_an_error"],
            )
        return cls(OutcomeTag.FAILURE, _error=error)

    @classmethod
    def attempt(
        cls, fn: Callable[..., T], /, *args: typing.Any, **kwargs: typing.Any
    ) -> Outcome[T]:
        """Call ``fn(*args, **kwargs)`` and capture the result or the error.

        A function returning ``None`` yields a Failure; return an ``Option``
        for results that may be absent.
        """
        err = _callable_error(fn, "fn")
        if err is not None:
            return cls.failure(err)
        try:
            return cls.success(fn(*args, **kwargs))
        except MemoryError:
            raise
        except Exception as e:
            return cls.failure(e)

    # --- State ---

    def is_success(self) -> bool:
        return self.tag is OutcomeTag.SUCCESS

    def is_failure(self) -> bool:
        return self.tag is OutcomeTag.FAILURE

    # --- Extraction ---

    def get(self) -> T:
        """Return the value of a Success, or raise the error of a Failure."""
        match self.tag:
            case OutcomeTag.SUCCESS:
                return typing.cast("T", self._value)
            case OutcomeTag.FAILURE:
                raise typing.cast("BaseException", self._error)

    def get_or_else(self, supplier: Callable[[], T]) -> T:
        """Return the value of a Success, or call *supplier* for a Failure."""
        if self.is_success():
            return typing.cast("T", self._value)
        _require_callable(supplier, "supplier")
        return supplier()

    def or_else(self, alternative: T) -> T:
        return typing.cast("T", self._value) if self.is_success() else alternative

    # --- Combinators ---

    def map[U](self, fn: Callable[[T], U]) -> Outcome[U]:
        """Apply *fn* to a Success value, capturing any error as a Failure.

        A Failure is returned unchanged and *fn* is not called.
        """
        match self.tag:
            case OutcomeTag.FAILURE:
                return typing.cast("Outcome[U]", self)
            case OutcomeTag.SUCCESS:
                err = _callable_error(fn, "fn")
                if err is not None:
                    return Outcome.failure(err)
                try:
                    return Outcome.success(fn(typing.cast("T", self._value)))
                except MemoryError:
                    raise
                except Exception as e:
                    return Outcome.failure(e)

    def flat_map[U](self, fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
        """Like ``map``, but *fn* returns an Outcome which is returned as is."""
        match self.tag:
            case OutcomeTag.FAILURE:
                return typing.cast("Outcome[U]", self)
            case OutcomeTag.SUCCESS:
                err = _callable_error(fn, "fn")
                if err is not None:
                    return Outcome.failure(err)
                try:
                    result = fn(typing.cast("T", self._value))
                except MemoryError:
                    raise
                except Exception as e:
                    return Outcome.failure(e)
                if not isinstance(result, Outcome):
                    return Outcome.failure(
                        InvalidArgumentError(
                            f"fn: must return an Outcome, got {type(result).__name__}"
                        )
                    )
                return result

    def filter(self, predicate: Callable[[T], bool]) -> Outcome[T]:
        """Keep a Success only if *predicate* holds.

        A mismatch becomes a Failure of ``NoSuchElementError``. A Failure is
        returned unchanged and *predicate* is not called.
        """
        match self.tag:
            case OutcomeTag.FAILURE:
                return self
            case OutcomeTag.SUCCESS:
                err = _callable_error(predicate, "predicate")
                if err is not None:
                    return Outcome.failure(err)
                value = typing.cast("T", self._value)
                try:
                    holds = predicate(value)
                except MemoryError:
                    raise
                except Exception as e:
                    return Outcome.failure(e)
                if holds:
                    return self
                return Outcome.failure(
                    NoSuchElementError(f"Predicate does not hold for {value!r}")
                )

    def failed(self) -> Outcome[BaseException]:
        """Invert: a Failure becomes a Success holding its error.

        A Success has no error to extract and becomes a Failure of
        ``UnsupportedOperationError``.
        """
        match self.tag:
            case OutcomeTag.FAILURE:
                return Outcome(OutcomeTag.SUCCESS, self._error)
            case OutcomeTag.SUCCESS:
                return Outcome.failure(
                    UnsupportedOperationError("Success has no error to invert")
                )

    def to_optional(self) -> Option[T]:
        """Success becomes Present; Failure becomes Empty and drops the error."""
        match self.tag:
            case OutcomeTag.SUCCESS:
                return Option.present(typing.cast("T", self._value))
            case OutcomeTag.FAILURE:
                return Option.empty()

    # --- Failure introspection ---

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def message(self) -> str | None:
        return None if self._error is None else str(self._error)

    @property
    def cause(self) -> BaseException | None:
        """The direct cause of the error: explicit ``__cause__``, else implicit context."""
        if self._error is None:
            return None
        if self._error.__cause__ is not None:
            return self._error.__cause__
        if self._error.__suppress_context__:
            return None
        return self._error.__context__

    def causes(self) -> tuple[BaseException, ...]:
        """The error's cause chain, nearest first, excluding the error itself."""
        if self._error is None:
            return ()
        return tuple(walk_exception_chain(self._error))[1:]

    @property
    def traceback(self) -> str | None:
        """Formatted traceback of the captured error."""
        if self._error is None:
            return None
        return "".join(_traceback.format_exception(self._error))

    def is_instance(
        self, kind: type[BaseException] | tuple[type[BaseException], ...]
    ) -> bool:
        """True for a Failure whose error is an instance of *kind*."""
        return self._error is not None and isinstance(self._error, kind)

    def __str__(self) -> str:
        match self.tag:
            case OutcomeTag.SUCCESS:
                return f"Success[{self._value}]"
            case OutcomeTag.FAILURE:
                return f"Failure[{self._error!r}]"

    __repr__ = __str__


def safe[**P, R](func: Callable[P, R]) -> Callable[P, Outcome[R]]:
    """Decorate *func* so it returns an Outcome instead of raising.

    Example:
        @safe
        def parse(raw: str) -> int:
            return int(raw)

        parse("42")    # Success[42]
        parse("nope")  # Failure[ValueError(...)]
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Outcome[R]:
        return Outcome.attempt(func, *args, **kwargs)

    return wrapper


__all__ = ["Outcome", "OutcomeTag", "safe"]
