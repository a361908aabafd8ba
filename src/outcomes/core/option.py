"""Tri-state Option.

An ``Option`` is exactly one of:

- ``Present`` - wraps a value that is never ``None``
- ``Empty`` - it is known that no value exists
- ``Unknown`` - a value may exist but cannot currently be determined

Keeping Unknown apart from Empty lets consumers tell "not computed" from
"computed, and there is no answer". Instances are immutable; Empty and
Unknown are shared singletons but equality is structural, never identity.

Combinators validate their function arguments eagerly and let errors raised
by those functions propagate. ``Outcome`` is the type that contains errors.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
import dataclasses
import enum
import typing

from outcomes.errors import HINTS, InvalidArgumentError, NoSuchElementError

from ._validation import _require, _require_callable

if typing.TYPE_CHECKING:
    from .outcome import Outcome


class OptionTag(enum.Enum):
    """Variant tag of an ``Option``."""

    PRESENT = "present"
    EMPTY = "empty"
    UNKNOWN = "unknown"


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Option[T]:
    """Immutable tri-state optional value.

    Build instances with the factories, not the constructor:

        Option.present(3)   # Option[3]
        Option.of(None)     # Option.empty
        Option.unknown()    # Option.unknown
    """

    tag: OptionTag
    _value: T | None = None

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.tag, OptionTag),
            message=f"must be an OptionTag, got {self.tag!r}",
            field_name="tag",
        )
        match self.tag:
            case OptionTag.PRESENT:
                _require(
                    condition=self._value is not None,
                    message="Present cannot wrap None",
                    field_name="value",
                )
            case _:
                _require(
                    condition=self._value is None,
                    message=f"{self.tag.value} carries no value",
                    field_name="value",
                )

    # --- Factories ---

    @classmethod
    def present(cls, value: T) -> Option[T]:
        """Wrap *value*, which must not be ``None``.

        Raises:
            InvalidArgumentError: If *value* is ``None``.
        """
        if value is None:
            raise InvalidArgumentError(
                "Present cannot wrap None", hint=HINTS["none_value"]
            )
        return cls(OptionTag.PRESENT, value)

    @classmethod
    def of(cls, value: T | None) -> Option[T]:
        """Wrap *value*, mapping ``None`` to Empty (never to Unknown)."""
        return cls.empty() if value is None else cls(OptionTag.PRESENT, value)

    @classmethod
    def empty(cls) -> Option[T]:
        return typing.cast("Option[T]", _EMPTY)

    @classmethod
    def unknown(cls) -> Option[T]:
        return typing.cast("Option[T]", _UNKNOWN)

    # --- State ---

    def is_present(self) -> bool:
        return self.tag is OptionTag.PRESENT

    def is_empty(self) -> bool:
        return self.tag is OptionTag.EMPTY

    def is_unknown(self) -> bool:
        return self.tag is OptionTag.UNKNOWN

    # --- Extraction ---

    def get(self) -> T:
        """Return the wrapped value.

        Raises:
            NoSuchElementError: For Empty and Unknown.
        """
        match self.tag:
            case OptionTag.PRESENT:
                return typing.cast("T", self._value)
            case OptionTag.EMPTY:
                raise NoSuchElementError("Empty instances have no values")
            case OptionTag.UNKNOWN:
                raise NoSuchElementError("Unknown instances cannot have values")

    def or_else(self, alternative: T) -> T:
        return typing.cast("T", self._value) if self.is_present() else alternative

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        """Return the value, or the result of *supplier* for Empty and Unknown."""
        _require_callable(supplier, "supplier")
        return typing.cast("T", self._value) if self.is_present() else supplier()

    def or_else_raise(
        self, error_factory: Callable[[], BaseException] | None = None
    ) -> T:
        """Return the value, or raise.

        Without *error_factory* this behaves like ``get()``. With one, the
        exception it builds is raised for Empty and Unknown.
        """
        if error_factory is None:
            return self.get()
        _require_callable(error_factory, "error_factory")
        if self.is_present():
            return typing.cast("T", self._value)
        error = error_factory()
        _require(
            condition=isinstance(error, BaseException),
            message=f"must build an exception, got {type(error).__name__}",
            field_name="error_factory",
        )
        raise error

    # --- Combinators ---

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep a Present value only if *predicate* holds; otherwise Empty.

        Empty and Unknown are returned unchanged without calling *predicate*.
        """
        _require_callable(predicate, "predicate")
        match self.tag:
            case OptionTag.PRESENT:
                return self if predicate(typing.cast("T", self._value)) else _EMPTY
            case _:
                return self

    def map[U](self, fn: Callable[[T], U | None]) -> Option[U]:
        """Apply *fn* to a Present value; a ``None`` result becomes Empty.

        Empty stays Empty and Unknown stays Unknown.
        """
        _require_callable(fn, "fn")
        match self.tag:
            case OptionTag.PRESENT:
                return Option.of(fn(typing.cast("T", self._value)))
            case _:
                return typing.cast("Option[U]", self)

    def flat_map[U](self, fn: Callable[[T], Option[U]]) -> Option[U]:
        """Apply *fn* to a Present value and return its Option as is."""
        _require_callable(fn, "fn")
        match self.tag:
            case OptionTag.PRESENT:
                result = fn(typing.cast("T", self._value))
                _require(
                    condition=isinstance(result, Option),
                    message=f"must return an Option, got {type(result).__name__}",
                    field_name="fn",
                )
                return result
            case _:
                return typing.cast("Option[U]", self)

    def or_(self, supplier: Callable[[], Option[T]]) -> Option[T]:
        """Return self when Present, else the Option built by *supplier*."""
        _require_callable(supplier, "supplier")
        match self.tag:
            case OptionTag.PRESENT:
                return self
            case _:
                result = supplier()
                _require(
                    condition=isinstance(result, Option),
                    message=f"must return an Option, got {type(result).__name__}",
                    field_name="supplier",
                )
                return result

    def if_present(self, action: Callable[[T], object]) -> None:
        _require_callable(action, "action")
        if self.is_present():
            action(typing.cast("T", self._value))

    def if_present_or_else(
        self, action: Callable[[T], object], fallback: Callable[[], object]
    ) -> None:
        """Call *action* with a Present value, or *fallback* for Empty and Unknown."""
        _require_callable(action, "action")
        _require_callable(fallback, "fallback")
        if self.is_present():
            action(typing.cast("T", self._value))
        else:
            fallback()

    # --- Projections ---

    def __iter__(self) -> Iterator[T]:
        if self.tag is OptionTag.PRESENT:
            yield typing.cast("T", self._value)

    def stream(self) -> Iterator[T]:
        """Return a fresh lazy iterator: one element for Present, none otherwise."""
        return iter(self)

    def to_outcome(self) -> Outcome[T]:
        """Convert to an Outcome.

        Present becomes Success. Empty and Unknown both become a Failure of
        ``NoSuchElementError``, so Unknown does not survive a round trip.
        """
        from .outcome import Outcome, OutcomeTag

        match self.tag:
            case OptionTag.PRESENT:
                return Outcome(OutcomeTag.SUCCESS, self._value)
            case OptionTag.EMPTY:
                return Outcome.failure(NoSuchElementError("Option is empty"))
            case OptionTag.UNKNOWN:
                return Outcome.failure(NoSuchElementError("Option is unknown"))

    def __str__(self) -> str:
        match self.tag:
            case OptionTag.PRESENT:
                return f"Option[{self._value}]"
            case _:
                return f"Option.{self.tag.value}"

    __repr__ = __str__


_EMPTY: Option[typing.Any] = Option(OptionTag.EMPTY)
_UNKNOWN: Option[typing.Any] = Option(OptionTag.UNKNOWN)


__all__ = ["Option", "OptionTag"]
