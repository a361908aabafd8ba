"""Write-once, read-many (WORM) value cell.

A ``WormCell`` starts unset (its ``get()`` is ``Option.empty()``) and accepts
exactly one transition, to Present via ``set()`` or to Unknown via
``set_unknown()``. Both end states are terminal.

Writers serialize on the exclusive side of a reader-writer lock and check
the current state inside it, so the first writer to see the cell unset wins.
Every other writer, concurrent or later, gets ``IllegalStateError`` after
the lock has been released. Readers share the lock and only wait while a
write is in flight.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from outcomes.errors import HINTS, IllegalStateError, InvalidArgumentError
from outcomes.telemetry import TelemetryContext

from ._rwlock import ReadWriteLock
from .option import Option

if TYPE_CHECKING:
    from outcomes.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)


class WormCell[T]:
    """Thread-safe single-assignment cell holding a tri-state ``Option``.

    Example:
        cell: WormCell[int] = WormCell.create()
        cell.set(5)
        cell.get()   # Option[5]
        cell.set(6)  # raises IllegalStateError
    """

    __slots__ = ("_lock", "_telemetry", "_value")

    def __init__(self, *, telemetry: TelemetryContextProtocol | None = None) -> None:
        self._value: Option[T] = Option.empty()
        self._lock = ReadWriteLock()
        self._telemetry = telemetry if telemetry is not None else TelemetryContext()

    # --- Factories ---

    @classmethod
    def create(
        cls, *, telemetry: TelemetryContextProtocol | None = None
    ) -> WormCell[T]:
        """Return an unset cell."""
        return cls(telemetry=telemetry)

    @classmethod
    def of(
        cls, value: T, *, telemetry: TelemetryContextProtocol | None = None
    ) -> WormCell[T]:
        """Return a cell already set to *value*."""
        cell: WormCell[T] = cls(telemetry=telemetry)
        cell.set(value)
        return cell

    @classmethod
    def unknown(
        cls, *, telemetry: TelemetryContextProtocol | None = None
    ) -> WormCell[T]:
        """Return a cell already set to Unknown."""
        cell: WormCell[T] = cls(telemetry=telemetry)
        cell.set_unknown()
        return cell

    # --- Writes ---

    def set(self, value: T) -> None:
        """Set the cell to Present(*value*).

        Raises:
            InvalidArgumentError: If *value* is ``None``; the lock is not touched.
            IllegalStateError: If the cell is already set or unknown.
        """
        if value is None:
            raise InvalidArgumentError(
                "value cannot be None", hint=HINTS["none_value"]
            )
        self._transition(Option.present(value), "worm.set")

    def set_unknown(self) -> None:
        """Set the cell to Unknown.

        Raises:
            IllegalStateError: If the cell is already set or unknown.
        """
        self._transition(Option.unknown(), "worm.set_unknown")

    def _transition(self, target: Option[T], counter: str) -> None:
        with self._telemetry("worm.write"):
            with self._lock.write_locked():
                current = self._value
                accepted = current.is_empty()
                if accepted:
                    self._value = target

        # The write lock is released here, before any failure is reported.
        if not accepted:
            self._telemetry.count("worm.rejected")
            logger.debug("Rejected write of %s; cell holds %s", target, current)
            suffix = " to unknown" if current.is_unknown() else ""
            raise IllegalStateError(
                f"value is already set{suffix}", hint=HINTS["already_set"]
            )
        self._telemetry.count(counter)
        logger.debug("WormCell transitioned to %s", target)

    # --- Reads ---

    def get(self) -> Option[T]:
        """Return the current value: Empty while unset, else Present or Unknown."""
        with self._lock.read_locked():
            return self._value

    def is_set(self) -> bool:
        """True only when the cell holds a Present value."""
        with self._lock.read_locked():
            return self._value.is_present()

    def is_unknown(self) -> bool:
        with self._lock.read_locked():
            return self._value.is_unknown()

    def if_present(self) -> bool:
        """True once the cell has left the unset state, Present or Unknown."""
        with self._lock.read_locked():
            return not self._value.is_empty()

    def __str__(self) -> str:
        return f"WormCell[{self.get()}]"

    __repr__ = __str__


__all__ = ["WormCell"]
