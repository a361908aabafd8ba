"""Unit tests for WormCell state transitions."""

from __future__ import annotations

import pytest

from outcomes import IllegalStateError, InvalidArgumentError, Option, WormCell

pytestmark = pytest.mark.unit


class TestLifecycle:
    def test_new_cell_is_unset(self):
        cell: WormCell[int] = WormCell.create()
        assert cell.get() == Option.empty()
        assert not cell.is_set()
        assert not cell.is_unknown()
        assert not cell.if_present()

    def test_set_transitions_to_present(self):
        cell: WormCell[int] = WormCell.create()
        cell.set(5)
        assert cell.get() == Option.present(5)
        assert cell.is_set()
        assert not cell.is_unknown()
        assert cell.if_present()

    def test_unknown_scenario(self):
        cell: WormCell[int] = WormCell.create()
        assert (cell.is_set(), cell.is_unknown(), cell.if_present()) == (
            False,
            False,
            False,
        )

        cell.set_unknown()
        assert (cell.is_set(), cell.is_unknown(), cell.if_present()) == (
            False,
            True,
            True,
        )

        with pytest.raises(IllegalStateError, match="already set to unknown"):
            cell.set(5)
        assert cell.get() == Option.unknown()

    def test_second_set_fails_and_keeps_first_value(self):
        cell = WormCell.of("first")
        with pytest.raises(IllegalStateError, match="already set") as exc:
            cell.set("second")
        assert exc.value.hint is not None
        assert cell.get() == Option.present("first")

    def test_set_unknown_on_present_cell_fails(self):
        cell = WormCell.of(1)
        with pytest.raises(IllegalStateError):
            cell.set_unknown()
        assert cell.get() == Option.present(1)

    def test_set_unknown_twice_fails(self):
        cell: WormCell[int] = WormCell.unknown()
        with pytest.raises(IllegalStateError):
            cell.set_unknown()
        assert cell.is_unknown()

    def test_illegal_state_is_a_runtime_error(self):
        cell = WormCell.of(1)
        with pytest.raises(RuntimeError):
            cell.set(2)


class TestNoneValues:
    def test_set_none_is_invalid_argument(self):
        cell: WormCell[int] = WormCell.create()
        with pytest.raises(InvalidArgumentError):
            cell.set(None)  # type: ignore[arg-type]

    def test_rejected_none_leaves_cell_eligible(self):
        cell: WormCell[int] = WormCell.create()
        with pytest.raises(InvalidArgumentError):
            cell.set(None)  # type: ignore[arg-type]
        cell.set(3)
        assert cell.get() == Option.present(3)

    def test_set_none_on_set_cell_reports_invalid_argument_first(self):
        cell = WormCell.of(1)
        with pytest.raises(InvalidArgumentError):
            cell.set(None)

    def test_of_none_fails(self):
        with pytest.raises(InvalidArgumentError):
            WormCell.of(None)


class TestFactoriesAndStrings:
    def test_factories(self):
        assert WormCell.create().get().is_empty()
        assert WormCell.of(2).get() == Option.present(2)
        assert WormCell.unknown().get().is_unknown()

    def test_cells_are_independent(self):
        a: WormCell[int] = WormCell.create()
        b: WormCell[int] = WormCell.create()
        a.set(1)
        assert not b.if_present()

    def test_str(self):
        assert str(WormCell.of(3)) == "WormCell[Option[3]]"
        assert str(WormCell.create()) == "WormCell[Option.empty]"

    def test_get_returns_immutable_option(self):
        cell = WormCell.of(1)
        snapshot = cell.get()
        with pytest.raises(AttributeError):
            snapshot.tag = None  # type: ignore[assignment, misc]
        assert cell.get() == Option.present(1)


class TestTelemetry:
    def test_counters_record_transitions_and_rejections(self, telemetry, reporter):
        cell: WormCell[int] = WormCell.create(telemetry=telemetry)
        cell.set(1)
        with pytest.raises(IllegalStateError):
            cell.set(2)
        with pytest.raises(IllegalStateError):
            cell.set_unknown()

        assert reporter.total("worm.set") == 1
        assert reporter.total("worm.rejected") == 2
        assert len(reporter.timings["worm.write"]) == 3

    def test_unknown_counter(self, telemetry, reporter):
        WormCell.unknown(telemetry=telemetry)
        assert reporter.total("worm.set_unknown") == 1

    def test_disabled_by_default(self):
        cell = WormCell.of(1)
        assert not cell._telemetry.is_enabled
