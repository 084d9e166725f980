"""Tests for the slot grid generator."""

from __future__ import annotations

import pytest

from arena.domain.models import OperatingWindow
from arena.services.slots import (
    DEFAULT_OPERATING_WINDOW,
    SlotGenerator,
    normalize_duration,
)

_NINE_TO_NINE = OperatingWindow.from_strings("09:00", "21:00")


def _starts(slots) -> list[str]:
    return [s.start_label for s in slots]


def test_two_hour_grid_stops_at_closing_time():
    slots = SlotGenerator().generate(_NINE_TO_NINE, 120)

    assert len(slots) == 11
    assert slots[0].start_label == "09:00"
    assert slots[-1].start_label == "19:00"
    assert slots[-1].end_label == "21:00"
    assert "20:00" not in _starts(slots)


def test_slots_are_ascending_without_duplicates():
    slots = SlotGenerator().generate(_NINE_TO_NINE, 60)
    starts = [s.start for s in slots]
    assert starts == sorted(set(starts))


def test_window_shorter_than_duration_yields_no_slots():
    window = OperatingWindow.from_strings("09:00", "10:30")
    assert SlotGenerator().generate(window, 120) == []


def test_closed_day_yields_no_slots():
    assert SlotGenerator().generate(OperatingWindow.closed(), 60) == []


def test_missing_window_uses_default_hours():
    slots = SlotGenerator().generate(None, 60)

    assert DEFAULT_OPERATING_WINDOW.opening_time == 6 * 60
    assert DEFAULT_OPERATING_WINDOW.closing_time == 23 * 60
    assert slots[0].start_label == "06:00"
    assert slots[-1].end_label == "23:00"
    assert len(slots) == 17


def test_injected_default_window():
    generator = SlotGenerator(default_window=OperatingWindow.from_strings("10:00", "12:00"))
    assert _starts(generator.generate(None, 60)) == ["10:00", "11:00"]


@pytest.mark.parametrize("duration", [0, -30, None])
def test_non_positive_duration_falls_back_to_one_hour(duration):
    slots = SlotGenerator().generate(_NINE_TO_NINE, duration)
    assert len(slots) == 12
    assert all(s.duration_minutes == 60 for s in slots)


def test_normalize_duration():
    assert normalize_duration(0) == 60
    assert normalize_duration(-5) == 60
    assert normalize_duration(90) == 90


def test_window_ending_at_midnight():
    window = OperatingWindow.from_strings("22:00", "24:00")
    slots = SlotGenerator().generate(window, 60)
    assert [(s.start_label, s.end_label) for s in slots] == [
        ("22:00", "23:00"),
        ("23:00", "24:00"),
    ]


def test_non_hour_opening_time_keeps_step_from_opening():
    window = OperatingWindow.from_strings("09:30", "12:30")
    assert _starts(SlotGenerator().generate(window, 60)) == ["09:30", "10:30", "11:30"]


def test_shorter_duration_never_yields_fewer_slots():
    generator = SlotGenerator()
    counts = [len(generator.generate(_NINE_TO_NINE, hours * 60)) for hours in range(1, 6)]
    assert counts == sorted(counts, reverse=True)


def test_step_must_be_positive():
    with pytest.raises(ValueError):
        SlotGenerator(step_minutes=0)
