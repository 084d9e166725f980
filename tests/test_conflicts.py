"""Tests for the conflict-detection service."""

from __future__ import annotations

import datetime as dt

from arena.domain.models import BookingRecord, BookingStatus, TimeInterval
from arena.services.conflicts import find_conflicts, is_available

_DAY = dt.date(2025, 1, 1)


def _make_booking(
    start: str, end: str, status: BookingStatus = BookingStatus.CONFIRMED
) -> BookingRecord:
    return BookingRecord(
        resource_id="court-1",
        date=_DAY,
        interval=TimeInterval.from_strings(start, end),
        status=status,
    )


def _slot(start: str, end: str) -> TimeInterval:
    return TimeInterval.from_strings(start, end)


def test_no_overlap():
    """Bookings that don't overlap should not be returned as conflicts."""
    existing = [_make_booking("08:00", "09:00")]
    assert find_conflicts(_slot("10:00", "11:00"), existing) == []


def test_partial_overlap():
    """A booking that partially overlaps should be returned as a conflict."""
    existing = [_make_booking("09:00", "10:30")]
    conflicts = find_conflicts(_slot("10:00", "11:00"), existing)
    assert len(conflicts) == 1
    assert conflicts[0].interval.start_label == "09:00"


def test_exact_boundary_no_conflict():
    """When booking end == slot start, there is no conflict (boundary touch)."""
    existing = [_make_booking("10:00", "12:00")]
    assert is_available(_slot("12:00", "14:00"), existing)
    assert is_available(_slot("08:00", "10:00"), existing)


def test_contained_and_equal_slots_conflict():
    existing = [_make_booking("10:00", "13:00")]
    assert not is_available(_slot("11:00", "12:00"), existing)
    assert not is_available(_slot("10:00", "13:00"), existing)
    assert not is_available(_slot("09:00", "14:00"), existing)


def test_cancelled_and_completed_bookings_do_not_block():
    existing = [
        _make_booking("10:00", "12:00", BookingStatus.CANCELLED),
        _make_booking("10:00", "12:00", BookingStatus.COMPLETED),
    ]
    assert is_available(_slot("10:00", "11:00"), existing)


def test_pending_booking_blocks():
    existing = [_make_booking("10:00", "12:00", BookingStatus.PENDING)]
    assert not is_available(_slot("11:00", "12:00"), existing)


def test_empty_booking_list_is_available():
    assert is_available(_slot("10:00", "11:00"), [])
