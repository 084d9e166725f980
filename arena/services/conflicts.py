"""Service for detecting booking conflicts on a resource."""

from __future__ import annotations

from typing import Iterable

from arena.domain.models import BookingRecord, TimeInterval, overlaps


def find_conflicts(
    slot: TimeInterval,
    existing_bookings: Iterable[BookingRecord],
) -> list[BookingRecord]:
    """Return blocking bookings that overlap with the given slot.

    Overlap rule: conflict if slot.start < booking.end AND booking.start < slot.end.
    Exact boundary touches (end == start) are NOT considered conflicts.
    Cancelled and completed bookings never conflict.
    """
    return [
        booking
        for booking in existing_bookings
        if booking.blocks_slots and overlaps(slot, booking.interval)
    ]


def is_available(slot: TimeInterval, existing_bookings: Iterable[BookingRecord]) -> bool:
    return not find_conflicts(slot, existing_bookings)
