"""Ordered rule table that classifies a slot from its overlapping bookings."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from arena.domain.models import BookingKind, BookingRecord, SlotAction, SlotStatus


class ClassificationRule(NamedTuple):
    status: SlotStatus
    actions: tuple[SlotAction, ...]
    kind: BookingKind | None = None
    when_free: bool = False

    def matches(self, conflicts: Sequence[BookingRecord]) -> bool:
        if self.when_free:
            return not conflicts
        return any(self._selects(booking) for booking in conflicts)

    def deciding_booking(self, conflicts: Sequence[BookingRecord]) -> BookingRecord | None:
        if self.when_free:
            return None
        return next((b for b in conflicts if self._selects(b)), None)

    def _selects(self, booking: BookingRecord) -> bool:
        return self.kind is None or booking.kind == self.kind


# First matching rule wins. A rule without a kind matches any overlap.
CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        SlotStatus.AVAILABLE,
        (SlotAction.BOOK_VENUE, SlotAction.CREATE_MATCH),
        when_free=True,
    ),
    ClassificationRule(
        SlotStatus.OPEN_MATCH, (SlotAction.REQUEST_TO_JOIN,), kind=BookingKind.OPEN_MATCH
    ),
    ClassificationRule(SlotStatus.PRIVATE_MATCH, (), kind=BookingKind.PRIVATE_BOOKING),
    ClassificationRule(SlotStatus.UNAVAILABLE, ()),
)


class Classification(NamedTuple):
    status: SlotStatus
    actions: list[str]
    booking: BookingRecord | None


def classify(
    conflicts: Sequence[BookingRecord],
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> Classification:
    for rule in rules:
        if rule.matches(conflicts):
            return Classification(
                status=rule.status,
                actions=[str(action) for action in rule.actions],
                booking=rule.deciding_booking(conflicts),
            )
    raise LookupError("no classification rule matched")
