"""Availability of a single resource on a single date."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable

from arena.domain.errors import MalformedDateInput, MissingConfiguration
from arena.domain.models import (
    BookingRecord,
    OperatingWindow,
    ResourceDescriptor,
    SlotCandidate,
    SlotStatus,
)
from arena.domain.ports import OperatingWindowResolver
from arena.services.classification import classify
from arena.services.conflicts import find_conflicts
from arena.services.dates import parse_booking_date
from arena.services.pricing import PricingCalculator
from arena.services.slots import SlotGenerator, normalize_duration

logger = logging.getLogger(__name__)


class ResourceAvailabilityService:
    """Combines slot generation, conflict checking, classification and pricing.

    The service holds no per-request state, so one instance can be shared by
    concurrent callers. It never raises for data-shape problems: a malformed
    date yields an empty list, an unconfigured resource gets the default
    window, and a resource without bookings is fully available.
    """

    def __init__(
        self,
        window_resolver: OperatingWindowResolver | None = None,
        slot_generator: SlotGenerator | None = None,
        pricing: PricingCalculator | None = None,
    ) -> None:
        self.window_resolver = window_resolver
        self.slot_generator = slot_generator or SlotGenerator()
        self.pricing = pricing or PricingCalculator()

    def resolve_window(self, resource_id: str, weekday: int) -> OperatingWindow | None:
        if self.window_resolver is None:
            return None
        try:
            return self.window_resolver(resource_id, weekday)
        except MissingConfiguration:
            logger.debug(
                "No operating window for resource %s on weekday %d, using default",
                resource_id,
                weekday,
            )
            return None

    def get_availability(
        self,
        resource: ResourceDescriptor,
        day: str | dt.date,
        duration_minutes: int | None,
        existing_bookings: Iterable[BookingRecord] | None = None,
    ) -> list[SlotCandidate]:
        try:
            booking_date = parse_booking_date(day)
        except MalformedDateInput as exc:
            logger.info("Returning no slots for resource %s: %s", resource.id, exc)
            return []

        duration = normalize_duration(duration_minutes, self.slot_generator.default_duration_minutes)
        window = self.resolve_window(resource.id, booking_date.weekday())
        relevant = [
            booking
            for booking in existing_bookings or ()
            if booking.resource_id == resource.id
            and booking.date == booking_date
            and booking.blocks_slots
        ]

        candidates: list[SlotCandidate] = []
        for interval in self.slot_generator.generate(window, duration):
            conflicts = find_conflicts(interval, relevant)
            classification = classify(conflicts)
            is_available = not conflicts

            price_per_team = None
            match = None
            if classification.status is SlotStatus.OPEN_MATCH:
                price_per_team = self.pricing.price_per_team(resource, booking_date, interval)
                match = classification.booking.match if classification.booking else None

            candidates.append(
                SlotCandidate(
                    resource_id=resource.id,
                    resource_name=resource.display_name,
                    date=booking_date,
                    interval=interval,
                    is_available=is_available,
                    status=classification.status,
                    total_price=self.pricing.price_for(
                        resource, booking_date, interval, is_available
                    ),
                    price_per_team=price_per_team,
                    actions=classification.actions,
                    match=match,
                )
            )
        return candidates
