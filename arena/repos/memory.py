"""In-memory repositories for vendors, resources, bookings and opening hours."""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from arena.domain.errors import MissingConfiguration
from arena.domain.models import (
    BookingKind,
    BookingRecord,
    BookingStatus,
    FormatRef,
    LocationRef,
    MatchInfo,
    OperatingWindow,
    ResourceDescriptor,
    ResourceFilter,
    SportRef,
    TimeInterval,
    VendorRef,
)


class VendorRepository:
    """Dict-backed store for VendorRef instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, VendorRef] = {}

    def add(self, vendor: VendorRef) -> None:
        self._store[vendor.id] = vendor

    def get(self, vendor_id: str) -> VendorRef | None:
        return self._store.get(vendor_id)

    def get_by_slug(self, slug: str) -> VendorRef | None:
        """Return the active vendor with the given slug."""
        for vendor in self._store.values():
            if vendor.slug == slug.lower() and vendor.is_active:
                return vendor
        return None


class ResourceRepository:
    """Dict-backed store for ResourceDescriptor instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, ResourceDescriptor] = {}

    def add(self, resource: ResourceDescriptor) -> None:
        self._store[resource.id] = resource

    def get(self, resource_id: str) -> ResourceDescriptor | None:
        return self._store.get(resource_id)

    def list_matching(self, resource_filter: ResourceFilter) -> list[ResourceDescriptor]:
        """Active resources of active vendors that match the filter.

        Ordered by sport, then format (descending), then court name.
        """
        matching = [
            r
            for r in self._store.values()
            if r.is_active and r.vendor.is_active and resource_filter.matches(r)
        ]
        matching.sort(key=lambda r: r.name)
        matching.sort(key=lambda r: r.format.display_name if r.format else "", reverse=True)
        matching.sort(key=lambda r: r.sport.display_name)
        return matching


class BookingRepository:
    """List-backed store for BookingRecord instances."""

    def __init__(self) -> None:
        self._bookings: list[BookingRecord] = []

    def add(self, booking: BookingRecord) -> None:
        self._bookings.append(booking)

    def list_for(self, resource_ids: Iterable[str], day: dt.date) -> list[BookingRecord]:
        """Bookings of any status for the given resources on ``day``."""
        wanted = set(resource_ids)
        return sorted(
            [b for b in self._bookings if b.resource_id in wanted and b.date == day],
            key=lambda b: (b.resource_id, b.interval.start),
        )


def group_by_resource(bookings: Iterable[BookingRecord]) -> dict[str, list[BookingRecord]]:
    grouped: dict[str, list[BookingRecord]] = defaultdict(list)
    for booking in bookings:
        grouped[booking.resource_id].append(booking)
    return dict(grouped)


class OperatingHoursRepository:
    """Dict-backed store of OperatingWindow per (resource id, weekday)."""

    def __init__(self) -> None:
        self._windows: dict[tuple[str, int], OperatingWindow] = {}

    def set(self, resource_id: str, weekday: int, window: OperatingWindow) -> None:
        if not 0 <= weekday <= 6:
            raise ValueError(f"weekday must be 0-6, got {weekday}")
        self._windows[(resource_id, weekday)] = window

    def set_week(
        self, resource_id: str, window: OperatingWindow, weekdays: Iterable[int] = range(7)
    ) -> None:
        for weekday in weekdays:
            self.set(resource_id, weekday, window)

    def resolve(self, resource_id: str, weekday: int) -> OperatingWindow | None:
        return self._windows.get((resource_id, weekday))

    def require(self, resource_id: str, weekday: int) -> OperatingWindow:
        window = self.resolve(resource_id, weekday)
        if window is None:
            raise MissingConfiguration(resource_id, weekday)
        return window


# ---------------------------------------------------------------------------
# Seed data – a small marketplace with a few bookings for tomorrow
# ---------------------------------------------------------------------------

_SOCCER = SportRef(id="sport-soccer", name="soccer", display_name="Soccer")
_PADEL = SportRef(id="sport-padel", name="padel", display_name="Padel")
_FIVE_A_SIDE = FormatRef(
    id="format-5v5", name="5v5", display_name="5-a-side", min_players=10, max_players=12
)
_SEVEN_A_SIDE = FormatRef(
    id="format-7v7", name="7v7", display_name="7-a-side", min_players=14, max_players=16
)
_PADEL_DOUBLES = FormatRef(
    id="format-padel-doubles", name="doubles", display_name="Doubles", min_players=4, max_players=4
)


def seed_marketplace(
    vendor_repo: VendorRepository,
    resource_repo: ResourceRepository,
    booking_repo: BookingRepository,
    hours_repo: OperatingHoursRepository,
) -> None:
    tomorrow = dt.date.today() + dt.timedelta(days=1)

    three_lok = VendorRef(id="vendor-3lok", name="3Lok", slug="3lok")
    kickoff = VendorRef(id="vendor-kickoff", name="Kickoff Arena", slug="kickoff")
    for vendor in (three_lok, kickoff):
        vendor_repo.add(vendor)

    koramangala = LocationRef(
        id="loc-koramangala", name="3Lok Koramangala", area="Koramangala", city="Bangalore"
    )
    indiranagar = LocationRef(
        id="loc-indiranagar", name="Kickoff Indiranagar", area="Indiranagar", city="Bangalore"
    )

    court_1 = ResourceDescriptor(
        id="court-3lok-1",
        name="Court 1",
        hourly_rate=Decimal("1500"),
        max_players=12,
        sport=_SOCCER,
        format=_FIVE_A_SIDE,
        vendor=three_lok,
        location=koramangala,
    )
    court_2 = ResourceDescriptor(
        id="court-3lok-2",
        name="Court 2",
        hourly_rate=Decimal("2000"),
        max_players=16,
        sport=_SOCCER,
        format=_SEVEN_A_SIDE,
        vendor=three_lok,
        location=koramangala,
    )
    padel_a = ResourceDescriptor(
        id="court-kickoff-a",
        name="Court A",
        hourly_rate=Decimal("1200"),
        max_players=4,
        sport=_PADEL,
        format=_PADEL_DOUBLES,
        vendor=kickoff,
        location=indiranagar,
    )
    for resource in (court_1, court_2, padel_a):
        resource_repo.add(resource)

    # Court 2 has no configured hours and uses the default window.
    hours_repo.set_week(court_1.id, OperatingWindow.from_strings("06:00", "23:00"))
    hours_repo.set_week(padel_a.id, OperatingWindow.from_strings("07:00", "22:00"), range(5))
    hours_repo.set_week(padel_a.id, OperatingWindow.from_strings("08:00", "20:00"), (5, 6))

    booking_repo.add(
        BookingRecord(
            resource_id=court_1.id,
            date=tomorrow,
            interval=TimeInterval.from_strings("09:00", "11:00"),
            kind=BookingKind.PRIVATE_BOOKING,
        )
    )
    booking_repo.add(
        BookingRecord(
            resource_id=court_1.id,
            date=tomorrow,
            interval=TimeInterval.from_strings("14:00", "16:00"),
            status=BookingStatus.CANCELLED,
        )
    )
    booking_repo.add(
        BookingRecord(
            resource_id=court_2.id,
            date=tomorrow,
            interval=TimeInterval.from_strings("18:00", "20:00"),
            kind=BookingKind.OPEN_MATCH,
            match=MatchInfo(
                home_team="Koramangala Kickers",
                skill_level="intermediate",
                players_confirmed=7,
                players_needed=7,
                description="Friendly 7-a-side, looking for an opponent",
            ),
        )
    )
    booking_repo.add(
        BookingRecord(
            resource_id=padel_a.id,
            date=tomorrow,
            interval=TimeInterval.from_strings("12:00", "14:00"),
            kind=BookingKind.MAINTENANCE,
        )
    )


def create_repositories() -> tuple[
    VendorRepository, ResourceRepository, BookingRepository, OperatingHoursRepository
]:
    """Return the four repositories pre-loaded with sample data."""
    repos = (
        VendorRepository(),
        ResourceRepository(),
        BookingRepository(),
        OperatingHoursRepository(),
    )
    seed_marketplace(*repos)
    return repos
