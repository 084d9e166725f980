"""Domain models for the availability and booking conflict engine."""

from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from arena.core.config import settings
from arena.domain.errors import InvalidInterval

MINUTES_PER_DAY = 24 * 60


class BookingKind(StrEnum):
    PRIVATE_BOOKING = "private_booking"
    OPEN_MATCH = "open_match"
    MAINTENANCE = "maintenance"


class BookingStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class SlotStatus(StrEnum):
    AVAILABLE = "available"
    OPEN_MATCH = "open_match"
    PRIVATE_MATCH = "private_match"
    UNAVAILABLE = "unavailable"


class SlotAction(StrEnum):
    BOOK_VENUE = "book_venue"
    CREATE_MATCH = "create_match"
    REQUEST_TO_JOIN = "request_to_join"


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Time of day
# ---------------------------------------------------------------------------


def parse_time_of_day(value: str) -> int:
    """Convert ``"HH:MM"`` (or ``"H:MM"``) into minutes since midnight.

    ``"24:00"`` is accepted and maps to 1440 so that a window or booking can
    end at midnight.
    """
    hours, sep, minutes = value.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit() or len(minutes) != 2:
        raise ValueError(f"expected HH:MM, got {value!r}")
    total = int(hours) * 60 + int(minutes)
    if int(minutes) >= 60 or total > MINUTES_PER_DAY:
        raise ValueError(f"time of day out of range: {value!r}")
    return total


def format_time_of_day(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class TimeInterval(BaseModel):
    """Half-open ``[start, end)`` clock interval in minutes since midnight."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def _end_after_start(self) -> TimeInterval:
        for bound in (self.start, self.end):
            if not 0 <= bound <= MINUTES_PER_DAY:
                raise InvalidInterval(self.start, self.end, "bound outside the day")
        if self.end <= self.start:
            raise InvalidInterval(self.start, self.end, "end must be after start")
        return self

    @classmethod
    def from_strings(cls, start: str, end: str) -> TimeInterval:
        return cls(start=parse_time_of_day(start), end=parse_time_of_day(end))

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    @property
    def start_label(self) -> str:
        return format_time_of_day(self.start)

    @property
    def end_label(self) -> str:
        return format_time_of_day(self.end)

    def overlaps(self, other: TimeInterval) -> bool:
        return overlaps(self, other)

    def contains(self, point: int) -> bool:
        return contains(self, point)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """Half-open overlap test: touching intervals do not overlap."""
    return a.start < b.end and b.start < a.end


def contains(interval: TimeInterval, point: int) -> bool:
    return interval.start <= point < interval.end


class OperatingWindow(BaseModel):
    """Opening hours of a resource for one weekday, local wall-clock time."""

    model_config = ConfigDict(frozen=True)

    is_open: bool = True
    opening_time: int = 0
    closing_time: int = MINUTES_PER_DAY

    @model_validator(mode="after")
    def _closing_after_opening(self) -> OperatingWindow:
        if not self.is_open:
            return self
        if not 0 <= self.opening_time < self.closing_time <= MINUTES_PER_DAY:
            raise ValueError("closing_time must be after opening_time within the day")
        return self

    @classmethod
    def from_strings(cls, opening: str, closing: str, is_open: bool = True) -> OperatingWindow:
        return cls(
            is_open=is_open,
            opening_time=parse_time_of_day(opening),
            closing_time=parse_time_of_day(closing),
        )

    @classmethod
    def closed(cls) -> OperatingWindow:
        return cls(is_open=False)


# ---------------------------------------------------------------------------
# Resources and bookings (read-only projections from the data layer)
# ---------------------------------------------------------------------------


class SportRef(BaseModel):
    id: str
    name: str
    display_name: str


class FormatRef(BaseModel):
    id: str
    name: str
    display_name: str
    min_players: int = 0
    max_players: int = 0


class VendorRef(BaseModel):
    id: str
    name: str
    slug: str
    is_active: bool = True


class LocationRef(BaseModel):
    id: str
    name: str
    area: str
    city: str


class ResourceDescriptor(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    hourly_rate: Decimal = Field(ge=0)
    max_players: int = 0
    sport: SportRef
    format: FormatRef | None = None
    vendor: VendorRef
    location: LocationRef | None = None
    currency: str = Field(default_factory=lambda: settings.default_currency)
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return f"{self.vendor.name} {self.name}"


class ResourceFilter(BaseModel):
    sport: str | None = None
    vendor_id: str | None = None
    city: str | None = None
    area: str | None = None

    def matches(self, resource: ResourceDescriptor) -> bool:
        if self.sport and resource.sport.name != self.sport:
            return False
        if self.vendor_id and resource.vendor.id != self.vendor_id:
            return False
        if self.city or self.area:
            location = resource.location
            if location is None:
                return False
            if self.city and location.city != self.city:
                return False
            if self.area and location.area != self.area:
                return False
        return True


class MatchInfo(BaseModel):
    home_team: str
    looking_for_opponent: bool = True
    skill_level: str = "intermediate"
    players_confirmed: int = 0
    players_needed: int = 0
    contact: str | None = None
    description: str | None = None


class BookingRecord(BaseModel):
    id: str = Field(default_factory=_new_id)
    resource_id: str
    date: dt.date
    interval: TimeInterval
    kind: BookingKind = BookingKind.PRIVATE_BOOKING
    status: BookingStatus = BookingStatus.CONFIRMED
    match: MatchInfo | None = None

    @property
    def blocks_slots(self) -> bool:
        return self.status in BLOCKING_STATUSES


class SlotCandidate(BaseModel):
    resource_id: str
    resource_name: str
    date: dt.date
    interval: TimeInterval
    is_available: bool
    status: SlotStatus
    total_price: Decimal | None = None
    price_per_team: Decimal | None = None
    actions: list[str] = Field(default_factory=list)
    match: MatchInfo | None = None

    @property
    def start_time(self) -> str:
        return self.interval.start_label

    @property
    def end_time(self) -> str:
        return self.interval.end_label


class TimelineSummary(BaseModel):
    available: int = 0
    open_matches: int = 0
    private_matches: int = 0
    unavailable: int = 0
    total: int = 0


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class AvailabilitySlot(BaseModel):
    start_time: str
    end_time: str
    is_available: bool


class AvailabilityResponse(BaseModel):
    slots: list[AvailabilitySlot] = Field(default_factory=list)


class TimelineResource(BaseModel):
    id: str
    name: str
    court_number: str
    price_per_hour: float
    max_players: int
    sport: SportRef
    format: FormatRef | None = None
    vendor: VendorRef
    location: LocationRef | None = None


class TimelineSlot(BaseModel):
    id: str
    start_time: str
    end_time: str
    resource: TimelineResource
    status: SlotStatus
    total_price: float | None = None
    price_per_team: float | None = None
    match: MatchInfo | None = None
    actions: list[str] = Field(default_factory=list)


class TimelineFilters(BaseModel):
    date: str
    duration_minutes: int
    sport: str | None = None
    vendor_id: str | None = None
    city: str | None = None
    area: str | None = None


class TimelineResponse(BaseModel):
    slots: list[TimelineSlot] = Field(default_factory=list)
    count: int = 0
    filters: TimelineFilters
    summary: TimelineSummary = Field(default_factory=TimelineSummary)
