"""FastAPI application — entry point for the availability service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request

from arena.core.config import settings
from arena.core.logging_config import configure_logging
from arena.domain.errors import MalformedDateInput
from arena.domain.models import (
    AvailabilityResponse,
    AvailabilitySlot,
    ResourceDescriptor,
    ResourceFilter,
    SlotCandidate,
    TimelineFilters,
    TimelineResource,
    TimelineResponse,
    TimelineSlot,
)
from arena.repos.memory import (
    BookingRepository,
    OperatingHoursRepository,
    ResourceRepository,
    VendorRepository,
    create_repositories,
    group_by_resource,
)
from arena.services.availability import ResourceAvailabilityService
from arena.services.dates import parse_booking_date, today
from arena.services.slots import DEFAULT_DURATION_MINUTES, normalize_duration
from arena.services.tenancy import resolve_tenant
from arena.services.timeline import TimelineAggregator, summarize

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Arena Availability Service")

# ── Singletons (created at import time for simplicity) ────────────────
if settings.seed_demo_data:
    vendor_repo, resource_repo, booking_repo, hours_repo = create_repositories()
else:
    vendor_repo = VendorRepository()
    resource_repo = ResourceRepository()
    booking_repo = BookingRepository()
    hours_repo = OperatingHoursRepository()

availability_service = ResourceAvailabilityService(window_resolver=hours_repo.resolve)
timeline_aggregator = TimelineAggregator(availability_service)


# ── Routes ────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/availability", response_model=AvailabilityResponse)
def get_resource_availability(
    resource_id: str | None = None,
    date: str | None = None,
    duration_minutes: int = DEFAULT_DURATION_MINUTES,
) -> AvailabilityResponse:
    """Return the slot grid of one resource with a free/taken flag per slot.

    Prices are not part of this response.
    """
    if not resource_id or not date:
        raise HTTPException(status_code=400, detail="resource_id and date are required")

    resource = resource_repo.get(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")

    try:
        booking_date = parse_booking_date(date)
    except MalformedDateInput:
        logger.info("Invalid date %r for resource %s, returning no slots", date, resource_id)
        return AvailabilityResponse(slots=[])

    bookings = booking_repo.list_for([resource.id], booking_date)
    slots = availability_service.get_availability(
        resource, booking_date, duration_minutes, bookings
    )
    return AvailabilityResponse(
        slots=[
            AvailabilitySlot(
                start_time=slot.start_time,
                end_time=slot.end_time,
                is_available=slot.is_available,
            )
            for slot in slots
        ]
    )


@app.get("/timeline", response_model=TimelineResponse)
def get_timeline(
    request: Request,
    date: str | None = None,
    duration_minutes: int = DEFAULT_DURATION_MINUTES,
    sport: str | None = None,
    vendor_id: str | None = None,
    city: str | None = None,
    area: str | None = None,
) -> TimelineResponse:
    """Return classified, priced slots across every matching resource.

    On a vendor subdomain the vendor scope replaces any ``vendor_id`` query
    parameter.
    """
    tenant_id = resolve_tenant(request.headers.get("host"), vendor_repo)
    if tenant_id is not None:
        vendor_id = tenant_id

    raw_date = date or today().isoformat()
    resource_filter = ResourceFilter(sport=sport, vendor_id=vendor_id, city=city, area=area)
    filters = TimelineFilters(
        date=raw_date,
        duration_minutes=normalize_duration(duration_minutes),
        **resource_filter.model_dump(),
    )

    try:
        booking_date = parse_booking_date(raw_date)
    except MalformedDateInput:
        logger.info("Invalid timeline date %r, returning an empty timeline", raw_date)
        return TimelineResponse(filters=filters)

    resources = resource_repo.list_matching(resource_filter)
    bookings = booking_repo.list_for([r.id for r in resources], booking_date)
    slots = timeline_aggregator.build_timeline(
        resources, group_by_resource(bookings), booking_date, duration_minutes
    )

    by_id = {r.id: r for r in resources}
    return TimelineResponse(
        slots=[_timeline_slot(slot, by_id[slot.resource_id]) for slot in slots],
        count=len(slots),
        filters=filters,
        summary=summarize(slots),
    )


def _timeline_slot(slot: SlotCandidate, resource: ResourceDescriptor) -> TimelineSlot:
    return TimelineSlot(
        id=f"{resource.id}-{slot.date.isoformat()}-{slot.start_time}",
        start_time=slot.start_time,
        end_time=slot.end_time,
        resource=TimelineResource(
            id=resource.id,
            name=resource.display_name,
            court_number=resource.name,
            price_per_hour=float(resource.hourly_rate),
            max_players=resource.max_players,
            sport=resource.sport,
            format=resource.format,
            vendor=resource.vendor,
            location=resource.location,
        ),
        status=slot.status,
        total_price=float(slot.total_price) if slot.total_price is not None else None,
        price_per_team=float(slot.price_per_team) if slot.price_per_team is not None else None,
        match=slot.match,
        actions=slot.actions,
    )
