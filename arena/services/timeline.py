"""Cross-resource timeline: availability for many courts, merged and sorted."""

from __future__ import annotations

import datetime as dt
import logging
import time
from collections import Counter
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Iterable, Mapping, Sequence

from arena.core.config import settings
from arena.domain.errors import MalformedDateInput
from arena.domain.models import (
    BookingRecord,
    ResourceDescriptor,
    SlotCandidate,
    SlotStatus,
    TimelineSummary,
)
from arena.services.availability import ResourceAvailabilityService
from arena.services.dates import parse_booking_date
from arena.services.slots import normalize_duration

logger = logging.getLogger(__name__)


def timeline_sort_key(slot: SlotCandidate) -> tuple[int, str, str]:
    return (slot.interval.start, slot.resource_name, slot.resource_id)


def summarize(slots: Iterable[SlotCandidate]) -> TimelineSummary:
    """Count slots per classification; the counts always add up to ``total``."""
    counts = Counter(slot.status for slot in slots)
    return TimelineSummary(
        available=counts[SlotStatus.AVAILABLE],
        open_matches=counts[SlotStatus.OPEN_MATCH],
        private_matches=counts[SlotStatus.PRIVATE_MATCH],
        unavailable=counts[SlotStatus.UNAVAILABLE],
        total=sum(counts.values()),
    )


class TimelineAggregator:
    """Runs per-resource availability on a bounded worker pool.

    Resources are independent, so they are computed concurrently and only
    sorted once every result is in. With a deadline, resources that have not
    finished in time are left out entirely rather than returned half-built.
    """

    def __init__(
        self,
        availability_service: ResourceAvailabilityService | None = None,
        max_workers: int = settings.timeline_max_workers,
        deadline_seconds: float | None = settings.timeline_deadline_seconds,
    ) -> None:
        self.availability_service = availability_service or ResourceAvailabilityService()
        self.max_workers = max(1, max_workers)
        self.deadline_seconds = deadline_seconds

    def build_timeline(
        self,
        resources: Iterable[ResourceDescriptor],
        bookings_by_resource: Mapping[str, Sequence[BookingRecord]],
        day: str | dt.date,
        duration_minutes: int | None,
        deadline_seconds: float | None = None,
    ) -> list[SlotCandidate]:
        try:
            booking_date = parse_booking_date(day)
        except MalformedDateInput as exc:
            logger.info("Returning an empty timeline: %s", exc)
            return []

        resources = list(resources)
        if not resources:
            return []

        duration = normalize_duration(
            duration_minutes,
            self.availability_service.slot_generator.default_duration_minutes,
        )
        deadline = deadline_seconds if deadline_seconds is not None else self.deadline_seconds

        if self.max_workers == 1 or len(resources) == 1:
            batches = self._collect_inline(resources, bookings_by_resource, booking_date, duration, deadline)
        else:
            batches = self._collect_parallel(resources, bookings_by_resource, booking_date, duration, deadline)

        slots = [slot for batch in batches for slot in batch]
        slots.sort(key=timeline_sort_key)
        logger.info(
            "Built timeline for %s: %d slots across %d/%d resources",
            booking_date.isoformat(),
            len(slots),
            len(batches),
            len(resources),
        )
        return slots

    def _collect_inline(
        self,
        resources: list[ResourceDescriptor],
        bookings_by_resource: Mapping[str, Sequence[BookingRecord]],
        booking_date: dt.date,
        duration: int,
        deadline: float | None,
    ) -> list[list[SlotCandidate]]:
        started = time.monotonic()
        batches: list[list[SlotCandidate]] = []
        for resource in resources:
            if deadline is not None and time.monotonic() - started >= deadline:
                logger.warning(
                    "Timeline deadline of %.3fs reached, dropped %d of %d resources",
                    deadline,
                    len(resources) - len(batches),
                    len(resources),
                )
                break
            batches.append(
                self.availability_service.get_availability(
                    resource,
                    booking_date,
                    duration,
                    bookings_by_resource.get(resource.id, ()),
                )
            )
        return batches

    def _collect_parallel(
        self,
        resources: list[ResourceDescriptor],
        bookings_by_resource: Mapping[str, Sequence[BookingRecord]],
        booking_date: dt.date,
        duration: int,
        deadline: float | None,
    ) -> list[list[SlotCandidate]]:
        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(resources)),
            thread_name_prefix="timeline",
        )
        try:
            futures = [
                executor.submit(
                    self.availability_service.get_availability,
                    resource,
                    booking_date,
                    duration,
                    bookings_by_resource.get(resource.id, ()),
                )
                for resource in resources
            ]
            done, not_done = wait(futures, timeout=deadline, return_when=FIRST_EXCEPTION)
            if not_done and deadline is not None and not any(
                f.exception() for f in done
            ):
                logger.warning(
                    "Timeline deadline of %.3fs reached, dropped %d of %d resources",
                    deadline,
                    len(not_done),
                    len(resources),
                )
            # result() re-raises worker errors, which are programmer errors.
            return [future.result() for future in futures if future in done]
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
