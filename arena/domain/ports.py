"""Interfaces the engine consumes from the host system's data layer."""

from __future__ import annotations

import datetime as dt
from typing import Iterable, Protocol

from arena.domain.models import (
    BookingRecord,
    OperatingWindow,
    ResourceDescriptor,
    ResourceFilter,
    VendorRef,
)


class ResourceSource(Protocol):
    def list_matching(self, resource_filter: ResourceFilter) -> list[ResourceDescriptor]: ...


class BookingSource(Protocol):
    def list_for(self, resource_ids: Iterable[str], day: dt.date) -> list[BookingRecord]: ...


class OperatingWindowResolver(Protocol):
    """Return the window for ``weekday`` (Monday = 0), or None if unconfigured."""

    def __call__(self, resource_id: str, weekday: int) -> OperatingWindow | None: ...


class VendorLookup(Protocol):
    def get_by_slug(self, slug: str) -> VendorRef | None: ...
