"""Shared factories for resources used across the test suite."""

from __future__ import annotations

from decimal import Decimal

from arena.domain.models import (
    FormatRef,
    LocationRef,
    ResourceDescriptor,
    SportRef,
    VendorRef,
)

SOCCER = SportRef(id="sport-soccer", name="soccer", display_name="Soccer")
PADEL = SportRef(id="sport-padel", name="padel", display_name="Padel")
FIVE_A_SIDE = FormatRef(id="format-5v5", name="5v5", display_name="5-a-side", max_players=12)


def make_resource(**overrides) -> ResourceDescriptor:
    defaults = dict(
        id="court-1",
        name="Court 1",
        hourly_rate=Decimal("1500"),
        max_players=12,
        sport=SOCCER,
        format=FIVE_A_SIDE,
        vendor=VendorRef(id="vendor-1", name="3Lok", slug="3lok"),
        location=LocationRef(id="loc-1", name="3Lok Koramangala", area="Koramangala", city="Bangalore"),
        currency="INR",
    )
    defaults.update(overrides)
    return ResourceDescriptor(**defaults)
