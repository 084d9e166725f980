"""Tests for vendor subdomain resolution."""

from __future__ import annotations

import pytest

from arena.domain.models import VendorRef
from arena.repos.memory import VendorRepository
from arena.services.tenancy import extract_subdomain, resolve_tenant


@pytest.mark.parametrize(
    "host,expected",
    [
        ("3lok.gamehub.com", "3lok"),
        ("3LOK.gamehub.com:3000", "3lok"),
        ("gamehub.com", None),
        ("localhost:3000", None),
        ("127.0.0.1", None),
        ("www.gamehub.com", None),
        ("api.gamehub.com", None),
        ("gamehub.example.com", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_subdomain(host, expected):
    assert extract_subdomain(host) == expected


@pytest.fixture()
def vendors() -> VendorRepository:
    repo = VendorRepository()
    repo.add(VendorRef(id="vendor-3lok", name="3Lok", slug="3lok"))
    repo.add(VendorRef(id="vendor-closed", name="Closed FC", slug="closed", is_active=False))
    return repo


def test_resolve_tenant_returns_vendor_id(vendors):
    assert resolve_tenant("3lok.gamehub.com", vendors) == "vendor-3lok"


def test_unknown_or_inactive_vendor_has_no_tenant(vendors):
    assert resolve_tenant("nobody.gamehub.com", vendors) is None
    assert resolve_tenant("closed.gamehub.com", vendors) is None


def test_plain_host_has_no_tenant(vendors):
    assert resolve_tenant("testserver", vendors) is None
