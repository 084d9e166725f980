"""Vendor (tenant) resolution from the request host."""

from __future__ import annotations

import logging
from typing import Iterable

from arena.core.config import settings
from arena.domain.ports import VendorLookup

logger = logging.getLogger(__name__)

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1"})


def extract_subdomain(
    host: str | None,
    ignored: Iterable[str] = settings.ignored_subdomains,
    root_label: str = settings.root_domain_label,
) -> str | None:
    """Return the vendor subdomain of ``host`` (``3lok.gamehub.com`` -> ``3lok``).

    Hosts with fewer than three labels, local hosts and infrastructure
    subdomains such as ``www`` or ``api`` have no tenant.
    """
    if not host:
        return None
    hostname = host.split(":", 1)[0].strip().lower()
    if hostname in _LOCAL_HOSTS:
        return None

    labels = hostname.split(".")
    if len(labels) < 3 or not labels[0]:
        return None
    subdomain = labels[0]
    if subdomain == root_label.lower() or subdomain in {i.lower() for i in ignored}:
        return None
    return subdomain


def resolve_tenant(host: str | None, vendors: VendorLookup) -> str | None:
    """Map a request host to the id of the active vendor owning that subdomain."""
    subdomain = extract_subdomain(host)
    if subdomain is None:
        return None
    vendor = vendors.get_by_slug(subdomain)
    if vendor is None:
        logger.info("No active vendor for subdomain %r", subdomain)
        return None
    return vendor.id
