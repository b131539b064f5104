"""
Zone directory: listing the project's zones and picking the one that
owns a DNS name.
"""

from __future__ import annotations

from typing import Protocol

import requests

from zonesync.base.cache import ZoneCache
from zonesync.base.context import Context
from zonesync.base.dns import DNSAPIBlueprint
from zonesync.base.exceptions import FetchError
from zonesync.base.models import Zone
from zonesync.reconcile.translate import error_message


class ZoneSource(Protocol):
    """Anything that can list the zones for one reconciliation phase."""

    def zones(self, ctx: Context) -> list[Zone]: ...


def _canonical(name: str) -> str:
    return name.rstrip(".").lower()


def _in_zone(dns_name: str, zone_name: str) -> bool:
    return dns_name == zone_name or dns_name.endswith("." + zone_name)


def find_best_matching_zone(dns_name: str, zones: list[Zone]) -> Zone | None:
    """Return the zone whose DNS name is the longest suffix of *dns_name*.

    Suffixes only match on label boundaries, so ``example.com`` owns
    ``foo.example.com`` but not ``fooexample.com``.  When several zones
    share the winning DNS name, the one with the smallest id is returned.
    """
    name = _canonical(dns_name)
    best: Zone | None = None
    best_len = -1
    for zone in zones:
        zone_name = _canonical(zone.dns_name)
        if not zone_name or not _in_zone(name, zone_name):
            continue
        if len(zone_name) > best_len or (
            len(zone_name) == best_len and best is not None and zone.id < best.id
        ):
            best = zone
            best_len = len(zone_name)
    return best


class ZoneFetcher:
    """Lists every zone of a project, page by page, on each call.

    Attributes:
        client: DNS API client.
        project_id: Project owning the zones.
        domain_filter: Domains to restrict the listing to; empty means all.
        page_size: Zones requested per page.
    """

    def __init__(
        self,
        client: DNSAPIBlueprint,
        project_id: str,
        domain_filter: list[str] | None = None,
        page_size: int = 10000,
    ) -> None:
        self.client = client
        self.project_id = project_id
        self.domain_filter = [_canonical(d) for d in domain_filter or []]
        self.page_size = page_size

    def zones(self, ctx: Context) -> list[Zone]:
        """Fetch the project's zones.

        Raises:
            FetchError: On API or network failure.
        """
        if not self.domain_filter:
            return self._fetch_all(ctx, None)

        seen: dict[str, Zone] = {}
        for domain in self.domain_filter:
            for zone in self._fetch_all(ctx, domain):
                if _in_zone(_canonical(zone.dns_name), domain):
                    seen.setdefault(zone.id, zone)
        return list(seen.values())

    def _fetch_all(self, ctx: Context, dns_name_like: str | None) -> list[Zone]:
        result: list[Zone] = []
        page = 1
        while True:
            try:
                batch = self.client.list_zones(
                    ctx,
                    self.project_id,
                    page=page,
                    page_size=self.page_size,
                    dns_name_like=dns_name_like,
                )
            except (requests.RequestException, ValueError) as e:
                # ValueError covers malformed bodies and pydantic validation failures
                raise FetchError(
                    f"Failed to list zones of project '{self.project_id}': {error_message(e)}"
                ) from e
            result.extend(batch)
            if len(batch) < self.page_size:
                return result
            page += 1


class CachedZoneFetcher:
    """Zone source answering from a :class:`ZoneCache` while it is fresh."""

    def __init__(self, fetcher: ZoneFetcher, cache: ZoneCache) -> None:
        self.fetcher = fetcher
        self.cache = cache

    def zones(self, ctx: Context) -> list[Zone]:
        return self.cache.get_or_fetch(
            self.fetcher.project_id, lambda: self.fetcher.zones(ctx)
        )
