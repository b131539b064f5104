"""Record set locator for updates and deletions."""

from __future__ import annotations

import requests

from zonesync.base.context import Context
from zonesync.base.dns import DNSAPIBlueprint
from zonesync.base.exceptions import (
    AmbiguousRecordSetError,
    RecordSetNotFoundError,
    RemoteCallError,
    ZoneNotMatchedError,
)
from zonesync.base.models import Endpoint, RecordSet, Zone
from zonesync.reconcile.translate import error_message
from zonesync.reconcile.zones import find_best_matching_zone


class RRSetFetcher:
    """Finds the remote record set an endpoint refers to.

    Attributes:
        client: DNS API client.
        project_id: Project owning the zones.
    """

    def __init__(self, client: DNSAPIBlueprint, project_id: str) -> None:
        self.client = client
        self.project_id = project_id

    def zone_for(self, endpoint: Endpoint, zones: list[Zone]) -> Zone:
        """Return the best-matching zone for *endpoint*.

        Raises:
            ZoneNotMatchedError: If no zone owns the endpoint's name.
        """
        zone = find_best_matching_zone(endpoint.dns_name, zones)
        if zone is None:
            raise ZoneNotMatchedError(f"no matching zone found for {endpoint.dns_name}")
        return zone

    def locate(
        self,
        ctx: Context,
        endpoint: Endpoint,
        zones: list[Zone],
    ) -> tuple[Zone, RecordSet]:
        """Return the zone and the single record set matching *endpoint*.

        The endpoint is expected to be normalized already.

        Raises:
            ZoneNotMatchedError: If no zone owns the endpoint's name.
            RecordSetNotFoundError: If the zone has no such name/type pair.
            AmbiguousRecordSetError: If the zone has several.
            RemoteCallError: If the record set listing failed.
        """
        zone = self.zone_for(endpoint, zones)
        # record set names are fully qualified on the API side
        fqdn = endpoint.dns_name.rstrip(".") + "."
        try:
            rrsets = self.client.list_record_sets(
                ctx, self.project_id, zone.id, fqdn, endpoint.record_type
            )
        except (requests.RequestException, ValueError) as e:
            raise RemoteCallError(
                f"Failed to list record sets for {endpoint.dns_name} in zone '{zone.id}': "
                f"{error_message(e)}"
            ) from e

        if not rrsets:
            raise RecordSetNotFoundError(
                f"no {endpoint.record_type} record set {endpoint.dns_name} in zone '{zone.id}'"
            )
        if len(rrsets) > 1:
            raise AmbiguousRecordSetError(
                f"{len(rrsets)} {endpoint.record_type} record sets named "
                f"{endpoint.dns_name} in zone '{zone.id}'"
            )
        return zone, rrsets[0]
