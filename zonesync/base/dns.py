"""DNS management API blueprint."""

from abc import ABC, abstractmethod

from zonesync.base.context import Context
from zonesync.base.models import RecordSet, RRSetCreatePayload, RRSetPatchPayload, Zone


class DNSAPIBlueprint(ABC):
    """Abstract interface for a zone-oriented DNS management API.

    Maps to the STACKIT DNS API (``/v1/projects/{projectId}/zones``).
    Implementations raise their transport's own exceptions; the
    reconciliation core wraps them, it never inspects status codes.
    """

    # --- Zones ---

    @abstractmethod
    def list_zones(
        self,
        ctx: Context,
        project_id: str,
        page: int = 1,
        page_size: int = 10000,
        dns_name_like: str | None = None,
    ) -> list[Zone]:
        """List one page of the project's zones.

        Args:
            ctx: Cancellation context of the current pass.
            project_id: Project owning the zones.
            page: 1-based page number.
            page_size: Zones per page.
            dns_name_like: Optional server-side ``dnsName[like]`` filter.

        Returns:
            The zones on that page; an empty list past the last page.
        """

    # --- Record sets ---

    @abstractmethod
    def create_record_set(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        payload: RRSetCreatePayload,
    ) -> RecordSet | None:
        """Create a record set in a zone.

        Returns:
            The created record set, or ``None`` when the answer does not echo it.
        """

    @abstractmethod
    def list_record_sets(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        name: str,
        record_type: str,
    ) -> list[RecordSet]:
        """List the record sets of a zone matching *name* and *record_type* exactly.

        Args:
            name: Fully qualified record name, with trailing dot.
            record_type: Record type (A, AAAA, CNAME, TXT, ...).
        """

    @abstractmethod
    def patch_record_set(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        rrset_id: str,
        payload: RRSetPatchPayload,
    ) -> RecordSet | None:
        """Override name, TTL and records of an existing record set.

        Returns:
            The patched record set, or ``None`` when the answer does not echo it.
        """

    @abstractmethod
    def delete_record_set(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        rrset_id: str,
    ) -> None:
        """Delete a record set."""
