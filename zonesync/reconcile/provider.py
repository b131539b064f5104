"""
Reconciliation orchestrator.

Applies one batch of changes in three strictly sequential phases:
creates, then updates, then deletes.  Each phase lists the zones once,
fans its endpoints out over the worker pool and waits for every worker
before the next phase starts.  Only a failed zone listing stops the
call; failures of single changes are left to the next pass.
"""

from __future__ import annotations

import requests

from zonesync.base.config import ProviderConfig
from zonesync.base.context import Context
from zonesync.base.dns import DNSAPIBlueprint
from zonesync.base.exceptions import RemoteCallError
from zonesync.base.logger import ZonesyncLogger
from zonesync.base.models import Action, Endpoint, Zone
from zonesync.reconcile.report import ApplyReport, Outcome
from zonesync.reconcile.rrsets import RRSetFetcher
from zonesync.reconcile.translate import (
    error_message,
    log_fields,
    normalize,
    to_create_payload,
    to_update_payload,
)
from zonesync.reconcile.workers import ChangeDispatcher, ChangeHandler
from zonesync.reconcile.zones import ZoneFetcher, ZoneSource


class StackitDNSProvider:
    """Applies desired-state changes to the STACKIT DNS API.

    Attributes:
        client: DNS API client.
        project_id: Project owning the zones.
        dry_run: Log intended changes without calling the API.
        zone_fetcher: Source of the zone listing, queried once per phase.
        rrset_fetcher: Locator for the record sets of updates and deletes.
        dispatcher: Worker pool shared by all phases.
    """

    def __init__(
        self,
        config: ProviderConfig,
        client: DNSAPIBlueprint,
        logger: ZonesyncLogger,
        zone_fetcher: ZoneSource | None = None,
        rrset_fetcher: RRSetFetcher | None = None,
    ) -> None:
        self.client = client
        self.logger = logger
        self.project_id = config.project_id
        self.dry_run = config.dry_run
        self.zone_fetcher = zone_fetcher or ZoneFetcher(
            client,
            config.project_id,
            domain_filter=config.domain_filter,
            page_size=config.page_size,
        )
        self.rrset_fetcher = rrset_fetcher or RRSetFetcher(client, config.project_id)
        self.dispatcher = ChangeDispatcher(config.workers, logger)

    def apply_changes(
        self,
        ctx: Context,
        creates: list[Endpoint],
        updates: list[Endpoint],
        deletes: list[Endpoint],
    ) -> ApplyReport:
        """Apply a batch of changes.

        Args:
            ctx: Cancellation context for the whole pass.
            creates: Endpoints to create.
            updates: New state of endpoints to update.
            deletes: Endpoints to delete.

        Returns:
            Per-phase outcome counts.  Callers that only care about success
            may ignore it.

        Raises:
            FetchError: If listing zones fails; later phases are skipped.
        """
        report = ApplyReport()
        self._apply_phase(ctx, creates, Action.CREATE, self.create_rrset, report)
        self._apply_phase(ctx, updates, Action.UPDATE, self.update_rrset, report)
        self._apply_phase(ctx, deletes, Action.DELETE, self.delete_rrset, report)
        return report

    def _apply_phase(
        self,
        ctx: Context,
        endpoints: list[Endpoint],
        action: Action,
        handler: ChangeHandler,
        report: ApplyReport,
    ) -> None:
        verb = action.value.lower()
        if not endpoints:
            self.logger.debug(f"no endpoints to {verb}")
            return

        self.logger.info(f"records to {verb}", action=action.value, count=len(endpoints))
        zones = self.zone_fetcher.zones(ctx)
        batch = self.dispatcher.run(ctx, endpoints, zones, action, handler)
        report.add(batch)
        self.logger.info(f"{verb} phase finished", action=action.value, count=batch.total)

    # --- per-task handlers, called from worker threads ---

    def create_rrset(self, ctx: Context, endpoint: Endpoint, zones: list[Zone]) -> Outcome:
        """Create a record set for *endpoint* in its best-matching zone."""
        normalize(endpoint)
        zone = self.rrset_fetcher.zone_for(endpoint, zones)

        log = self.logger.bind(zone=zone.id, **log_fields(endpoint, Action.CREATE, zone.id))
        log.info("create record set")
        if self.dry_run:
            log.debug("dry run, skipping")
            return Outcome.DRY_RUN

        try:
            self.client.create_record_set(
                ctx, self.project_id, zone.id, to_create_payload(endpoint)
            )
        except requests.RequestException as e:
            raise RemoteCallError(f"error creating record set: {error_message(e)}") from e

        log.info("create record set successfully")
        return Outcome.APPLIED

    def update_rrset(self, ctx: Context, endpoint: Endpoint, zones: list[Zone]) -> Outcome:
        """Patch the record set matching *endpoint* with its new targets and TTL."""
        normalize(endpoint)
        zone, rrset = self.rrset_fetcher.locate(ctx, endpoint, zones)

        log = self.logger.bind(zone=zone.id, **log_fields(endpoint, Action.UPDATE, rrset.id))
        log.info("update record set")
        if self.dry_run:
            log.debug("dry run, skipping")
            return Outcome.DRY_RUN

        try:
            self.client.patch_record_set(
                ctx, self.project_id, zone.id, rrset.id, to_update_payload(endpoint)
            )
        except requests.RequestException as e:
            raise RemoteCallError(f"error updating record set: {error_message(e)}") from e

        log.info("update record set successfully")
        return Outcome.APPLIED

    def delete_rrset(self, ctx: Context, endpoint: Endpoint, zones: list[Zone]) -> Outcome:
        """Delete the record set matching *endpoint*."""
        normalize(endpoint)
        zone, rrset = self.rrset_fetcher.locate(ctx, endpoint, zones)

        log = self.logger.bind(zone=zone.id, **log_fields(endpoint, Action.DELETE, rrset.id))
        log.info("delete record set")
        if self.dry_run:
            log.debug("dry run, skipping")
            return Outcome.DRY_RUN

        try:
            self.client.delete_record_set(ctx, self.project_id, zone.id, rrset.id)
        except requests.RequestException as e:
            raise RemoteCallError(f"error deleting record set: {error_message(e)}") from e

        log.info("delete record set successfully")
        return Outcome.APPLIED
