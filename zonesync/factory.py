"""Provider factory.

Provides :func:`create_provider`, the single entry-point for building a
ready-to-use :class:`~zonesync.reconcile.provider.StackitDNSProvider`
from a plain configuration dict.
"""

from __future__ import annotations

import logging
from typing import Any

from zonesync.base.cache import ZoneCache
from zonesync.base.config import validate_config
from zonesync.base.logger import ZonesyncLogger
from zonesync.reconcile.provider import StackitDNSProvider
from zonesync.reconcile.zones import CachedZoneFetcher, ZoneFetcher
from zonesync.stackit.client import StackitDNSClient


def create_provider(
    config: dict[str, Any],
    logger: ZonesyncLogger | None = None,
) -> StackitDNSProvider:
    """
    Build a provider wired to the STACKIT DNS API.
    Args:
        config: Configuration dictionary, see :class:`~zonesync.base.config.ProviderConfig`.
        logger: Logging port; a JSON logger named ``zonesync`` when omitted.
    Returns:
        A provider whose zone listing is cached when ``zone_cache_ttl`` is set.
    Raises:
        ConfigError: If the configuration is invalid.
    """
    cfg = validate_config(config)
    logger = logger or ZonesyncLogger(level=logging.INFO)
    client = StackitDNSClient(cfg)

    zone_fetcher = ZoneFetcher(
        client,
        cfg.project_id,
        domain_filter=cfg.domain_filter,
        page_size=cfg.page_size,
    )
    zone_source = zone_fetcher
    if cfg.zone_cache_ttl > 0:
        zone_source = CachedZoneFetcher(zone_fetcher, ZoneCache(cfg.zone_cache_ttl))

    return StackitDNSProvider(cfg, client, logger, zone_fetcher=zone_source)
