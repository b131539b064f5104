"""Reconciliation core: zone directory, record set locator, translator,
worker pool and the three-phase orchestrator."""

from .provider import StackitDNSProvider
from .report import ApplyReport, BatchReport, Outcome
from .rrsets import RRSetFetcher
from .workers import ChangeDispatcher
from .zones import CachedZoneFetcher, ZoneFetcher, find_best_matching_zone

__all__ = [
    "StackitDNSProvider",
    "ApplyReport",
    "BatchReport",
    "Outcome",
    "RRSetFetcher",
    "ChangeDispatcher",
    "CachedZoneFetcher",
    "ZoneFetcher",
    "find_best_matching_zone",
]
