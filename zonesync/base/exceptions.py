"""
Zonesync exception hierarchy.

Every failure raised by the reconciliation core inherits from
:class:`ZonesyncError`.  Only :class:`FetchError` escapes
``apply_changes``; match and remote-call errors are caught per task by
the worker pool and logged.
"""


# ── Base ──────────────────────────────────────────────────────────────
class ZonesyncError(Exception):
    """Root exception for all Zonesync errors."""


class ConfigError(ZonesyncError):
    """Provider configuration is missing or invalid."""


# ── Zone directory ────────────────────────────────────────────────────
class FetchError(ZonesyncError):
    """Listing the zones of the project failed."""


# ── Matching ──────────────────────────────────────────────────────────
class MatchError(ZonesyncError):
    """No zone or no record set corresponds to an endpoint."""


class ZoneNotMatchedError(MatchError):
    """No zone suffix matches the endpoint's DNS name."""


class RecordSetNotFoundError(MatchError):
    """The matched zone holds no record set for the endpoint's name and type."""


class AmbiguousRecordSetError(MatchError):
    """The matched zone holds several record sets for one name and type."""


# ── Remote calls ──────────────────────────────────────────────────────
class RemoteCallError(ZonesyncError):
    """A create, patch, delete or lookup call against the DNS API failed."""
