"""Zonesync: reconcile desired DNS records against the STACKIT DNS API.

Entry point for the library. Import :func:`create_provider` to get a
provider with a single call::

    from zonesync import create_provider, background

    provider = create_provider({"project_id": "my-project", "workers": 4})
    provider.apply_changes(background(), creates, updates, deletes)
"""

from .base import (
    DNSAPIBlueprint,
    Context,
    background,
    Action,
    Endpoint,
    Zone,
    RecordSet,
)
from .factory import create_provider
from .reconcile import StackitDNSProvider, ApplyReport, BatchReport

__all__ = [
    "DNSAPIBlueprint",
    "Context",
    "background",
    "Action",
    "Endpoint",
    "Zone",
    "RecordSet",
    "StackitDNSProvider",
    "ApplyReport",
    "BatchReport",
    "create_provider",
]
