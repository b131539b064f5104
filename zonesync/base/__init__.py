"""Abstract API blueprint, shared models and core utilities.

Import the blueprint to type-hint your own code or to plug in another
transport for the DNS management API.
"""

from .dns import DNSAPIBlueprint
from .context import Context, background
from .models import Action, ChangeTask, Endpoint, RecordSet, Zone


__all__ = [
    "DNSAPIBlueprint",
    "Context",
    "background",
    "Action",
    "ChangeTask",
    "Endpoint",
    "RecordSet",
    "Zone",
]
