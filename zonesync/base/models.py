"""
Pydantic models shared by the reconciliation core and the API client.

Remote resources (:class:`Zone`, :class:`RecordSet`) are parsed straight
from the DNS API's JSON, which uses camelCase keys.  :class:`Endpoint`
accepts both the snake_case field names and the camelCase keys used by
external-dns webhook payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Action(str, Enum):
    """The three change kinds of a reconciliation batch."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class Endpoint(BaseModel):
    """Desired state of one DNS record set."""

    model_config = ConfigDict(populate_by_name=True)

    dns_name: str = Field(alias="dnsName")
    record_type: str = Field(alias="recordType")
    targets: list[str] = Field(default_factory=list)
    ttl: int = Field(default=0, alias="recordTTL")
    labels: dict[str, str] = Field(default_factory=dict)


class Zone(BaseModel):
    """Authoritative zone as listed by the DNS API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str
    dns_name: str = Field(alias="dnsName")
    name: str = ""
    state: str | None = None


class Record(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str


class RecordSet(BaseModel):
    """Remote record set, only read for update/delete matching."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    type: str
    ttl: int = 0
    records: list[Record] = Field(default_factory=list)
    state: str | None = None


class RRSetCreatePayload(BaseModel):
    """Body of ``POST /v1/projects/{projectId}/zones/{zoneId}/rrsets``."""

    name: str
    type: str
    ttl: int
    records: list[Record]


class RRSetPatchPayload(BaseModel):
    """Body of ``PATCH /v1/projects/{projectId}/zones/{zoneId}/rrsets/{rrSetId}``."""

    name: str
    ttl: int
    records: list[Record]


@dataclass(frozen=True)
class ChangeTask:
    """One endpoint to be handled by a worker under a single action."""

    action: Action
    endpoint: Endpoint
