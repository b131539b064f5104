"""
Change translation between endpoints and DNS API payloads.

:func:`normalize` is the only function here that mutates; the payload
projections and log helpers are pure.
"""

from __future__ import annotations

from typing import Any

import requests

from zonesync.base.models import (
    Action,
    Endpoint,
    Record,
    RRSetCreatePayload,
    RRSetPatchPayload,
)

DEFAULT_TTL = 300


def _quote_txt(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value
    return '"' + value.replace('"', '\\"') + '"'


def normalize(endpoint: Endpoint) -> Endpoint:
    """Bring *endpoint* into the form the DNS API expects, in place.

    Strips trailing dots from the name and from every non-TXT target,
    quotes TXT targets and fills in the default TTL.  Applying it twice is the same
    as applying it once.
    """
    endpoint.dns_name = endpoint.dns_name.rstrip(".")
    endpoint.record_type = endpoint.record_type.upper()
    if endpoint.record_type == "TXT":
        # TXT targets are free text, so trailing dots are content and stay
        endpoint.targets = [_quote_txt(t) for t in endpoint.targets]
    else:
        endpoint.targets = [t.rstrip(".") for t in endpoint.targets]
    if not endpoint.ttl:
        endpoint.ttl = DEFAULT_TTL
    return endpoint


def _records(endpoint: Endpoint) -> list[Record]:
    return [Record(content=t) for t in endpoint.targets]


def to_create_payload(endpoint: Endpoint) -> RRSetCreatePayload:
    return RRSetCreatePayload(
        name=endpoint.dns_name,
        type=endpoint.record_type,
        ttl=endpoint.ttl,
        records=_records(endpoint),
    )


def to_update_payload(endpoint: Endpoint) -> RRSetPatchPayload:
    return RRSetPatchPayload(
        name=endpoint.dns_name,
        ttl=endpoint.ttl,
        records=_records(endpoint),
    )


def log_fields(endpoint: Endpoint, action: Action, resource_id: str) -> dict[str, Any]:
    """Structured fields describing one change, for the logging port."""
    return {
        "record": endpoint.dns_name,
        "content": ",".join(endpoint.targets),
        "type": endpoint.record_type,
        "ttl": endpoint.ttl,
        "action": action.value,
        "id": resource_id,
    }


def error_message(exc: BaseException) -> str:
    """Extract a human-readable message from an opaque transport error.

    Prefers the ``message`` field of a JSON error body, then the raw body,
    then the exception text.
    """
    response = getattr(exc, "response", None)
    if isinstance(exc, requests.RequestException) and response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return f"{response.status_code}: {body['message']}"
        if response.text:
            return f"{response.status_code}: {response.text}"
    cause = exc.__cause__
    if cause is not None and cause is not exc:
        return error_message(cause)
    return str(exc)
