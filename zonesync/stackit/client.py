"""STACKIT DNS REST implementation of the DNS API blueprint."""

from __future__ import annotations

from typing import Any

import requests
from pydantic import ValidationError

from zonesync.base.config import ProviderConfig
from zonesync.base.context import Context
from zonesync.base.dns import DNSAPIBlueprint
from zonesync.base.models import RecordSet, RRSetCreatePayload, RRSetPatchPayload, Zone
from zonesync.base.retry import retry

# Lower bound for a per-request timeout once the context deadline is close.
_MIN_TIMEOUT = 0.001


class StackitDNSClient(DNSAPIBlueprint):
    """STACKIT DNS API client over a shared :class:`requests.Session`.

    Listing calls retry on connection errors and timeouts; mutating calls
    are sent once.  Non-2xx answers raise :class:`requests.HTTPError`.  A
    listing answer that is not a JSON object, or whose items do not parse,
    raises :class:`ValueError` (pydantic's ``ValidationError`` included).

    Attributes:
        session: HTTP session carrying the bearer token.
        base_url: API root, without trailing slash.
        timeout: Default per-request timeout in seconds.
    """

    def __init__(self, config: ProviderConfig, session: requests.Session | None = None) -> None:
        """Initialize the API client.

        Args:
            config: Provider configuration.
                   Used attributes:
                   - base_url: DNS API root URL
                   - api_token: Optional bearer token
                   - request_timeout: Per-request timeout in seconds
            session: Optional pre-built session (tests, custom adapters).
        """
        self.base_url = config.base_url
        self.timeout = config.request_timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")
        if config.api_token:
            self.session.headers["Authorization"] = f"Bearer {config.api_token}"

    def _timeout(self, ctx: Context) -> float:
        remaining = ctx.remaining()
        if remaining is None:
            return self.timeout
        return max(min(self.timeout, remaining), _MIN_TIMEOUT)

    def _url(self, project_id: str, *parts: str) -> str:
        path = "/".join((f"v1/projects/{project_id}/zones", *parts))
        return f"{self.base_url}/{path}"

    def _request(
        self,
        ctx: Context,
        method: str,
        url: str,
        *,
        listing: bool = False,
        **kwargs: Any,
    ) -> dict[str, Any]:
        response = self.session.request(method, url, timeout=self._timeout(ctx), **kwargs)
        response.raise_for_status()
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            if listing:
                raise
            body = None
        if not isinstance(body, dict):
            if not listing:
                return {}
            raise ValueError(f"unexpected {method} {url} response: {type(body).__name__} body")
        return body

    @staticmethod
    def _items(body: dict[str, Any], key: str) -> list[Any]:
        items = body.get(key) or []
        if not isinstance(items, list):
            raise ValueError(f"expected a list under '{key}', got {type(items).__name__}")
        return items

    @staticmethod
    def _echoed_record_set(body: dict[str, Any]) -> RecordSet | None:
        # a 2xx answer means the change was applied, whatever the echo holds
        rrset = body.get("rrset")
        if not isinstance(rrset, dict):
            return None
        try:
            return RecordSet.model_validate(rrset)
        except ValidationError:
            return None

    # --- Zones ---

    @retry(max_attempts=3, base_delay=1.0)
    def list_zones(
        self,
        ctx: Context,
        project_id: str,
        page: int = 1,
        page_size: int = 10000,
        dns_name_like: str | None = None,
    ) -> list[Zone]:
        params: dict[str, Any] = {"page": page, "pageSize": page_size}
        if dns_name_like:
            params["dnsName[like]"] = dns_name_like
        body = self._request(ctx, "GET", self._url(project_id), listing=True, params=params)
        return [Zone.model_validate(z) for z in self._items(body, "zones")]

    # --- Record sets ---

    def create_record_set(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        payload: RRSetCreatePayload,
    ) -> RecordSet | None:
        body = self._request(
            ctx,
            "POST",
            self._url(project_id, zone_id, "rrsets"),
            json=payload.model_dump(),
        )
        return self._echoed_record_set(body)

    @retry(max_attempts=3, base_delay=1.0)
    def list_record_sets(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        name: str,
        record_type: str,
    ) -> list[RecordSet]:
        params = {"name[eq]": name, "type[eq]": record_type}
        body = self._request(
            ctx, "GET", self._url(project_id, zone_id, "rrsets"), listing=True, params=params
        )
        return [RecordSet.model_validate(r) for r in self._items(body, "rrSets")]

    def patch_record_set(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        rrset_id: str,
        payload: RRSetPatchPayload,
    ) -> RecordSet | None:
        body = self._request(
            ctx,
            "PATCH",
            self._url(project_id, zone_id, "rrsets", rrset_id),
            json=payload.model_dump(),
        )
        return self._echoed_record_set(body)

    def delete_record_set(
        self,
        ctx: Context,
        project_id: str,
        zone_id: str,
        rrset_id: str,
    ) -> None:
        self._request(ctx, "DELETE", self._url(project_id, zone_id, "rrsets", rrset_id))
