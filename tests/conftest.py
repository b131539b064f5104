"""Shared fixtures: an in-memory DNS API and a quiet logger."""

from __future__ import annotations

import logging
import threading

import pytest
import requests

from zonesync.base.config import ProviderConfig
from zonesync.base.dns import DNSAPIBlueprint
from zonesync.base.logger import ZonesyncLogger
from zonesync.base.models import RecordSet, Record, Zone


class FakeDNSClient(DNSAPIBlueprint):
    """Thread-safe in-memory DNS API recording every call."""

    def __init__(self, zones=None, rrsets=None):
        self.zones = list(zones or [])
        # (zone_id, name, type) -> list[RecordSet]
        self.rrsets = dict(rrsets or {})
        self.calls = []
        self.fail_on = {}
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)
        exc = self.fail_on.get(call[0])
        if exc is not None:
            raise exc

    def count(self, method):
        return sum(1 for c in self.calls if c[0] == method)

    def list_zones(self, ctx, project_id, page=1, page_size=10000, dns_name_like=None):
        self._record("list_zones", project_id, page, page_size, dns_name_like)
        start = (page - 1) * page_size
        return self.zones[start:start + page_size]

    def create_record_set(self, ctx, project_id, zone_id, payload):
        self._record("create_record_set", project_id, zone_id, payload)
        return RecordSet(
            id=f"rr-{payload.name}",
            name=payload.name + ".",
            type=payload.type,
            ttl=payload.ttl,
            records=payload.records,
        )

    def list_record_sets(self, ctx, project_id, zone_id, name, record_type):
        self._record("list_record_sets", project_id, zone_id, name, record_type)
        return list(self.rrsets.get((zone_id, name, record_type), []))

    def patch_record_set(self, ctx, project_id, zone_id, rrset_id, payload):
        self._record("patch_record_set", project_id, zone_id, rrset_id, payload)
        return RecordSet(id=rrset_id, name=payload.name + ".", type="A", records=payload.records)

    def delete_record_set(self, ctx, project_id, zone_id, rrset_id):
        self._record("delete_record_set", project_id, zone_id, rrset_id)


def make_rrset(rrset_id, name, rtype="A", contents=("192.0.2.1",)):
    return RecordSet(
        id=rrset_id,
        name=name,
        type=rtype,
        ttl=300,
        records=[Record(content=c) for c in contents],
    )


@pytest.fixture
def example_zone():
    return Zone(id="z1", dnsName="example.com")


@pytest.fixture
def fake_client(example_zone):
    return FakeDNSClient(zones=[example_zone])


@pytest.fixture
def config():
    return ProviderConfig(project_id="proj-1", workers=4)


@pytest.fixture
def logger():
    zl = ZonesyncLogger("zonesync.test")
    zl.logger.setLevel(logging.DEBUG)
    return zl


@pytest.fixture
def http_error():
    response = requests.Response()
    response.status_code = 400
    response._content = b'{"message": "bad request"}'
    return requests.HTTPError("400 Client Error", response=response)
