"""Tests for the record set locator."""

from unittest.mock import MagicMock
import pytest
import requests

from zonesync.base.config import ProviderConfig
from zonesync.base.context import background
from zonesync.base.exceptions import (
    AmbiguousRecordSetError,
    MatchError,
    RecordSetNotFoundError,
    RemoteCallError,
    ZoneNotMatchedError,
)
from zonesync.base.models import Endpoint
from zonesync.reconcile.rrsets import RRSetFetcher
from zonesync.stackit.client import StackitDNSClient

from conftest import FakeDNSClient, make_rrset


def _ep(name="bar.example.com", rtype="A"):
    return Endpoint(dns_name=name, record_type=rtype, targets=["192.0.2.1"])


class TestZoneFor:
    def test_match(self, fake_client, example_zone):
        zone = RRSetFetcher(fake_client, "proj").zone_for(_ep(), [example_zone])
        assert zone.id == "z1"

    def test_no_match(self, fake_client, example_zone):
        with pytest.raises(ZoneNotMatchedError):
            RRSetFetcher(fake_client, "proj").zone_for(_ep("x.example.org"), [example_zone])


class TestLocate:
    def test_found(self, example_zone):
        rrset = make_rrset("rr1", "bar.example.com.")
        client = FakeDNSClient(rrsets={("z1", "bar.example.com.", "A"): [rrset]})
        zone, found = RRSetFetcher(client, "proj").locate(background(), _ep(), [example_zone])
        assert zone.id == "z1"
        assert found.id == "rr1"
        assert client.calls == [("list_record_sets", "proj", "z1", "bar.example.com.", "A")]

    def test_zone_miss_skips_lookup(self, fake_client, example_zone):
        with pytest.raises(ZoneNotMatchedError):
            RRSetFetcher(fake_client, "proj").locate(
                background(), _ep("bar.example.org"), [example_zone]
            )
        assert fake_client.calls == []

    def test_record_miss(self, fake_client, example_zone):
        with pytest.raises(RecordSetNotFoundError):
            RRSetFetcher(fake_client, "proj").locate(background(), _ep(), [example_zone])

    def test_misses_share_base_class(self, fake_client, example_zone):
        fetcher = RRSetFetcher(fake_client, "proj")
        for ep in (_ep(), _ep("bar.example.org")):
            with pytest.raises(MatchError):
                fetcher.locate(background(), ep, [example_zone])

    def test_ambiguous(self, example_zone):
        rrsets = [make_rrset("rr1", "bar.example.com."), make_rrset("rr2", "bar.example.com.")]
        client = FakeDNSClient(rrsets={("z1", "bar.example.com.", "A"): rrsets})
        with pytest.raises(AmbiguousRecordSetError):
            RRSetFetcher(client, "proj").locate(background(), _ep(), [example_zone])

    def test_lookup_failure(self, example_zone):
        client = MagicMock()
        client.list_record_sets.side_effect = requests.ConnectionError("down")
        with pytest.raises(RemoteCallError):
            RRSetFetcher(client, "proj").locate(background(), _ep(), [example_zone])

    def test_malformed_listing(self, example_zone):
        session = MagicMock()
        session.headers = {}
        session.request.return_value.content = b"{}"
        session.request.return_value.json.return_value = {"rrSets": [{"name": "bar.example.com."}]}
        client = StackitDNSClient(ProviderConfig(project_id="proj"), session=session)
        with pytest.raises(RemoteCallError):
            RRSetFetcher(client, "proj").locate(background(), _ep(), [example_zone])
