"""Tests for endpoint normalization and payload projection."""

import pytest
import requests

from zonesync.base.exceptions import RemoteCallError
from zonesync.base.models import Action, Endpoint
from zonesync.reconcile.translate import (
    DEFAULT_TTL,
    error_message,
    log_fields,
    normalize,
    to_create_payload,
    to_update_payload,
)


def _ep(**kwargs):
    data = {"dns_name": "foo.example.com.", "record_type": "A", "targets": ["192.0.2.1"]}
    data.update(kwargs)
    return Endpoint(**data)


class TestNormalize:
    def test_strips_trailing_dots(self):
        ep = normalize(_ep(record_type="CNAME", targets=["bar.example.com."]))
        assert ep.dns_name == "foo.example.com"
        assert ep.targets == ["bar.example.com"]

    def test_mutates_in_place(self):
        ep = _ep()
        assert normalize(ep) is ep
        assert ep.dns_name == "foo.example.com"

    def test_default_ttl(self):
        assert normalize(_ep()).ttl == DEFAULT_TTL
        assert normalize(_ep(ttl=60)).ttl == 60

    def test_quotes_txt(self):
        ep = normalize(_ep(record_type="txt", targets=["v=spf1 -all", '"already"']))
        assert ep.record_type == "TXT"
        assert ep.targets == ['"v=spf1 -all"', '"already"']

    def test_txt_keeps_trailing_dot(self):
        ep = normalize(_ep(record_type="TXT", targets=["ends with a dot."]))
        assert ep.targets == ['"ends with a dot."']

    @pytest.mark.parametrize("record_type, targets", [
        ("A", ["192.0.2.1"]),
        ("CNAME", ["target.example.org."]),
        ("TXT", ['say "hi"', "heritage=external-dns"]),
    ])
    def test_idempotent(self, record_type, targets):
        once = normalize(_ep(record_type=record_type, targets=targets)).model_dump()
        twice = normalize(normalize(_ep(record_type=record_type, targets=targets))).model_dump()
        assert once == twice


class TestPayloads:
    def test_create_payload(self):
        ep = normalize(_ep(targets=["192.0.2.1", "192.0.2.2"], ttl=120))
        payload = to_create_payload(ep)
        assert payload.model_dump() == {
            "name": "foo.example.com",
            "type": "A",
            "ttl": 120,
            "records": [{"content": "192.0.2.1"}, {"content": "192.0.2.2"}],
        }

    def test_update_payload_has_no_type(self):
        payload = to_update_payload(normalize(_ep()))
        assert "type" not in payload.model_dump()
        assert payload.name == "foo.example.com"

    def test_projection_is_pure(self):
        ep = normalize(_ep())
        before = ep.model_dump()
        to_create_payload(ep)
        to_update_payload(ep)
        assert ep.model_dump() == before


class TestLogFields:
    def test_fields(self):
        ep = normalize(_ep(targets=["192.0.2.1", "192.0.2.2"]))
        fields = log_fields(ep, Action.UPDATE, "rr1")
        assert fields == {
            "record": "foo.example.com",
            "content": "192.0.2.1,192.0.2.2",
            "type": "A",
            "ttl": DEFAULT_TTL,
            "action": "UPDATE",
            "id": "rr1",
        }


class TestErrorMessage:
    def test_json_message(self, http_error):
        assert error_message(http_error) == "400: bad request"

    def test_plain_body(self):
        response = requests.Response()
        response.status_code = 502
        response._content = b"Bad Gateway"
        assert error_message(requests.HTTPError(response=response)) == "502: Bad Gateway"

    def test_no_response(self):
        assert error_message(requests.ConnectionError("refused")) == "refused"

    def test_follows_cause(self, http_error):
        try:
            try:
                raise http_error
            except requests.HTTPError as e:
                raise RemoteCallError("error creating record set") from e
        except RemoteCallError as wrapped:
            assert error_message(wrapped) == "400: bad request"
