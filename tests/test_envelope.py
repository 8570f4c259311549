"""Tests for odatable.envelope: Envelope, parse_envelope, parse_collection, parse_entity."""

import logging

import pytest

from odatable.envelope import Envelope, parse_collection, parse_entity, parse_envelope


def test_parse_collection_returns_value():
    response = {
        "@odata.context": "http://example.com/$metadata#Clubs",
        "@odata.count": 2,
        "value": [{"id": "1", "name": "Club 1"}, {"id": "2", "name": "Club 2"}],
    }
    assert parse_collection(response) == [{"id": "1", "name": "Club 1"}, {"id": "2", "name": "Club 2"}]


def test_parse_collection_keeps_items_untouched():
    item = {"id": "1", "@odata.etag": "W/1"}
    assert parse_collection({"value": [item]})[0] is item


def test_parse_collection_missing_value_is_empty(caplog):
    with caplog.at_level(logging.WARNING, logger="odatable"):
        assert parse_collection({"@odata.count": 3}) == []
    assert "no `value`" in caplog.text


def test_parse_collection_invalid_value_is_empty():
    assert parse_collection({"value": None}) == []
    assert parse_collection({"value": "oops"}) == []
    assert parse_collection({"value": {"id": 1}}) == []


def test_parse_collection_non_mapping_is_empty():
    assert parse_collection(None) == []
    assert parse_collection([1, 2]) == []


def test_parse_envelope_metadata():
    envelope = parse_envelope(
        {
            "@odata.context": "ctx",
            "@odata.count": 42,
            "@odata.nextLink": "News?$skip=10",
            "value": [1],
        }
    )
    assert envelope.value == [1]
    assert envelope.total_count == 42
    assert envelope.next_link == "News?$skip=10"
    assert envelope.context == "ctx"


def test_parse_envelope_alternate_casing():
    envelope = parse_envelope({"value": [], "totalCount": 7, "nextLink": "x"})
    assert envelope.total_count == 7
    assert envelope.next_link == "x"


def test_parse_envelope_bad_count_is_ignored():
    assert parse_envelope({"value": [], "@odata.count": "many"}).total_count is None
    assert parse_envelope({"value": [], "@odata.count": True}).total_count is None
    assert parse_envelope({"value": [], "@odata.count": "12"}).total_count == 12
    assert parse_envelope({"value": [], "@odata.count": -4}).total_count == 0


@pytest.mark.parametrize(
    "key, bad_value",
    [
        ("@odata.nextLink", 5),
        ("@odata.nextLink", ["News?$skip=10"]),
        ("@odata.context", 123),
        ("@odata.context", {"url": "ctx"}),
        ("@odata.count", float("inf")),
        ("@odata.count", float("nan")),
        ("@odata.count", [3]),
        ("@odata.count", {"n": 3}),
    ],
)
def test_parse_envelope_wrong_typed_metadata_is_ignored(caplog, key, bad_value):
    with caplog.at_level(logging.WARNING, logger="odatable"):
        envelope = parse_envelope({"value": [1], key: bad_value})
    assert envelope.value == [1]
    assert envelope.total_count is None
    assert envelope.next_link is None
    assert envelope.context is None
    assert "odatable" in [record.name for record in caplog.records]


def test_parse_collection_ignores_wrong_typed_metadata():
    assert parse_collection({"value": [1], "@odata.nextLink": 5, "@odata.context": 123}) == [1]


def test_parse_envelope_keeps_valid_metadata_next_to_invalid():
    envelope = parse_envelope({"value": [1], "@odata.count": 9, "@odata.nextLink": 5, "@odata.context": "ctx"})
    assert envelope.total_count == 9
    assert envelope.next_link is None
    assert envelope.context == "ctx"


def test_parse_envelope_passthrough():
    envelope = Envelope(value=[1], total_count=1)
    assert parse_envelope(envelope) is envelope


def test_parse_entity_removes_metadata():
    assert parse_entity({"@meta": 1, "id": "x"}) == {"id": "x"}


def test_parse_entity_keeps_domain_fields():
    response = {
        "@odata.context": "http://example.com/$metadata#Clubs/$entity",
        "@odata.etag": "W/\"1\"",
        "id": "1",
        "name": "Test Club",
        "email@domain": "kept",
        "nested": {"@odata.type": "kept too"},
    }
    result = parse_entity(response)
    assert result == {
        "id": "1",
        "name": "Test Club",
        "email@domain": "kept",
        "nested": {"@odata.type": "kept too"},
    }
    assert "@odata.context" in response
    assert result["nested"] is response["nested"]
