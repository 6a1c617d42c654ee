from __future__ import annotations

from datetime import datetime, timezone

from feedback_engine.models import ContactMessage
from feedback_engine.normalize import matches_query, message_text, parse_timestamp, to_contact_message
from feedback_engine.utils import stable_id


class TestParseTimestamp:
    def test_iso_zulu(self) -> None:
        assert parse_timestamp("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_naive_iso_assumed_utc(self) -> None:
        assert parse_timestamp("2024-03-01T10:00:00") == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_epoch_seconds_and_millis(self) -> None:
        expected = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp(1704067200) == expected
        assert parse_timestamp(1704067200000) == expected

    def test_mongo_extended_json(self) -> None:
        expected = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp({"$date": "2024-01-01T00:00:00.000Z"}) == expected
        assert parse_timestamp({"$date": {"$numberLong": "1704067200000"}}) == expected

    def test_garbage(self) -> None:
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(True) is None
        assert parse_timestamp({"$date": {"$numberLong": "x"}}) is None


class TestToContactMessage:
    def test_maps_store_fields(self) -> None:
        payload = {
            "_id": {"$oid": "65f0c0ffee"},
            "name": " Ana ",
            "email": "ana@example.com",
            "phone": "",
            "subject": "Thanks",
            "message": "Great job board",
            "status": "read",
            "createdAt": "2024-03-01T10:00:00Z",
        }
        msg = to_contact_message(payload)
        assert msg is not None
        assert msg.id == "65f0c0ffee"
        assert msg.name == "Ana"
        assert msg.phone is None
        assert msg.status == "read"
        assert msg.priority == "medium"
        assert msg.created_at == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)
        assert msg.raw == payload

    def test_stable_id_when_store_id_missing(self) -> None:
        payload = {"email": "a@b.c", "subject": "Hi", "message": "x", "createdAt": "2024-03-01T10:00:00Z"}
        msg = to_contact_message(payload)
        assert msg is not None
        assert msg.id == stable_id("a@b.c", "Hi", "2024-03-01T10:00:00+00:00")
        assert to_contact_message(dict(payload)).id == msg.id

    def test_body_alias(self) -> None:
        msg = to_contact_message({"id": 7, "body": "love it"})
        assert msg is not None
        assert msg.id == "7"
        assert msg.message == "love it"

    def test_nothing_to_score(self) -> None:
        assert to_contact_message({"name": "x", "subject": "  ", "message": ""}) is None


def test_message_text_joins_subject_and_body() -> None:
    assert message_text({"subject": "Hi", "message": "there"}) == "Hi there"
    assert message_text({"subject": None}) == " "
    assert message_text(ContactMessage(id="1", subject="a", message="b")) == "a b"


def test_matches_query() -> None:
    msg = ContactMessage(id="1", name="Ana", email="ana@example.com", subject="Search", message="is slow")
    assert matches_query(msg, None)
    assert matches_query(msg, "SLOW")
    assert matches_query(msg, "example.com")
    assert not matches_query(msg, "pricing")
