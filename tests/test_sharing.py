"""Share dispatch tests: validation before delivery, one record per recipient."""

from __future__ import annotations

import logging

import pytest

from errors import DeliveryFailed, NotFound, ValidationFailed
from sharing.mailer import (
    LoggingMailer,
    ShareDispatcher,
    compose_body,
    compose_subject,
    find_invalid_addresses,
    normalize_recipients,
)


@pytest.fixture
async def stored_summary(store):
    transcript = await store.create_transcript("Planning", "content")
    return await store.create_summary(transcript.id, "p1", "Original summary")


def test_address_pattern():
    assert find_invalid_addresses(["a@b.co", "first.last@sub.example.org"]) == []
    assert find_invalid_addresses(["not-an-email", "a b@c.d", "a@b", "@b.c"]) == [
        "not-an-email", "a b@c.d", "a@b", "@b.c",
    ]


def test_normalize_trims_and_dedupes():
    assert normalize_recipients([" a@x.io ", "A@X.io", "b@x.io"]) == ["a@x.io", "b@x.io"]


async def test_blank_recipient_rejects_whole_request(store, stored_summary, mailer):
    assert normalize_recipients(["a@x.io", "  "]) == ["a@x.io", ""]

    with pytest.raises(ValidationFailed) as excinfo:
        await ShareDispatcher(store, mailer).share(stored_summary.id, ["a@example.com", "  "], "T")

    assert "(blank)" in excinfo.value.message
    assert mailer.sent == []
    assert await store.list_email_share_records() == []


def test_subject_uses_transcript_title():
    assert compose_subject("Weekly Sync") == "Meeting Summary: Weekly Sync"


async def test_body_uses_effective_content_and_custom_message(store, stored_summary):
    edited = await store.update_summary(stored_summary.id, "Edited summary")

    body = compose_body(edited, "Planning", "FYI team")

    assert body.startswith("FYI team")
    assert "Meeting: Planning" in body
    assert "Edited summary" in body
    assert "Original summary" not in body


async def test_share_records_one_entry_per_recipient(store, stored_summary, mailer):
    dispatcher = ShareDispatcher(store, mailer)
    recipients = ["a@example.com", "b@example.com", "c@example.com"]

    result = await dispatcher.share(stored_summary.id, recipients, "Planning", sender_name="Ann")

    assert result.recipient_count == 3
    assert result.message == "Summary sent to 3 recipients"
    records = await store.list_email_share_records(stored_summary.id)
    assert sorted(r.recipient_email for r in records) == recipients
    assert all(r.summary_id == stored_summary.id and r.sender_name == "Ann" for r in records)
    assert len(mailer.sent) == 1
    assert mailer.sent[0]["subject"] == "Meeting Summary: Planning"


async def test_single_recipient_message(store, stored_summary, mailer):
    result = await ShareDispatcher(store, mailer).share(
        stored_summary.id, ["a@example.com"], "Planning"
    )
    assert result.message == "Summary sent to 1 recipient"


async def test_one_invalid_address_rejects_whole_request(store, stored_summary, mailer):
    dispatcher = ShareDispatcher(store, mailer)

    with pytest.raises(ValidationFailed) as excinfo:
        await dispatcher.share(stored_summary.id, ["a@example.com", "not-an-email"], "Planning")

    assert "not-an-email" in excinfo.value.message
    assert mailer.sent == []
    assert await store.list_email_share_records() == []


async def test_missing_summary_is_not_found(store, mailer):
    with pytest.raises(NotFound):
        await ShareDispatcher(store, mailer).share("missing", ["a@example.com"], "T")


async def test_empty_recipients_rejected(store, stored_summary, mailer):
    with pytest.raises(ValidationFailed):
        await ShareDispatcher(store, mailer).share(stored_summary.id, [], "T")


async def test_delivery_failure_writes_no_records(store, stored_summary, mailer):
    mailer.fail = True
    dispatcher = ShareDispatcher(store, mailer)

    with pytest.raises(DeliveryFailed):
        await dispatcher.share(stored_summary.id, ["a@example.com"], "Planning")

    assert await store.list_email_share_records() == []


async def test_record_failure_does_not_fail_send(store, stored_summary, mailer, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("log full")

    monkeypatch.setattr(store, "create_email_share_record", broken)
    result = await ShareDispatcher(store, mailer).share(
        stored_summary.id, ["a@example.com", "b@example.com"], "Planning"
    )

    assert result.recipient_count == 2
    assert result.records == []


async def test_logging_mailer_logs_envelope(caplog):
    with caplog.at_level(logging.INFO, logger="sharing.mailer"):
        await LoggingMailer(delay=0).send(["a@example.com"], "Meeting Summary: T", "body", "Ann")
    assert "a@example.com" in caplog.text
    assert "Meeting Summary: T" in caplog.text
