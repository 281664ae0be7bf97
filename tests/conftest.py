"""Shared fixtures: a fresh store and an app wired with zero-latency collaborators."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from db.store import RecordStore
from processing.summarizer import TemplateSummaryService
from server.app import create_app
from sharing.mailer import Mailer


class RecordingMailer(Mailer):
    """Captures sends instead of delivering them."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict] = []

    async def send(self, recipients, subject, body, sender_name=None):
        if self.fail:
            raise ConnectionError("smtp relay unavailable")
        self.sent.append({
            "recipients": list(recipients),
            "subject": subject,
            "body": body,
            "sender_name": sender_name,
        })


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture
def summarizer() -> TemplateSummaryService:
    return TemplateSummaryService(delay=0)


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def app(store, summarizer, mailer):
    return create_app(store, summarizer, mailer, debug=True)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def transcript(client) -> dict:
    response = await client.post(
        "/api/transcripts",
        json={"title": "Standup", "content": "Alice: shipped the parser. Bob: blocked on review."},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def summary(client, transcript) -> dict:
    response = await client.post(
        "/api/summaries",
        json={"transcriptId": transcript["id"], "instruction": "List action items"},
    )
    assert response.status_code == 201, response.text
    return response.json()
