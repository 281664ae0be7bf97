import asyncio
import logging
import re
from dataclasses import dataclass, field

from db.models import EmailShareRecord, Summary
from db.store import RecordStore
from errors import DeliveryFailed, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SIGNATURE = "This summary was generated using AI Meeting Notes Summarizer."


def normalize_recipients(recipients: list[str]) -> list[str]:
    """Trim addresses and drop case-insensitive duplicates, keeping order.

    Blank entries are kept so validation rejects them.
    """
    seen = set()
    result = []
    for address in recipients:
        address = address.strip()
        key = address.lower()
        if not address or key not in seen:
            seen.add(key)
            result.append(address)
    return result


def find_invalid_addresses(recipients: list[str]) -> list[str]:
    return [r for r in recipients if not EMAIL_PATTERN.match(r)]


def compose_subject(transcript_title: str) -> str:
    return f"Meeting Summary: {transcript_title}"


def compose_body(summary: Summary, transcript_title: str,
                 custom_message: str | None = None) -> str:
    parts = []
    if custom_message:
        parts.append(f"{custom_message}\n\n---\n")
    parts.append(f"Meeting: {transcript_title}")
    parts.append(f"Generated: {summary.created_at.strftime('%Y-%m-%d')}\n")
    parts.append(summary.effective_content)
    parts.append(f"\n---\n{SIGNATURE}")
    return "\n".join(parts).strip()


class Mailer:
    """Delivery collaborator. A call either reaches every recipient or fails."""

    async def send(self, recipients: list[str], subject: str, body: str,
                   sender_name: str | None = None):
        raise NotImplementedError


class LoggingMailer(Mailer):
    """Simulated transport: waits a moment and logs the envelope."""

    def __init__(self, delay: float = 1.5):
        self.delay = delay

    async def send(self, recipients, subject, body, sender_name=None):
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        logger.info("Email to %s | subject=%r | from=%s | %d chars",
                    ", ".join(recipients), subject, sender_name, len(body))


@dataclass
class ShareResult:
    recipient_count: int
    records: list[EmailShareRecord] = field(default_factory=list)

    @property
    def message(self) -> str:
        plural = "s" if self.recipient_count != 1 else ""
        return f"Summary sent to {self.recipient_count} recipient{plural}"


class ShareDispatcher:
    def __init__(self, store: RecordStore, mailer: Mailer):
        self.store = store
        self.mailer = mailer

    async def share(self, summary_id: str, recipients: list[str], transcript_title: str,
                    sender_name: str | None = None,
                    custom_message: str | None = None) -> ShareResult:
        recipients = normalize_recipients(recipients or [])
        if not summary_id or not recipients or not transcript_title:
            raise ValidationFailed("Summary ID, recipients and transcript title are required")

        invalid = find_invalid_addresses(recipients)
        if invalid:
            listed = ", ".join(address or "(blank)" for address in invalid)
            raise ValidationFailed(f"Invalid email addresses: {listed}")

        summary = await self.store.get_summary(summary_id)
        if summary is None:
            raise NotFound("Summary not found", summaryId=summary_id)

        subject = compose_subject(transcript_title)
        body = compose_body(summary, transcript_title, custom_message)
        try:
            await self.mailer.send(recipients, subject, body, sender_name)
        except Exception as e:
            logger.error("Sending summary %s failed: %s", summary_id, e)
            raise DeliveryFailed("Failed to send email") from e

        result = ShareResult(recipient_count=len(recipients))
        for recipient in recipients:
            try:
                record = await self.store.create_email_share_record(
                    summary_id, recipient, sender_name
                )
            except Exception:
                # The mail already went out; a missing log entry is not a send failure
                logger.exception("Could not record share of %s to %s", summary_id, recipient)
                continue
            result.records.append(record)

        logger.info("Summary %s shared with %d recipients", summary_id, result.recipient_count)
        return result
