import asyncio
import logging
import uuid
from datetime import datetime, timezone

from db.models import SYSTEM_OWNER, EmailShareRecord, Prompt, Summary, Transcript
from processing.prompts import DEFAULT_PROMPTS

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """In-memory store for transcripts, prompts, summaries and share records.

    One instance is created at start-up and shared by every request for the
    life of the process. Nothing survives a restart.
    """

    def __init__(self):
        self._transcripts: dict[str, Transcript] = {}
        self._prompts: dict[str, Prompt] = {}
        self._summaries: dict[str, Summary] = {}
        self._email_shares: dict[str, EmailShareRecord] = {}
        self._summary_lock = asyncio.Lock()
        self._seed_default_prompts()

    def _seed_default_prompts(self):
        for title, instruction in DEFAULT_PROMPTS:
            prompt = Prompt(
                id=_new_id(), title=title, instruction=instruction,
                created_at=_now(), user_id=SYSTEM_OWNER,
            )
            self._prompts[prompt.id] = prompt
        logger.info("Seeded %d default prompts", len(DEFAULT_PROMPTS))

    # -- Transcripts --

    async def create_transcript(self, title: str, content: str,
                                user_id: str | None = None) -> Transcript:
        transcript = Transcript(
            id=_new_id(), title=title, content=content,
            uploaded_at=_now(), user_id=user_id,
        )
        self._transcripts[transcript.id] = transcript
        logger.debug("Created transcript %s (total %d)", transcript.id, len(self._transcripts))
        return transcript.model_copy()

    async def get_transcript(self, transcript_id: str) -> Transcript | None:
        transcript = self._transcripts.get(transcript_id)
        return transcript.model_copy() if transcript else None

    async def list_transcripts(self) -> list[Transcript]:
        return [t.model_copy() for t in self._transcripts.values()]

    # -- Prompts --

    async def create_prompt(self, title: str, instruction: str,
                            user_id: str | None = None) -> Prompt:
        prompt = Prompt(
            id=_new_id(), title=title, instruction=instruction,
            created_at=_now(), user_id=user_id,
        )
        self._prompts[prompt.id] = prompt
        logger.debug("Created prompt %s", prompt.id)
        return prompt.model_copy()

    async def get_prompt(self, prompt_id: str) -> Prompt | None:
        prompt = self._prompts.get(prompt_id)
        return prompt.model_copy() if prompt else None

    async def list_prompts(self) -> list[Prompt]:
        return [p.model_copy() for p in self._prompts.values()]

    # -- Summaries --

    async def create_summary(self, transcript_id: str, prompt_id: str,
                             original_summary: str) -> Summary:
        # References are checked by the caller
        summary = Summary(
            id=_new_id(), transcript_id=transcript_id, prompt_id=prompt_id,
            original_summary=original_summary, created_at=_now(),
        )
        self._summaries[summary.id] = summary
        logger.debug("Created summary %s for transcript %s", summary.id, transcript_id)
        return summary.model_copy()

    async def get_summary(self, summary_id: str) -> Summary | None:
        summary = self._summaries.get(summary_id)
        return summary.model_copy() if summary else None

    async def update_summary(self, summary_id: str, edited_summary: str) -> Summary | None:
        async with self._summary_lock:
            existing = self._summaries.get(summary_id)
            if existing is None:
                return None
            updated_at = max(_now(), existing.created_at)
            updated = existing.model_copy(
                update={"edited_summary": edited_summary, "updated_at": updated_at}
            )
            self._summaries[summary_id] = updated
        logger.debug("Updated summary %s", summary_id)
        return updated.model_copy()

    async def list_summaries_for_transcript(self, transcript_id: str) -> list[Summary]:
        return [
            s.model_copy() for s in self._summaries.values()
            if s.transcript_id == transcript_id
        ]

    # -- Email shares --

    async def create_email_share_record(self, summary_id: str, recipient_email: str,
                                        sender_name: str | None = None) -> EmailShareRecord:
        record = EmailShareRecord(
            id=_new_id(), summary_id=summary_id, recipient_email=recipient_email,
            sender_name=sender_name, sent_at=_now(),
        )
        self._email_shares[record.id] = record
        return record.model_copy()

    async def list_email_share_records(self, summary_id: str | None = None) -> list[EmailShareRecord]:
        return [
            r.model_copy() for r in self._email_shares.values()
            if summary_id is None or r.summary_id == summary_id
        ]

    # -- Debug --

    def get_diagnostics(self) -> dict:
        return {
            "transcripts": len(self._transcripts),
            "prompts": len(self._prompts),
            "summaries": len(self._summaries),
            "emailShares": len(self._email_shares),
            "transcriptIds": list(self._transcripts),
            "promptIds": list(self._prompts),
            "summaryIds": list(self._summaries),
            "emailShareIds": list(self._email_shares),
        }
