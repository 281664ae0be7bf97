import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Query

from db.models import EmailShareRecord, Prompt, Summary, Transcript
from db.store import RecordStore
from errors import GenerationFailed, MeetingNotesError, NotFound, ValidationFailed
from processing.prompts import CUSTOM_PROMPT_TITLE
from processing.summarizer import SummaryService
from server.schemas import (
    CreatePromptRequest,
    CreateSummaryRequest,
    CreateTranscriptRequest,
    ShareSummaryRequest,
    ShareSummaryResponse,
    UpdateSummaryRequest,
)
from sharing.mailer import ShareDispatcher

logger = logging.getLogger(__name__)

CUSTOM_PROMPT_ID = "custom"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def create_router(store: RecordStore, summarizer: SummaryService,
                  dispatcher: ShareDispatcher) -> APIRouter:
    router = APIRouter()

    # -- Status --

    @router.get("/health")
    async def health():
        return {"status": "ok", "summaryService": summarizer.name}

    # -- Transcripts --

    @router.post("/transcripts", status_code=201, response_model=Transcript)
    async def create_transcript(body: CreateTranscriptRequest):
        if _is_blank(body.title) or _is_blank(body.content):
            raise ValidationFailed("Title and content are required")

        transcript = await store.create_transcript(body.title.strip(), body.content)
        logger.info("Transcript %s created (%d chars)", transcript.id, len(transcript.content))
        return transcript

    @router.get("/transcripts", response_model=list[Transcript])
    async def list_transcripts():
        return await store.list_transcripts()

    @router.get("/transcripts/{transcript_id}", response_model=Transcript)
    async def get_transcript(transcript_id: str):
        transcript = await store.get_transcript(transcript_id)
        if transcript is None:
            raise NotFound("Transcript not found", transcriptId=transcript_id)
        return transcript

    # -- Prompts --

    @router.get("/prompts", response_model=list[Prompt])
    async def list_prompts():
        return await store.list_prompts()

    @router.post("/prompts", status_code=201, response_model=Prompt)
    async def create_prompt(body: CreatePromptRequest):
        if _is_blank(body.title) or _is_blank(body.instruction):
            raise ValidationFailed("Title and instruction are required")
        return await store.create_prompt(body.title.strip(), body.instruction.strip())

    # -- Summaries --

    @router.post("/summaries", status_code=201, response_model=Summary)
    async def create_summary(body: CreateSummaryRequest):
        if _is_blank(body.transcript_id) or _is_blank(body.instruction):
            raise ValidationFailed("Transcript ID and instruction are required")
        instruction = body.instruction.strip()

        transcript = await store.get_transcript(body.transcript_id)
        if transcript is None:
            known_ids = [t.id for t in await store.list_transcripts()]
            logger.error("Transcript %s not found, known ids: %s", body.transcript_id, known_ids)
            raise NotFound(
                "Transcript not found",
                transcriptId=body.transcript_id,
                availableTranscripts=known_ids,
            )

        if _is_blank(body.prompt_id) or body.prompt_id == CUSTOM_PROMPT_ID:
            try:
                prompt = await store.create_prompt(CUSTOM_PROMPT_TITLE, instruction)
            except Exception as e:
                logger.error("Failed to create custom prompt: %s", e)
                raise MeetingNotesError("Failed to create prompt") from e
            logger.info("Created custom prompt %s", prompt.id)
        else:
            prompt = await store.get_prompt(body.prompt_id)
            if prompt is None:
                raise NotFound("Prompt not found", promptId=body.prompt_id)

        logger.info("Generating summary for transcript %s with prompt %s", transcript.id, prompt.id)
        text = await summarizer.generate_summary(transcript.content, instruction)
        if _is_blank(text):
            raise GenerationFailed("Summary service returned no text")

        summary = await store.create_summary(transcript.id, prompt.id, text)
        logger.info("Summary %s saved (%d chars)", summary.id, len(text))
        return summary

    @router.get("/summaries", response_model=list[Summary])
    async def list_summaries(transcript_id: str | None = Query(None, alias="transcriptId")):
        if _is_blank(transcript_id):
            raise ValidationFailed("Transcript ID is required")
        return await store.list_summaries_for_transcript(transcript_id)

    @router.get("/summaries/{summary_id}", response_model=Summary)
    async def get_summary(summary_id: str):
        summary = await store.get_summary(summary_id)
        if summary is None:
            raise NotFound("Summary not found", summaryId=summary_id)
        return summary

    @router.patch("/summaries/{summary_id}", response_model=Summary)
    async def update_summary(summary_id: str, body: UpdateSummaryRequest):
        if _is_blank(body.edited_summary):
            raise ValidationFailed("Edited summary is required")

        updated = await store.update_summary(summary_id, body.edited_summary)
        if updated is None:
            raise NotFound("Summary not found", summaryId=summary_id)
        return updated

    # -- Sharing --

    @router.post("/email/share", response_model=ShareSummaryResponse)
    async def share_summary(body: ShareSummaryRequest):
        result = await dispatcher.share(
            body.summary_id,
            body.recipients,
            body.transcript_title,
            sender_name=body.sender_name or None,
            custom_message=body.custom_message or None,
        )
        return ShareSummaryResponse(message=result.message, recipient_count=result.recipient_count)

    @router.get("/email/shares", response_model=list[EmailShareRecord])
    async def list_shares(summary_id: str | None = Query(None, alias="summaryId")):
        return await store.list_email_share_records(summary_id)

    return router


def create_debug_router(store: RecordStore) -> APIRouter:
    """Store introspection endpoints. Mounted only when debugging is enabled."""
    router = APIRouter()

    @router.get("/debug/storage")
    async def storage_stats():
        return {
            "message": "Storage debug info",
            "stats": store.get_diagnostics(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @router.post("/debug/storage/selftest")
    async def storage_selftest():
        created = await store.create_transcript(
            "Test Transcript", "This is a test transcript for debugging storage issues."
        )
        retrieved = await store.get_transcript(created.id)
        return {
            "message": "Storage test completed",
            "testTranscript": {
                "created": created.id,
                "retrieved": retrieved.id if retrieved else None,
                "found": retrieved is not None,
            },
            "stats": store.get_diagnostics(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return router
