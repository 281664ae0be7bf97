"""Four-step upload, prompt, summary and share session driven against the API.

The controller is single-user and cooperative: every network-bound step sets
``busy`` for its duration and a second call while busy is refused.
"""

import enum
import logging
from dataclasses import dataclass
from pathlib import Path

import config
from db.models import Prompt, Summary
from workflow.client import ApiError, MeetingNotesClient

logger = logging.getLogger(__name__)

CUSTOM_PROMPT_ID = "custom"


class Step(str, enum.Enum):
    UPLOAD = "upload"
    PROMPT = "prompt"
    SUMMARY = "summary"
    SHARE = "share"


class WorkflowError(Exception):
    """Recoverable failure; the controller stays on its current step."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WorkflowBusy(WorkflowError):
    pass


@dataclass
class TranscriptRef:
    id: str
    title: str


class WorkflowController:
    def __init__(self, client: MeetingNotesClient):
        self.client = client
        self.step = Step.UPLOAD
        self.transcript: TranscriptRef | None = None
        self.summary: Summary | None = None
        self.draft: str | None = None
        self.busy = False
        self._prompts: dict[str, Prompt] = {}

    def _require_step(self, step: Step):
        if self.step is not step:
            raise WorkflowError(f"Expected step '{step.value}', currently at '{self.step.value}'")

    def _begin(self):
        if self.busy:
            raise WorkflowBusy("Another request is still in progress")
        self.busy = True

    # -- Upload --

    async def submit_file(self, path, title: str | None = None) -> TranscriptRef:
        path = Path(path)
        self._require_step(Step.UPLOAD)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise WorkflowError(f"Could not read {path.name}: {e}") from e
        return await self.submit_text(title or path.stem, content)

    async def submit_text(self, title: str, content: str) -> TranscriptRef:
        self._require_step(Step.UPLOAD)
        self._begin()
        try:
            transcript = await self.client.create_transcript(title.strip(), content)
        except ApiError as e:
            logger.warning("Upload failed: %s", e.message)
            raise WorkflowError(e.message, e.status_code) from e
        finally:
            self.busy = False

        self.transcript = TranscriptRef(id=transcript.id, title=transcript.title)
        self.step = Step.PROMPT
        logger.info("Transcript %s uploaded", transcript.id)
        return self.transcript

    # -- Prompt --

    async def list_prompts(self) -> list[Prompt]:
        try:
            prompts = await self.client.list_prompts()
        except ApiError as e:
            raise WorkflowError(e.message, e.status_code) from e
        self._prompts = {p.id: p for p in prompts}
        return prompts

    async def submit_instruction(self, prompt_id: str | None,
                                 custom_text: str | None = None) -> Summary:
        self._require_step(Step.PROMPT)
        if not prompt_id or prompt_id == CUSTOM_PROMPT_ID:
            if not custom_text or not custom_text.strip():
                raise WorkflowError("Custom instructions are required")
            prompt_id, instruction = CUSTOM_PROMPT_ID, custom_text.strip()
        else:
            instruction = None

        self._begin()
        try:
            if instruction is None:
                if prompt_id not in self._prompts:
                    await self.list_prompts()
                prompt = self._prompts.get(prompt_id)
                if prompt is None:
                    raise WorkflowError(f"Unknown prompt '{prompt_id}'")
                instruction = prompt.instruction
            summary = await self.client.create_summary(self.transcript.id, prompt_id, instruction)
        except ApiError as e:
            logger.warning("Summarization failed: %s", e.message)
            raise WorkflowError(e.message, e.status_code) from e
        finally:
            self.busy = False

        self.summary = summary
        self.draft = summary.effective_content
        self.step = Step.SUMMARY
        return summary

    # -- Summary --

    def edit(self, text: str):
        self._require_step(Step.SUMMARY)
        self.draft = text

    def reset_draft(self):
        self._require_step(Step.SUMMARY)
        self.draft = self.summary.original_summary

    @property
    def has_unsaved_changes(self) -> bool:
        if self.summary is None:
            return False
        return self.draft != self.summary.effective_content

    async def save(self) -> Summary:
        self._require_step(Step.SUMMARY)
        self._begin()
        try:
            self.summary = await self.client.update_summary(self.summary.id, self.draft)
        except ApiError as e:
            raise WorkflowError(e.message, e.status_code) from e
        finally:
            self.busy = False
        return self.summary

    def share(self):
        self._require_step(Step.SUMMARY)
        if self.has_unsaved_changes:
            raise WorkflowError("Save or discard your edits before sharing")
        self.step = Step.SHARE

    # -- Share --

    async def send(self, recipients: list[str], sender_name: str | None = None,
                   custom_message: str | None = None) -> dict:
        self._require_step(Step.SHARE)
        if not recipients:
            raise WorkflowError("Please add at least one email recipient")

        self._begin()
        try:
            result = await self.client.share_summary(
                self.summary.id,
                recipients,
                (sender_name or "").strip() or config.DEFAULT_SENDER_NAME,
                self.transcript.title,
                (custom_message or "").strip() or None,
            )
        except ApiError as e:
            raise WorkflowError(e.message, e.status_code) from e
        finally:
            self.busy = False

        logger.info("%s", result.get("message"))
        self.complete()
        return result

    def complete(self):
        self.step = Step.UPLOAD
        self.transcript = None
        self.summary = None
        self.draft = None
