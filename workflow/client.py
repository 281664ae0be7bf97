import logging

import httpx

from db.models import Prompt, Summary, Transcript

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, payload: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


class MeetingNotesClient:
    """Async client for the /api surface used by the workflow controller."""

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None,
                 timeout: float = 180):
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/") + "/api",
                                       transport=transport, timeout=timeout)

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs):
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ApiError(0, f"Could not reach the server: {e}") from e

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            message = payload.get("message") or response.reason_phrase
            raise ApiError(response.status_code, message, payload)
        return response.json()

    async def create_transcript(self, title: str, content: str) -> Transcript:
        data = await self._request("POST", "/transcripts",
                                   json={"title": title, "content": content})
        return Transcript.model_validate(data)

    async def list_prompts(self) -> list[Prompt]:
        data = await self._request("GET", "/prompts")
        return [Prompt.model_validate(p) for p in data]

    async def create_summary(self, transcript_id: str, prompt_id: str | None,
                             instruction: str) -> Summary:
        data = await self._request("POST", "/summaries", json={
            "transcriptId": transcript_id,
            "promptId": prompt_id,
            "instruction": instruction,
        })
        return Summary.model_validate(data)

    async def update_summary(self, summary_id: str, edited_summary: str) -> Summary:
        data = await self._request("PATCH", f"/summaries/{summary_id}",
                                   json={"editedSummary": edited_summary})
        return Summary.model_validate(data)

    async def share_summary(self, summary_id: str, recipients: list[str], sender_name: str,
                            transcript_title: str, custom_message: str | None = None) -> dict:
        return await self._request("POST", "/email/share", json={
            "summaryId": summary_id,
            "recipients": recipients,
            "senderName": sender_name,
            "customMessage": custom_message,
            "transcriptTitle": transcript_title,
        })
