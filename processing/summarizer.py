import asyncio
import logging

import requests

from errors import GenerationFailed
from processing.prompts import (
    MEETING_SUMMARY_TEMPLATE,
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_USER_PROMPT,
    TEMPLATE_KEYWORDS,
)

logger = logging.getLogger(__name__)


class SummaryService:
    """Turns a transcript plus an instruction into summary text."""

    name = "base"

    async def generate_summary(self, content: str, instruction: str) -> str:
        raise NotImplementedError


class TemplateSummaryService(SummaryService):
    """Offline stand-in that returns canned text picked by instruction keywords.

    The transcript content is ignored. A short sleep emulates service latency.
    """

    name = "template"

    def __init__(self, delay: float = 2.0):
        self.delay = delay

    @staticmethod
    def pick_template(instruction: str) -> str:
        instruction = instruction.lower()
        for keyword, template in TEMPLATE_KEYWORDS:
            if keyword in instruction:
                return template
        return MEETING_SUMMARY_TEMPLATE

    async def generate_summary(self, content: str, instruction: str) -> str:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return self.pick_template(instruction)


class LiveSummaryService(SummaryService):
    name = "live"

    def __init__(self, provider: str, api_key: str, model: str = None,
                 url: str = None, timeout: float = 120):
        self.provider = provider
        self.api_key = api_key
        self.model = model
        self.url = url or "https://api.groq.com/openai/v1/chat/completions"
        self.timeout = timeout

    async def generate_summary(self, content: str, instruction: str) -> str:
        user_prompt = SUMMARY_USER_PROMPT.format(instruction=instruction, transcript=content)
        try:
            if self.provider == "anthropic":
                text = await asyncio.to_thread(self._call_anthropic, user_prompt)
            else:
                text = await asyncio.to_thread(self._call_groq, user_prompt)
        except GenerationFailed:
            raise
        except Exception as e:
            logger.error("Summary generation via %s failed: %s", self.provider, e)
            raise GenerationFailed(f"Failed to generate summary with {self.provider}") from e

        if not text or not text.strip():
            raise GenerationFailed(f"{self.provider} returned an empty summary")
        return text

    def _call_groq(self, user_prompt: str) -> str:
        response = requests.post(
            self.url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": self.model or "llama3-8b-8192",
                "messages": [
                    {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                "temperature": 0.3,
                "max_tokens": 1000,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        choices = response.json().get("choices") or []
        if not choices:
            raise GenerationFailed("groq returned no completion")
        return (choices[0].get("message") or {}).get("content")

    def _call_anthropic(self, user_prompt: str) -> str:
        import anthropic

        client = anthropic.Anthropic(api_key=self.api_key)
        message = client.messages.create(
            model=self.model or "claude-sonnet-4-5-20250929",
            max_tokens=1000,
            system=SUMMARY_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": user_prompt}],
        )
        if not message.content:
            raise GenerationFailed("anthropic returned no completion")
        return message.content[0].text


def create_summary_service(provider: str = "groq", groq_api_key: str = None,
                           anthropic_api_key: str = None, groq_model: str = None,
                           groq_url: str = None, anthropic_model: str = None,
                           timeout: float = 120, template_delay: float = 2.0) -> SummaryService:
    if provider == "anthropic" and anthropic_api_key:
        logger.info("Using Anthropic summary service (%s)", anthropic_model)
        return LiveSummaryService("anthropic", anthropic_api_key, model=anthropic_model,
                                  timeout=timeout)
    if provider == "groq" and groq_api_key:
        logger.info("Using Groq summary service (%s)", groq_model)
        return LiveSummaryService("groq", groq_api_key, model=groq_model, url=groq_url,
                                  timeout=timeout)

    logger.info("No API key found for '%s', using template summary service", provider)
    return TemplateSummaryService(delay=template_delay)
