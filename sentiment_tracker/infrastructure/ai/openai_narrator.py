"""OpenAI-backed narrative generator for daily reports."""

from __future__ import annotations

import asyncio
import logging

from openai import OpenAI, OpenAIError

from sentiment_tracker.domain.exceptions import ExternalServiceError
from sentiment_tracker.infrastructure.ai.prompts import NARRATIVE_SYSTEM_PROMPT
from sentiment_tracker.infrastructure.config.settings import AIConfig

logger = logging.getLogger(__name__)


class OpenAINarrativeGenerator:
    """Single-attempt Chat Completions call; no retries."""

    def __init__(self, api_key: str, config: AIConfig):
        self._client = OpenAI(api_key=api_key)
        self._config = config

    def _call_api(self, prompt: str) -> str | None:
        response = self._client.chat.completions.create(
            model=self._config.model_narrative,
            max_tokens=self._config.narrative_max_tokens,
            temperature=0.4,
            messages=[
                {"role": "system", "content": NARRATIVE_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def generate(self, prompt: str) -> str:
        try:
            text = await asyncio.to_thread(self._call_api, prompt)
        except OpenAIError as e:
            raise ExternalServiceError(f"Narrative API call failed: {e}") from e

        if not text or not text.strip():
            raise ExternalServiceError("Narrative API returned an empty response")

        logger.info(f"Narrative generated ({len(text)} chars)")
        return text.strip()
