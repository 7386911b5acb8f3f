"""OpenAI-backed sentiment classifier.

Sends raw comment text to the model and parses the JSON distribution it
returns. Only the first `max_comments` comments are sent; callers keep the
full comment count.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from openai import OpenAI, OpenAIError

from sentiment_tracker.domain.exceptions import ExternalServiceError
from sentiment_tracker.domain.services.sentiment_classifier import SentimentAnalysis
from sentiment_tracker.infrastructure.ai.prompts import CLASSIFIER_SYSTEM_PROMPT, CLASSIFY_COMMENTS
from sentiment_tracker.infrastructure.config.settings import AIConfig

logger = logging.getLogger(__name__)


def _parse_json_object(text: str) -> dict[str, Any]:
    """Extract the JSON object from an API response."""
    text = text.replace("```json", "").replace("```", "").strip()

    start = text.find("{")
    end = text.rfind("}") + 1
    if start == -1 or end <= start:
        raise ValueError(f"No JSON object found: {text[:200]}")

    data = json.loads(text[start:end])
    if not isinstance(data, dict):
        raise ValueError("Response JSON is not an object")
    return data


class OpenAISentimentClassifier:
    def __init__(self, api_key: str, config: AIConfig):
        self._client = OpenAI(api_key=api_key)
        self._config = config

    def _call_api(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._config.model_classifier,
            max_tokens=self._config.classifier_max_tokens,
            temperature=0.1,
            messages=[
                {"role": "system", "content": CLASSIFIER_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
        return response.choices[0].message.content or ""

    async def classify(self, comments: list[str]) -> SentimentAnalysis:
        sample = comments[: self._config.max_comments]
        prompt = CLASSIFY_COMMENTS.format(comments_text="\n".join(sample))

        try:
            text = await asyncio.to_thread(self._call_api, prompt)
        except OpenAIError as e:
            raise ExternalServiceError(f"Classifier API call failed: {e}") from e

        try:
            data = _parse_json_object(text)
            analysis = SentimentAnalysis(
                positive_pct=float(data["positive_percentage"]),
                negative_pct=float(data["negative_percentage"]),
                neutral_pct=float(data["neutral_percentage"]),
                positive_remarks=str(data.get("positive_remarks") or ""),
                negative_remarks=str(data.get("negative_remarks") or ""),
                neutral_remarks=str(data.get("neutral_remarks") or ""),
                conclusion=str(data.get("conclusion") or ""),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Classifier returned an invalid format: {e}")
            raise ExternalServiceError("AI returned an invalid format. Please try again.") from e

        logger.info(
            f"Classified {len(sample)}/{len(comments)} comments: "
            f"{analysis.positive_pct:.1f}/{analysis.negative_pct:.1f}/{analysis.neutral_pct:.1f}"
        )
        return analysis
