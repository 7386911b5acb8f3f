from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class SentimentAnalysis:
    positive_pct: float
    negative_pct: float
    neutral_pct: float
    positive_remarks: str = ""
    negative_remarks: str = ""
    neutral_remarks: str = ""
    conclusion: str = ""


class SentimentClassifier(Protocol):
    """External classifier turning raw comment text into percentages."""

    async def classify(self, comments: list[str]) -> SentimentAnalysis: ...
