from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SentimentLabelPolicy:
    """Turns overall percentages into a one-word trend label.

    A lead larger than `margin` points is a clear positive/negative trend.
    Inside the margin, a neutral-dominated picture is "neutral", a smaller
    lead is "slightly positive"/"slightly negative" and a dead heat is "mixed".
    """

    margin: float = 10.0

    def label(self, positive: float, negative: float, neutral: float = 0.0) -> str:
        if positive > negative + self.margin:
            return "positive"
        if negative > positive + self.margin:
            return "negative"
        if neutral > positive and neutral > negative:
            return "neutral"
        if positive > negative:
            return "slightly positive"
        if negative > positive:
            return "slightly negative"
        return "mixed"
