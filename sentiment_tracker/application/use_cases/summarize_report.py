"""Narrative summary for a daily report.

The external narrative service is tried once. Whatever goes wrong there, a
summary built purely from the computed numbers takes its place, so a report
with posts always gets a summary.
"""

from __future__ import annotations

import logging

from sentiment_tracker.domain.entities import DailyReport, ReportSourceSummary
from sentiment_tracker.domain.exceptions import ExternalServiceError
from sentiment_tracker.domain.services.narrative_generator import (
    AINarrative,
    FallbackNarrative,
    NarrativeGenerator,
    NarrativeResult,
)
from sentiment_tracker.domain.value_objects.sentiment import SentimentAggregate, pick_leading
from sentiment_tracker.domain.value_objects.sentiment_label import SentimentLabelPolicy

logger = logging.getLogger(__name__)

REPORT_BRIEFING_PROMPT = """You are a strategic political analyst.
Analyze this daily social media sentiment data and write a strategic briefing with specific examples.

Data Summary:
- Date: {report_date}
- Total Posts Analyzed: {total_posts}
- Total Comments Analyzed: {total_comments}
- Sources Tracked: {total_sources}
- Overall Sentiment: {positive:.1f}% Positive / {negative:.1f}% Negative / {neutral:.1f}% Neutral

Most Active Sources:
{sources}

Write these sections:
1. **Executive Summary**: 2-3 sentences on the overall state of public opinion today.
2. **What People Praised**: themes people were positive about, with examples from the data above.
3. **What People Criticized**: themes people were negative about, with examples from the data above.
4. **Strategic Recommendation**: 1-2 actionable insights for decision makers.

Use **bold** for emphasis."""


def format_display_date(report: DailyReport) -> str:
    d = report.report_date
    return f"{d:%A, %B} {d.day}, {d.year}"


def _by_activity(summaries: list[ReportSourceSummary]) -> list[ReportSourceSummary]:
    return sorted(summaries, key=lambda s: (-s.post_count, -s.comment_count, s.source_name))


def _as_aggregate(s: ReportSourceSummary) -> SentimentAggregate:
    return SentimentAggregate(
        avg_positive=s.avg_positive,
        avg_negative=s.avg_negative,
        avg_neutral=s.avg_neutral,
        total_comments=s.comment_count,
        post_count=s.post_count,
        total_engagement=s.engagement_count,
    )


class ReportNarrator:
    def __init__(
        self,
        generator: NarrativeGenerator | None,
        label_policy: SentimentLabelPolicy | None = None,
        top_sources: int = 5,
    ):
        self._generator = generator
        self._policy = label_policy or SentimentLabelPolicy()
        self._top_sources = top_sources

    def build_prompt(self, report: DailyReport) -> str:
        top = _by_activity(report.source_summaries)[: self._top_sources]
        lines = []
        for s in top:
            lines.append(
                f"- {s.source_name}: {s.post_count} posts, {s.comment_count} comments "
                f"({s.avg_positive:.1f}% positive, {s.avg_negative:.1f}% negative)\n"
                f"  Positive Themes: {s.positive_remarks or 'N/A'}\n"
                f"  Negative Themes: {s.negative_remarks or 'N/A'}"
            )
        return REPORT_BRIEFING_PROMPT.format(
            report_date=report.report_date.isoformat(),
            total_posts=report.total_posts_analyzed,
            total_comments=report.total_comments_analyzed,
            total_sources=report.total_sources,
            positive=report.overall_positive,
            negative=report.overall_negative,
            neutral=report.overall_neutral,
            sources="\n".join(lines) or "No source data available",
        )

    def algorithmic_summary(self, report: DailyReport) -> str:
        trend = self._policy.label(
            report.overall_positive, report.overall_negative, report.overall_neutral
        )
        lines = [
            f"**Daily Summary - {format_display_date(report)}**",
            "",
            f"Analyzed {report.total_posts_analyzed} posts from {report.total_sources} sources "
            f"({report.total_comments_analyzed} comments). Overall sentiment is {trend} "
            f"({report.overall_positive:.1f}% positive vs {report.overall_negative:.1f}% negative, "
            f"{report.overall_neutral:.1f}% neutral).",
        ]

        summaries = report.source_summaries
        if summaries:
            lines.append("")
            top = _by_activity(summaries)[0]
            lines.append(f"Most active source: {top.source_name} with {top.post_count} posts.")

            entries = [(s.source_name, _as_aggregate(s)) for s in summaries]
            most_positive = pick_leading(entries, "positive")
            if most_positive:
                name, stats = most_positive
                lines.append(f"Most positive source: {name} ({stats.avg_positive:.1f}% positive).")
            most_negative = pick_leading(entries, "negative")
            if most_negative:
                name, stats = most_negative
                lines.append(f"Most negative source: {name} ({stats.avg_negative:.1f}% negative).")

        return "\n".join(lines)

    async def summarize(self, report: DailyReport) -> NarrativeResult:
        """Ask the narrative service once, fall back to the algorithmic text."""
        if self._generator is None:
            logger.info("Narrative service not configured, using algorithmic summary")
            return FallbackNarrative(self.algorithmic_summary(report), reason="not configured")

        try:
            text = await self._generator.generate(self.build_prompt(report))
        except ExternalServiceError as e:
            logger.warning(f"Narrative service failed, using algorithmic summary: {e}")
            return FallbackNarrative(self.algorithmic_summary(report), reason=str(e))
        except Exception as e:
            logger.error(f"Unexpected narrative service error, using algorithmic summary: {e}")
            return FallbackNarrative(self.algorithmic_summary(report), reason=str(e))

        if not isinstance(text, str) or not text.strip():
            logger.warning("Narrative service returned an empty response, using algorithmic summary")
            return FallbackNarrative(self.algorithmic_summary(report), reason="empty response")

        return AINarrative(text.strip())
