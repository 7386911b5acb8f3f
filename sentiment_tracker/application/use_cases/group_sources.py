"""Per-source grouping for daily reports.

Party and news-media posts are grouped per source. Candidate posts are
merged per party into a single "<Party> Candidates" bucket so reports compare
party-level trends.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sentiment_tracker.domain.entities import (
    CandidateSource,
    NewsMediaSource,
    PartySource,
    Post,
    ReportSourceSummary,
    Source,
    SourceType,
)
from sentiment_tracker.domain.services.source_directory import SourceDirectory
from sentiment_tracker.domain.value_objects.sentiment import aggregate

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"
INDEPENDENT_PARTY = "Independent"


def _join_remarks(remarks: list[str], limit: int = 2) -> str:
    return " | ".join([r for r in remarks if r][:limit])


async def _resolve_name(directory: SourceDirectory, source: Source) -> str:
    try:
        name = await directory.get_name(source)
    except Exception as e:
        logger.warning(f"Name lookup failed for {source.source_type.value}:{source.id}: {e}")
        return UNKNOWN_NAME
    return name or UNKNOWN_NAME


async def _resolve_party(directory: SourceDirectory, candidate_id: str) -> str:
    try:
        party = await directory.get_party_name(candidate_id)
    except Exception as e:
        logger.warning(f"Party lookup failed for candidate {candidate_id}: {e}")
        return UNKNOWN_NAME
    return party or INDEPENDENT_PARTY


def _summarize(
    posts: list[Post],
    source_type: SourceType,
    source_id: str | None,
    source_name: str,
) -> ReportSourceSummary:
    stats = aggregate(posts)
    return ReportSourceSummary(
        source_type=source_type,
        source_id=source_id,
        source_name=source_name,
        post_count=stats.post_count,
        comment_count=stats.total_comments,
        engagement_count=stats.total_engagement,
        avg_positive=stats.avg_positive,
        avg_negative=stats.avg_negative,
        avg_neutral=stats.avg_neutral,
        positive_remarks=_join_remarks([p.positive_remarks for p in posts]),
        negative_remarks=_join_remarks([p.negative_remarks for p in posts]),
    )


async def group_and_aggregate(
    posts: Sequence[Post], directory: SourceDirectory
) -> list[ReportSourceSummary]:
    """Group posts and aggregate each group.

    Summaries come back ordered by post count (desc), then name, so the same
    posts always produce the same list.
    """
    by_source: dict[Source, list[Post]] = {}
    by_party: dict[str, list[Post]] = {}
    party_cache: dict[str, str] = {}

    for post in posts:
        source = post.source
        if isinstance(source, CandidateSource):
            if source.id not in party_cache:
                party_cache[source.id] = await _resolve_party(directory, source.id)
            by_party.setdefault(party_cache[source.id], []).append(post)
        elif isinstance(source, (PartySource, NewsMediaSource)):
            by_source.setdefault(source, []).append(post)
        else:
            raise TypeError(f"Unsupported source: {source!r}")

    summaries: list[ReportSourceSummary] = []
    for source, group in by_source.items():
        name = await _resolve_name(directory, source)
        summaries.append(_summarize(group, source.source_type, source.id, name))

    for party, group in by_party.items():
        summaries.append(_summarize(group, SourceType.CANDIDATE, None, f"{party} Candidates"))

    summaries.sort(key=lambda s: (-s.post_count, s.source_name, s.source_type.value, s.source_id or ""))
    return summaries
