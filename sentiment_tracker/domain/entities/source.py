"""Tracked sources: candidates, political parties and news outlets.

A source is one of three closed variants. Code that needs to branch on the
kind of source matches on the variant class instead of comparing strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class SourceType(str, Enum):
    CANDIDATE = "candidate"
    POLITICAL_PARTY = "political_party"
    NEWS_MEDIA = "news_media"


@dataclass(frozen=True)
class CandidateSource:
    id: str

    @property
    def source_type(self) -> SourceType:
        return SourceType.CANDIDATE


@dataclass(frozen=True)
class PartySource:
    id: str

    @property
    def source_type(self) -> SourceType:
        return SourceType.POLITICAL_PARTY


@dataclass(frozen=True)
class NewsMediaSource:
    id: str

    @property
    def source_type(self) -> SourceType:
        return SourceType.NEWS_MEDIA


Source = Union[CandidateSource, PartySource, NewsMediaSource]

_VARIANTS: dict[SourceType, type] = {
    SourceType.CANDIDATE: CandidateSource,
    SourceType.POLITICAL_PARTY: PartySource,
    SourceType.NEWS_MEDIA: NewsMediaSource,
}


def make_source(source_type: str | SourceType, source_id) -> Source:
    """Build a source variant from its stored (type, id) pair.

    Raises ValueError for an unknown type, so callers at the edges can turn it
    into a validation error.
    """
    kind = SourceType(source_type)
    return _VARIANTS[kind](str(source_id))
