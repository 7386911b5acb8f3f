"""Request bodies for the JSON API."""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, Field


class StructuredComment(BaseModel):
    content: str
    likes: int = Field(0, ge=0)
    replies: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)


class AnalyzeRequest(BaseModel):
    # Either plain comment strings or comments with engagement counts
    comments: list[Union[StructuredComment, str]]
    post_url: Optional[str] = None
    published_date: Optional[date] = None
    force: bool = False


class ManualPostRequest(BaseModel):
    positive_pct: float
    negative_pct: float
    neutral_pct: float
    comment_count: int = Field(0, ge=0)
    post_url: Optional[str] = None
    published_date: Optional[date] = None
    positive_remarks: str = ""
    negative_remarks: str = ""
    neutral_remarks: str = ""
    conclusion: str = ""
    popular_comments: list[StructuredComment] = Field(default_factory=list)
    force: bool = False


class CommentRequest(BaseModel):
    content: str
    sentiment: str


class GenerateReportRequest(BaseModel):
    report_date: Optional[str] = None


class SourceRef(BaseModel):
    source_type: str
    source_id: str


class CompareRequest(BaseModel):
    sources: list[SourceRef]
    start: Optional[date] = None
    end: Optional[date] = None
