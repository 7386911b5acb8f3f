"""REST API routes: analysis, posts, comments, stats and daily reports."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from sentiment_tracker.domain.entities import (
    Comment,
    DailyReport,
    PopularComment,
    Post,
    Source,
    make_source,
)
from sentiment_tracker.domain.exceptions import NoDataError, ValidationError
from sentiment_tracker.domain.value_objects.engagement import engagement_score
from sentiment_tracker.domain.value_objects.report_date import normalize_report_date
from sentiment_tracker.domain.value_objects.sentiment import SentimentAggregate
from sentiment_tracker.presentation.web.schemas import (
    AnalyzeRequest,
    CommentRequest,
    CompareRequest,
    GenerateReportRequest,
    ManualPostRequest,
    StructuredComment,
)

router = APIRouter(tags=["api"])


def _get_container(request: Request):
    return request.app.state.container


def _source(source_type: str, source_id: str) -> Source:
    try:
        return make_source(source_type, source_id)
    except ValueError:
        raise ValidationError(f"Unknown source type: {source_type}") from None


def _date(request: Request, value: str | None) -> date:
    return normalize_report_date(value, _get_container(request).config.timezone)


# ─── Serialization ───


def _post_json(p: Post) -> dict[str, Any]:
    return {
        "id": p.id,
        "source_type": p.source.source_type.value,
        "source_id": p.source.id,
        "post_url": p.post_url,
        "published_date": p.published_date.isoformat(),
        "positive_pct": p.positive_pct,
        "negative_pct": p.negative_pct,
        "neutral_pct": p.neutral_pct,
        "comment_count": p.comment_count,
        "engagement_count": p.engagement_count,
        "positive_remarks": p.positive_remarks,
        "negative_remarks": p.negative_remarks,
        "neutral_remarks": p.neutral_remarks,
        "conclusion": p.conclusion,
        "popular_comments": [
            {
                "content": c.content,
                "likes": c.likes,
                "replies": c.replies,
                "shares": c.shares,
                "engagement_score": c.engagement_score,
            }
            for c in p.popular_comments
        ],
    }


def _comment_json(c: Comment) -> dict[str, Any]:
    return {
        "id": c.id,
        "post_id": c.post_id,
        "content": c.content,
        "sentiment": c.sentiment,
        "created_at": c.created_at.isoformat() if c.created_at else None,
    }


def _stats_json(s: SentimentAggregate) -> dict[str, Any]:
    return {
        "avg_positive": s.avg_positive,
        "avg_negative": s.avg_negative,
        "avg_neutral": s.avg_neutral,
        "total_comments": s.total_comments,
        "post_count": s.post_count,
        "total_engagement": s.total_engagement,
    }


def _report_json(r: DailyReport, with_summaries: bool = True) -> dict[str, Any]:
    data = {
        "id": r.id,
        "report_date": r.report_date.isoformat(),
        "total_posts_analyzed": r.total_posts_analyzed,
        "total_comments_analyzed": r.total_comments_analyzed,
        "total_sources": r.total_sources,
        "overall_positive": r.overall_positive,
        "overall_negative": r.overall_negative,
        "overall_neutral": r.overall_neutral,
        "generated_at": r.generated_at.isoformat() if r.generated_at else None,
    }
    if with_summaries:
        data["summary_text"] = r.summary_text
        data["summary_source"] = r.summary_source
        data["source_summaries"] = [
            {
                "source_type": s.source_type.value,
                "source_id": s.source_id,
                "source_name": s.source_name,
                "post_count": s.post_count,
                "comment_count": s.comment_count,
                "engagement_count": s.engagement_count,
                "avg_positive": s.avg_positive,
                "avg_negative": s.avg_negative,
                "avg_neutral": s.avg_neutral,
            }
            for s in r.source_summaries
        ]
    return data


# ─── Analysis & posts ───


@router.post("/sources/{source_type}/{source_id}/analyze", status_code=201)
async def analyze_comments(request: Request, source_type: str, source_id: str, body: AnalyzeRequest):
    """AI analysis of a batch of comments, stored as a new post."""
    c = _get_container(request)
    comments = [
        item.model_dump() if isinstance(item, StructuredComment) else item
        for item in body.comments
    ]
    post = await c.analyze_and_store_use_case().execute(
        source=_source(source_type, source_id),
        comments=comments,
        post_url=body.post_url,
        force=body.force,
        published_date=body.published_date or _date(request, None),
    )
    return {"success": True, "post": _post_json(post), "comment_count": post.comment_count}


@router.post("/sources/{source_type}/{source_id}/posts", status_code=201)
async def create_post(request: Request, source_type: str, source_id: str, body: ManualPostRequest):
    """Manual post entry."""
    c = _get_container(request)
    post = Post(
        source=_source(source_type, source_id),
        published_date=body.published_date or _date(request, None),
        post_url=body.post_url,
        positive_pct=body.positive_pct,
        negative_pct=body.negative_pct,
        neutral_pct=body.neutral_pct,
        comment_count=body.comment_count,
        positive_remarks=body.positive_remarks,
        negative_remarks=body.negative_remarks,
        neutral_remarks=body.neutral_remarks,
        conclusion=body.conclusion,
        popular_comments=[
            PopularComment(
                content=pc.content,
                likes=pc.likes,
                replies=pc.replies,
                shares=pc.shares,
                engagement_score=engagement_score(pc.likes, pc.replies, pc.shares),
            )
            for pc in body.popular_comments
        ],
    )
    post = await c.analyze_and_store_use_case().record(post, force=body.force)
    return _post_json(post)


@router.get("/sources/{source_type}/{source_id}/posts")
async def source_timeline(
    request: Request,
    source_type: str,
    source_id: str,
    start: date | None = None,
    end: date | None = None,
    limit: int | None = None,
):
    c = _get_container(request)
    posts = await c.manage_posts_use_case().timeline(
        _source(source_type, source_id), start=start, end=end, limit=limit
    )
    return [_post_json(p) for p in posts]


@router.get("/sources/{source_type}/{source_id}/stats")
async def source_stats(
    request: Request,
    source_type: str,
    source_id: str,
    start: date | None = None,
    end: date | None = None,
):
    """Live weighted sentiment for one source."""
    c = _get_container(request)
    stats = await c.entity_stats_use_case().execute(_source(source_type, source_id), start, end)
    return _stats_json(stats)


@router.post("/sources/compare")
async def compare_sources(request: Request, body: CompareRequest):
    c = _get_container(request)
    sources = [_source(s.source_type, s.source_id) for s in body.sources]
    result = await c.entity_stats_use_case().compare(sources, body.start, body.end)

    def _entity(e):
        return {
            "source_type": e.source.source_type.value,
            "source_id": e.source.id,
            "name": e.name,
            **_stats_json(e.stats),
        }

    return {
        "entities": [_entity(e) for e in result.entities],
        "leader": _entity(result.leader) if result.leader else None,
    }


@router.get("/posts/{post_id}")
async def get_post(request: Request, post_id: str):
    c = _get_container(request)
    return _post_json(await c.manage_posts_use_case().get(post_id))


@router.delete("/posts/{post_id}")
async def delete_post(request: Request, post_id: str):
    c = _get_container(request)
    await c.manage_posts_use_case().delete(post_id)
    return {"success": True}


# ─── Comments ───


@router.get("/posts/{post_id}/comments")
async def list_comments(request: Request, post_id: str, sentiment: str | None = None):
    c = _get_container(request)
    comments = await c.manage_posts_use_case().list_comments(post_id, sentiment)
    return [_comment_json(cm) for cm in comments]


@router.post("/posts/{post_id}/comments", status_code=201)
async def add_comment(request: Request, post_id: str, body: CommentRequest):
    c = _get_container(request)
    comment = await c.manage_posts_use_case().add_comment(post_id, body.content, body.sentiment)
    return _comment_json(comment)


@router.delete("/posts/{post_id}/comments/{comment_id}")
async def delete_comment(request: Request, post_id: str, comment_id: str):
    c = _get_container(request)
    await c.manage_posts_use_case().delete_comment(post_id, comment_id)
    return {"success": True}


# ─── Daily reports ───


@router.post("/reports/generate")
async def generate_report(request: Request, body: GenerateReportRequest | None = None):
    """Generate (or regenerate) the report for a date, default today."""
    c = _get_container(request)
    report_date = _date(request, body.report_date if body else None)
    try:
        report = await c.generate_daily_report_use_case().execute(report_date)
    except NoDataError:
        return {
            "success": False,
            "status": "no_data",
            "report_date": report_date.isoformat(),
            "message": f"No posts found for {report_date.isoformat()}. Nothing to report.",
        }
    return {"success": True, **_report_json(report)}


@router.get("/reports")
async def report_history(request: Request, limit: int | None = None):
    c = _get_container(request)
    reports = await c.report_history_use_case().get_history(limit)
    return [_report_json(r, with_summaries=False) for r in reports]


@router.get("/reports/trends")
async def report_trends(request: Request, days: int = 7):
    c = _get_container(request)
    return await c.report_history_use_case().get_trends(days)


@router.get("/reports/{report_date}")
async def get_report(request: Request, report_date: str):
    c = _get_container(request)
    report = await c.report_history_use_case().get_by_date(_date(request, report_date))
    if not report:
        return JSONResponse(status_code=404, content={"error": "No report for this date"})
    return _report_json(report)


@router.get("/reports/{report_date}/charts")
async def report_charts(request: Request, report_date: str):
    c = _get_container(request)
    data = await c.report_history_use_case().get_chart_data(_date(request, report_date))
    if data is None:
        return JSONResponse(status_code=404, content={"error": "No report for this date"})
    return data


@router.delete("/reports/{report_date}")
async def delete_report(request: Request, report_date: str):
    c = _get_container(request)
    if not await c.report_history_use_case().delete(_date(request, report_date)):
        return JSONResponse(status_code=404, content={"error": "No report for this date"})
    return {"success": True}
