"""PostRepository / CommentRepository: Firebase Firestore implementation.

Firestore collection: 'posts' (auto document ids)
User comments live in each post's 'comments' subcollection and are deleted
together with the post.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sentiment_tracker.domain.entities import Comment, PopularComment, Post, Source, make_source
from sentiment_tracker.infrastructure.database.firebase_client import run_in_thread

# Firestore batches hold at most 500 writes
_BATCH_LIMIT = 400

# ─── Domain entity ↔ Firestore document ───


def _post_to_dict(post: Post) -> dict[str, Any]:
    return {
        "source_type": post.source.source_type.value,
        "source_id": post.source.id,
        "post_url": post.post_url,
        "published_date": post.published_date.isoformat(),
        "positive_pct": post.positive_pct,
        "negative_pct": post.negative_pct,
        "neutral_pct": post.neutral_pct,
        "comment_count": post.comment_count,
        "engagement_count": post.engagement_count,
        "positive_remarks": post.positive_remarks,
        "negative_remarks": post.negative_remarks,
        "neutral_remarks": post.neutral_remarks,
        "conclusion": post.conclusion,
        "popular_comments": [
            {
                "content": c.content,
                "likes": c.likes,
                "replies": c.replies,
                "shares": c.shares,
                "engagement_score": c.engagement_score,
            }
            for c in post.popular_comments
        ],
        "created_at": post.created_at,
    }


def _post_from_doc(doc) -> Post:
    d = doc.to_dict()
    return Post(
        id=doc.id,
        source=make_source(d.get("source_type", "news_media"), d.get("source_id", "")),
        published_date=date.fromisoformat(d["published_date"][:10]),
        post_url=d.get("post_url"),
        positive_pct=d.get("positive_pct", 0.0),
        negative_pct=d.get("negative_pct", 0.0),
        neutral_pct=d.get("neutral_pct", 0.0),
        comment_count=d.get("comment_count", 0),
        engagement_count=d.get("engagement_count", 0),
        positive_remarks=d.get("positive_remarks", ""),
        negative_remarks=d.get("negative_remarks", ""),
        neutral_remarks=d.get("neutral_remarks", ""),
        conclusion=d.get("conclusion", ""),
        popular_comments=[
            PopularComment(
                content=c.get("content", ""),
                likes=c.get("likes", 0),
                replies=c.get("replies", 0),
                shares=c.get("shares", 0),
                engagement_score=c.get("engagement_score", 0),
            )
            for c in d.get("popular_comments", [])
        ],
        created_at=d.get("created_at") or datetime.utcnow(),
    )


def _comment_to_dict(comment: Comment) -> dict[str, Any]:
    return {
        "post_id": comment.post_id,
        "content": comment.content,
        "sentiment": comment.sentiment,
        "created_at": comment.created_at,
    }


def _comment_from_doc(doc) -> Comment:
    d = doc.to_dict()
    return Comment(
        id=doc.id,
        post_id=d.get("post_id", ""),
        content=d.get("content", ""),
        sentiment=d.get("sentiment", "neutral"),
        created_at=d.get("created_at") or datetime.utcnow(),
    )


def _newest_first(posts: list[Post]) -> list[Post]:
    posts.sort(key=lambda p: (p.published_date, p.created_at), reverse=True)
    return posts


class FirestorePostRepository:
    """Firestore-backed PostRepository."""

    COLLECTION = "posts"
    COMMENTS = "comments"

    def __init__(self, db):
        self._db = db

    def _col(self):
        return self._db.collection(self.COLLECTION)

    async def save(self, post: Post) -> Post:
        def _save():
            doc_ref = self._col().document()
            doc_ref.set(_post_to_dict(post))
            post.id = doc_ref.id
            return post

        return await run_in_thread(_save)

    async def get_by_id(self, post_id: str) -> Post | None:
        def _get():
            doc = self._col().document(post_id).get()
            return _post_from_doc(doc) if doc.exists else None

        return await run_in_thread(_get)

    async def get_by_date(self, day: date) -> list[Post]:
        def _get():
            query = self._col().where("published_date", "==", day.isoformat())
            return [_post_from_doc(d) for d in query.stream()]

        return await run_in_thread(_get)

    async def get_by_source(
        self,
        source: Source,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list[Post]:
        def _get():
            query = (
                self._col()
                .where("source_type", "==", source.source_type.value)
                .where("source_id", "==", source.id)
            )
            posts = [_post_from_doc(d) for d in query.stream()]
            # Range filter and ordering client-side to avoid composite indexes
            if start:
                posts = [p for p in posts if p.published_date >= start]
            if end:
                posts = [p for p in posts if p.published_date <= end]
            posts = _newest_first(posts)
            return posts[:limit] if limit else posts

        return await run_in_thread(_get)

    async def find_by_source_and_url(self, source: Source, post_url: str) -> Post | None:
        def _find():
            query = (
                self._col()
                .where("source_type", "==", source.source_type.value)
                .where("source_id", "==", source.id)
                .where("post_url", "==", post_url)
            )
            posts = _newest_first([_post_from_doc(d) for d in query.stream()])
            return posts[0] if posts else None

        return await run_in_thread(_find)

    async def delete(self, post_id: str) -> bool:
        def _delete():
            doc_ref = self._col().document(post_id)
            if not doc_ref.get().exists:
                return False
            batch = self._db.batch()
            count = 0
            for comment in doc_ref.collection(self.COMMENTS).stream():
                batch.delete(comment.reference)
                count += 1
                if count % _BATCH_LIMIT == 0:
                    batch.commit()
                    batch = self._db.batch()
            batch.delete(doc_ref)
            batch.commit()
            return True

        return await run_in_thread(_delete)


class FirestoreCommentRepository:
    """Firestore-backed CommentRepository (posts/{post_id}/comments)."""

    def __init__(self, db):
        self._db = db

    def _col(self, post_id: str):
        return (
            self._db.collection(FirestorePostRepository.COLLECTION)
            .document(post_id)
            .collection(FirestorePostRepository.COMMENTS)
        )

    async def save(self, comment: Comment) -> Comment:
        def _save():
            doc_ref = self._col(comment.post_id).document()
            doc_ref.set(_comment_to_dict(comment))
            comment.id = doc_ref.id
            return comment

        return await run_in_thread(_save)

    async def get_by_post(self, post_id: str, sentiment: str | None = None) -> list[Comment]:
        def _get():
            query = self._col(post_id)
            if sentiment:
                query = query.where("sentiment", "==", sentiment)
            comments = [_comment_from_doc(d) for d in query.stream()]
            comments.sort(key=lambda c: c.created_at, reverse=True)
            return comments

        return await run_in_thread(_get)

    async def delete(self, post_id: str, comment_id: str) -> bool:
        def _delete():
            doc_ref = self._col(post_id).document(comment_id)
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
            return True

        return await run_in_thread(_delete)
