from datetime import date

import pytest

from fakes import CONGRESS, UML, make_post
from sentiment_tracker.application.use_cases.entity_stats import EntityStatsUseCase
from sentiment_tracker.application.use_cases.manage_posts import ManagePostsUseCase
from sentiment_tracker.domain.exceptions import NotFoundError, ValidationError


@pytest.fixture
def use_case(post_repo, comment_repo):
    return ManagePostsUseCase(post_repo, comment_repo)


async def test_timeline_newest_first_within_range(post_repo, use_case):
    for day in (date(2026, 2, 1), date(2026, 2, 10), date(2026, 2, 20)):
        await post_repo.save(make_post(CONGRESS, 50, 30, 20, day=day))
    await post_repo.save(make_post(UML, 50, 30, 20, day=date(2026, 2, 10)))

    posts = await use_case.timeline(CONGRESS, start=date(2026, 2, 5))

    assert [p.published_date for p in posts] == [date(2026, 2, 20), date(2026, 2, 10)]


async def test_get_missing_post(use_case):
    with pytest.raises(NotFoundError):
        await use_case.get("nope")


async def test_comment_lifecycle(post_repo, use_case):
    post = await post_repo.save(make_post(CONGRESS, 50, 30, 20))

    kept = await use_case.add_comment(post.id, " Strong rally ", "Positive")
    await use_case.add_comment(post.id, "Too vague", "negative")

    assert kept.content == "Strong rally"
    assert kept.sentiment == "positive"
    assert len(await use_case.list_comments(post.id)) == 2
    assert [c.content for c in await use_case.list_comments(post.id, "negative")] == ["Too vague"]

    await use_case.delete_comment(post.id, kept.id)
    assert len(await use_case.list_comments(post.id)) == 1
    with pytest.raises(NotFoundError):
        await use_case.delete_comment(post.id, kept.id)


async def test_comment_validation(post_repo, use_case):
    post = await post_repo.save(make_post(CONGRESS, 50, 30, 20))

    with pytest.raises(ValidationError):
        await use_case.add_comment(post.id, "   ", "positive")
    with pytest.raises(ValidationError):
        await use_case.add_comment(post.id, "text", "angry")
    with pytest.raises(NotFoundError):
        await use_case.add_comment("missing", "text", "positive")


async def test_delete_post_cascades(post_repo, use_case):
    post = await post_repo.save(make_post(CONGRESS, 50, 30, 20))
    await use_case.add_comment(post.id, "text", "neutral")

    await use_case.delete(post.id)

    assert post.id not in post_repo.posts
    assert await use_case.list_comments(post.id) == []
    with pytest.raises(NotFoundError):
        await use_case.delete(post.id)


async def test_entity_comparison_picks_leader(post_repo, directory):
    await post_repo.save(make_post(CONGRESS, 70, 20, 10, comments=10))
    await post_repo.save(make_post(CONGRESS, 10, 80, 10, comments=90))
    await post_repo.save(make_post(UML, 40, 50, 10, comments=5))
    use_case = EntityStatsUseCase(post_repo, directory)

    stats = await use_case.execute(CONGRESS)
    comparison = await use_case.compare([CONGRESS, UML])

    assert stats.avg_positive == pytest.approx(16)
    assert [e.name for e in comparison.entities] == ["Nepali Congress", "CPN-UML"]
    assert comparison.leader.name == "CPN-UML"


async def test_entity_comparison_without_posts_has_no_leader(post_repo, directory):
    comparison = await EntityStatsUseCase(post_repo, directory).compare([CONGRESS, UML])

    assert comparison.leader is None
    assert all(e.stats.post_count == 0 for e in comparison.entities)
