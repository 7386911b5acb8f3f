from __future__ import annotations

import pytest

from fakes import (
    CONGRESS,
    KANTIPUR,
    UML,
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryReportRepository,
    StaticSourceDirectory,
)


@pytest.fixture
def post_repo():
    return InMemoryPostRepository()


@pytest.fixture
def comment_repo(post_repo):
    return InMemoryCommentRepository(post_repo)


@pytest.fixture
def report_repo():
    return InMemoryReportRepository()


@pytest.fixture
def directory():
    return StaticSourceDirectory(
        names={
            CONGRESS: "Nepali Congress",
            UML: "CPN-UML",
            KANTIPUR: "Kantipur",
        },
        parties={"cand-1": "Nepali Congress", "cand-2": "Nepali Congress", "cand-3": "CPN-UML"},
    )
