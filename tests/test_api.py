import pytest
from fastapi.testclient import TestClient

from fakes import REPORT_DAY, FakeClassifier, InMemoryContainer
from sentiment_tracker.domain.exceptions import ExternalServiceError
from sentiment_tracker.presentation.web.app import create_app

URL = "https://facebook.com/congress/posts/7"


@pytest.fixture
def container():
    return InMemoryContainer(classifier=FakeClassifier())


@pytest.fixture
def client(container):
    return TestClient(create_app(container))


def _analyze(client, **extra):
    body = {"comments": ["Good job", {"content": "Roads!", "likes": 3}], "post_url": URL}
    body.update(extra)
    return client.post("/api/sources/political_party/party-1/analyze", json=body)


def test_analyze_stores_post(client, container):
    resp = _analyze(client, published_date="2026-02-14")

    assert resp.status_code == 201
    data = resp.json()
    assert data["success"] is True
    assert data["post"]["published_date"] == "2026-02-14"
    assert data["post"]["source_type"] == "political_party"
    assert data["comment_count"] == 2
    assert data["post"]["id"] in container.post_repo.posts


def test_duplicate_url_conflict(client):
    first = _analyze(client, published_date="2026-02-14").json()["post"]

    resp = _analyze(client)

    assert resp.status_code == 409
    data = resp.json()
    assert data["error"] == "duplicate_url"
    assert data["existing_post_id"] == first["id"]
    assert data["existing_date"] == "2026-02-14"


def test_force_reanalysis(client, container):
    first = _analyze(client).json()["post"]

    resp = _analyze(client, force=True)

    assert resp.status_code == 201
    assert list(container.post_repo.posts) == [resp.json()["post"]["id"]]
    assert first["id"] not in container.post_repo.posts


def test_unknown_source_type(client):
    resp = client.post("/api/sources/blogger/x/analyze", json={"comments": ["hi"]})

    assert resp.status_code == 400


def test_classifier_failure_is_503():
    client = TestClient(create_app(InMemoryContainer(classifier=FakeClassifier(error=ExternalServiceError("down")))))

    resp = _analyze(client)

    assert resp.status_code == 503


def test_manual_post_validation(client):
    resp = client.post(
        "/api/sources/news_media/media-1/posts",
        json={"positive_pct": 50, "negative_pct": 50, "neutral_pct": 50},
    )

    assert resp.status_code == 400


def test_generate_without_posts_is_no_data(client, container):
    resp = client.post("/api/reports/generate", json={"report_date": "2026-02-14"})

    assert resp.status_code == 200
    assert resp.json()["success"] is False
    assert resp.json()["status"] == "no_data"
    assert container.report_repo.reports == {}


def test_generate_invalid_date(client):
    resp = client.post("/api/reports/generate", json={"report_date": "14/02/2026"})

    assert resp.status_code == 400


def test_generate_and_read_back(client):
    created = client.post(
        "/api/sources/political_party/party-1/posts",
        json={
            "positive_pct": 70,
            "negative_pct": 20,
            "neutral_pct": 10,
            "comment_count": 10,
            "published_date": REPORT_DAY.isoformat(),
        },
    )
    assert created.status_code == 201

    resp = client.post("/api/reports/generate", json={"report_date": REPORT_DAY.isoformat()})

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["summary_source"] == "algorithmic"
    assert data["total_posts_analyzed"] == 1

    report = client.get("/api/reports/2026-02-14").json()
    assert report["id"] == "2026-02-14"
    assert report["summary_text"]

    history = client.get("/api/reports").json()
    assert [r["report_date"] for r in history] == ["2026-02-14"]
    assert "source_summaries" not in history[0]

    assert client.get("/api/reports/trends").json()["labels"] == ["2026-02-14"]
    assert client.delete("/api/reports/2026-02-14").json() == {"success": True}
    assert client.get("/api/reports/2026-02-14").status_code == 404


def test_comments_and_missing_post(client):
    post_id = _analyze(client).json()["post"]["id"]

    created = client.post(f"/api/posts/{post_id}/comments", json={"content": "Nice", "sentiment": "positive"})
    assert created.status_code == 201
    assert len(client.get(f"/api/posts/{post_id}/comments").json()) == 1

    assert client.delete(f"/api/posts/{post_id}").status_code == 200
    assert client.get(f"/api/posts/{post_id}").status_code == 404
