import pytest
from fastapi.testclient import TestClient

from novel_ingestion.api.chapters import get_extraction_service
from novel_ingestion.core.exceptions import HttpError, InsufficientContent, InvalidUrl
from novel_ingestion.main import app
from novel_ingestion.models.chapter import ChapterItem, ExtractionResult


class FakeService:

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def fetch_chapter(self, url, current_title=None):
        self.calls.append((url, current_title))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture()
def client_with():
    def make(service):
        app.dependency_overrides[get_extraction_service] = lambda: service
        return TestClient(app)

    yield make
    app.dependency_overrides.clear()


def test_health_endpoints():
    client = TestClient(app)
    for path in ("/health", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "   "}])
def test_missing_url_is_rejected(client_with, body):
    service = FakeService()
    response = client_with(service).post("/api/fetch-novel", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing url parameter"}
    assert service.calls == []


def test_success_uses_camel_case_fields(client_with):
    result = ExtractionResult(
        title="第五章 夜行",
        content="月光灑在城牆上。",
        source_url="https://m.qidian.com/chapter/1/2/",
        next_chapter_url="https://m.qidian.com/chapter/1/3/",
        chapters=[ChapterItem(title="第1章", url="https://m.qidian.com/chapter/1/1/")],
    )
    service = FakeService(result=result)
    response = client_with(service).post(
        "/api/fetch-novel",
        json={"url": " https://www.qidian.com/chapter/1/2/ ", "currentTitle": "第四章"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["sourceUrl"] == "https://m.qidian.com/chapter/1/2/"
    assert data["nextChapterUrl"] == "https://m.qidian.com/chapter/1/3/"
    assert data["nextChapterInferred"] is False
    assert "prevChapterUrl" not in data
    assert data["chapters"] == [{"title": "第1章", "url": "https://m.qidian.com/chapter/1/1/"}]
    assert service.calls == [("https://www.qidian.com/chapter/1/2/", "第四章")]


@pytest.mark.parametrize(
    "error, status_code",
    [
        (InvalidUrl("Invalid URL: ftp://x"), 400),
        (InsufficientContent(42), 422),
        (HttpError(503), 502),
        (RuntimeError("unexpected"), 500),
    ],
)
def test_errors_map_to_status_codes(client_with, error, status_code):
    response = client_with(FakeService(error=error)).post(
        "/api/fetch-novel", json={"url": "https://novel.example/1.html"}
    )

    assert response.status_code == status_code
    assert response.json()["error"]


def test_transport_error_message(client_with):
    response = client_with(FakeService(error=HttpError(503))).post(
        "/api/fetch-novel", json={"url": "https://novel.example/1.html"}
    )
    assert response.json() == {"error": "Failed to fetch chapter: HTTP error: 503"}
