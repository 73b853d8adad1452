import base64

import pytest
from fastapi.testclient import TestClient

from creal.main import ServiceContainer, build_container, create_app
from creal.models import VideoClip
from creal.services.infrastructure.storage import CacheStore, InMemoryKeyValueStore
from creal.services.orchestration import AnalysisOrchestrator, MessageRouter

from conftest import FakeAnalyzer, FakeAuthorSource

URL = "https://news.example.com/story"


class FakeVideoClient:
    async def generate(self, prompt):
        return VideoClip(payload=b"mp4-bytes")


@pytest.fixture
def container():
    cache = CacheStore(InMemoryKeyValueStore())
    orchestrator = AnalysisOrchestrator(
        cache,
        analyzer=FakeAnalyzer(),
        video_client=FakeVideoClient(),
        author_lookup=FakeAuthorSource(),
    )
    return ServiceContainer(cache=cache, orchestrator=orchestrator, router=MessageRouter(orchestrator))


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


def post_message(client, message_type, payload=None):
    response = client.post("/messages", json={"type": message_type, "payload": payload})
    assert response.status_code == 200
    return response.json()


def test_analyze_then_history(client):
    first = post_message(client, "ANALYZE_ARTICLE", {"text": "Body", "url": URL, "title": "Headline"})
    second = post_message(client, "ANALYZE_ARTICLE", {"text": "Body", "url": URL})

    assert first["served_from_cache"] is False
    assert second["served_from_cache"] is True

    history = post_message(client, "GET_ARTICLE_HISTORY")
    assert [r["key"] for r in history] == [URL]
    assert history[0]["title"] == "Headline"


def test_generate_video(client):
    body = post_message(client, "GENERATE_VIDEO", {"title": "Flood warning"})

    assert base64.b64decode(body["payload"]) == b"mp4-bytes"


def test_unknown_type_is_reported_not_rejected(client):
    body = post_message(client, "NOT_A_TYPE")

    assert body["error_type"] == "UnknownMessageType"


def test_request_id_is_echoed(client):
    response = client.post(
        "/messages",
        json={"type": "GET_STORAGE_STATS"},
        headers={"X-Request-ID": "req-42"},
    )

    assert response.headers["X-Request-ID"] == "req-42"
    assert response.json()["count"] == 0


def test_missing_type_is_unprocessable(client):
    response = client.post("/messages", json={"payload": {}})

    assert response.status_code == 422


def test_health(client):
    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["checks"]["analysis_configured"] is True
    assert body["checks"]["cache"]["count"] == 0


def test_root(client):
    assert client.get("/").json()["message"] == "CReal Core API"


def test_build_container_without_api_key():
    container = build_container(api_key=None, substrate=InMemoryKeyValueStore())

    assert container.orchestrator.analyzer is None
    assert container.orchestrator.video_client is None
    assert container.router.orchestrator is container.orchestrator


def test_build_container_with_api_key():
    container = build_container(api_key="test-key", substrate=InMemoryKeyValueStore())

    assert container.orchestrator.analyzer is not None
    assert container.orchestrator.video_client.api_key == "test-key"
    assert container.orchestrator.author_lookup is not None


def test_without_api_key_remote_calls_report_configuration_error():
    container = build_container(api_key=None, substrate=InMemoryKeyValueStore())

    with TestClient(create_app(container)) as client:
        body = post_message(client, "ANALYZE_ARTICLE", {"text": "Body"})
        history = post_message(client, "GET_ARTICLE_HISTORY")

    assert body["error_type"] == "ConfigurationError"
    assert history == []
