"""Tests for the HTTP API."""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from sgpc_archive.core.settings import settings
from sgpc_archive.main import app
from sgpc_archive.services.classification import ALL_TRACKS, ClassificationIndex
from sgpc_archive.services.directory import DirectoryService

from .conftest import SAMPLE_CSV, listing_html


REQUESTED: list[str] = []


def archive_handler(request: httpx.Request) -> httpx.Response:
    REQUESTED.append(str(request.url))
    if str(request.url) == settings.KIRTAN_BASE:
        return httpx.Response(
            200, text=listing_html(("Track.mp3", "Track.mp3"), ("2025", "?dir=2025"), ("2024", "?dir=2024"))
        )
    return httpx.Response(500)


@pytest.fixture
def client() -> Iterator[TestClient]:
    REQUESTED.clear()
    index = ClassificationIndex(settings.CLASSIFICATION_BASE, text=SAMPLE_CSV)
    transport_client = httpx.AsyncClient(transport=httpx.MockTransport(archive_handler))
    app.state.directory_service = DirectoryService(index, archive_root=settings.KIRTAN_BASE, client=transport_client)
    with TestClient(app) as test_client:
        yield test_client
    app.state.directory_service = None


def test_health(client: TestClient) -> None:
    assert client.get("/api/v1/health").json() == {"status": "ok"}


def test_ready_reports_dataset(client: TestClient) -> None:
    assert client.get("/api/v1/ready").json() == {"status": "ready", "classification_records": 4}


def test_roots(client: TestClient) -> None:
    roots = client.get("/api/v1/roots").json()
    assert roots == {
        "years": settings.KIRTAN_BASE,
        "ragis": settings.RAGIWISE_BASE,
        "classification": settings.CLASSIFICATION_BASE,
    }


def test_directory_defaults_to_kirtan_root_sorted(client: TestClient) -> None:
    body = client.get("/api/v1/directory").json()
    assert body["url"] == settings.KIRTAN_BASE
    assert [e["name"] for e in body["entries"]] == ["2024", "2025", "Track.mp3"]
    assert body["entries"][2]["display_name"] == "Track"
    assert body["entries"][2]["is_file"] is True


def test_directory_failure_is_empty_listing(client: TestClient) -> None:
    response = client.get("/api/v1/directory", params={"url": settings.RAGIWISE_BASE})
    assert response.status_code == 200
    assert response.json()["entries"] == []


def test_directory_search_filter(client: TestClient) -> None:
    body = client.get("/api/v1/directory", params={"q": "track"}).json()
    assert [e["name"] for e in body["entries"]] == ["Track.mp3"]


def test_classification_tab(client: TestClient) -> None:
    body = client.get("/api/v1/directory/classification").json()
    assert body["entries"][0]["name"] == ALL_TRACKS


@pytest.mark.parametrize(
    "url",
    [
        "http://169.254.169.254/latest/meta-data/",
        "https://sgpc.net.evil.test/kirtan/",
        "https://sgpc.net/admin/",
        "https://sgpc.net/kirtan/../admin/",
        "https://sgpc.net/kirtan/?dir=../../admin",
    ],
)
def test_directory_rejects_urls_outside_archive(client: TestClient, url: str) -> None:
    response = client.get("/api/v1/directory", params={"url": url})

    assert response.status_code == 400
    assert REQUESTED == []


def test_directory_accepts_query_form_archive_url(client: TestClient) -> None:
    response = client.get("/api/v1/directory", params={"url": settings.KIRTAN_BASE + "?dir=2025/January"})
    assert response.status_code == 200


def test_ready_degraded_without_dataset(client: TestClient, tmp_path) -> None:
    app.state.directory_service.classification = ClassificationIndex(
        settings.CLASSIFICATION_BASE, dataset_path=tmp_path / "missing.csv"
    )

    response = client.get("/api/v1/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"

    listing = client.get("/api/v1/directory/classification")
    assert listing.status_code == 200
    assert listing.json()["entries"] == []


def test_unknown_tab_is_404(client: TestClient) -> None:
    assert client.get("/api/v1/directory/favorites").status_code == 404
