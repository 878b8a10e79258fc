"""Shared pytest fixtures for the archive resolver tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from sgpc_archive.core.settings import PACKAGE_DIR
from sgpc_archive.services.classification import ClassificationIndex
from sgpc_archive.services.directory import DirectoryService

KIRTAN_BASE = "https://host/kirtan/"
CLASSIFICATION_BASE = "https://host/classification/"

SAMPLE_CSV = """ragi,day,name,url,Duty_Type
Bhai Harjinder Singh Ji,2025-01-02,Tin Pehar (10;00-12;00),https://host/kirtan/2025/January/tin-pehar-harjinder.mp3,Tin Pehar
Bhai Amarjit Singh Ji,2025-01-04,Tin Pehar (10;00-12;00),https://host/kirtan/2025/January/tin-pehar-amarjit.mp3,Tin Pehar
Bhai Amarjit Singh Ji,2025-01-01,Asa Di Var,https://host/kirtan/2025/January/asa-di-var-amarjit.mp3,Asa Di Var

Bhai Karnail Singh Ji,2025-01-05,Rehras Sahib, Sodar Di Chauki,https://host/kirtan/2025/January/rehras.mp3,Sodar Di Chauki
Bhai Broken Row,2025-01-06,No link here,not-a-url,Tin Pehar
"""


def listing_html(*items: tuple[str | None, str | None]) -> str:
    """Builds a directory page with one ``li`` per (data-name, data-href) pair."""
    lis = []
    for name, href in items:
        attrs = ""
        if name is not None:
            attrs += f' data-name="{name}"'
        if href is not None:
            attrs += f' data-href="{href}"'
        lis.append(f"<li{attrs}><a>{name}</a></li>")
    return (
        "<html><body><nav>Index</nav>"
        f'<ul id="directory-listing">{"".join(lis)}</ul>'
        "</body></html>"
    )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def sample_index() -> ClassificationIndex:
    return ClassificationIndex(CLASSIFICATION_BASE, text=SAMPLE_CSV)


@pytest.fixture
def bundled_index() -> ClassificationIndex:
    return ClassificationIndex(CLASSIFICATION_BASE, dataset_path=PACKAGE_DIR / "data" / "kirtan_classification.csv")


@pytest.fixture
async def make_service(sample_index: ClassificationIndex) -> AsyncIterator[Callable[..., DirectoryService]]:
    """Factory for a DirectoryService whose network calls go to ``handler``."""
    services: list[DirectoryService] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        index: ClassificationIndex | None = None,
    ) -> DirectoryService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        service = DirectoryService(index or sample_index, archive_root=KIRTAN_BASE, client=client)
        services.append(service)
        return service

    yield _make

    for service in services:
        await service.aclose()
