import logging

import httpx

from sgpc_archive.domain.models import ClassificationSource, DirectoryEntry, ScrapeSource, Source
from sgpc_archive.services.classification import ClassificationIndex
from sgpc_archive.services.listing import parse_listing

logger = logging.getLogger(__name__)


class DirectoryService:
    """
    Single entry point for directory listings. Classification URLs are served
    from the in-memory index, everything else is scraped from the archive.
    """

    def __init__(
        self,
        classification: ClassificationIndex,
        archive_root: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.classification = classification
        self.archive_root = archive_root
        self.timeout = timeout
        self._client = client

    def resolve_source(self, url: str) -> Source:
        if self.classification.owns(url):
            return ClassificationSource(segments=self.classification.segments_of(url))
        return ScrapeSource(url=url)

    async def fetch_directory(self, url: str) -> list[DirectoryEntry]:
        source = self.resolve_source(url)
        if isinstance(source, ClassificationSource):
            return self._classify(source.segments)
        return await self._scrape(source.url)

    def _classify(self, segments: list[str]) -> list[DirectoryEntry]:
        try:
            return self.classification.query_segments(segments)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Classification dataset unavailable: {e}")
        return []

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url)
        async with httpx.AsyncClient(follow_redirects=True, timeout=self.timeout) as client:
            return await client.get(url)

    async def _scrape(self, url: str) -> list[DirectoryEntry]:
        # Failures surface as an empty folder, never as an exception
        try:
            response = await self._get(url)
            if response.status_code == 200:
                return parse_listing(response.text, url)
            logger.error(f"SGPC scrape error for {url}: HTTP {response.status_code}")
        except Exception as e:
            logger.error(f"SGPC scrape error for {url}: {e}")
        return []

    async def check_connectivity(self) -> dict:
        try:
            response = await self._get(self.archive_root)
            if response.status_code in [200, 301, 302]:
                return {"status": "online", "message": "Connected to SGPC archive"}
            return {"status": "offline", "message": f"Status Code: {response.status_code}"}
        except Exception as e:
            return {"status": "offline", "message": str(e)}
