import logging
from urllib.parse import unquote

from sgpc_archive.domain.models import DirectoryEntry
from sgpc_archive.services.directory import DirectoryService

logger = logging.getLogger(__name__)


def sort_entries(entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
    # Folders first, then by name
    return sorted(entries, key=lambda e: (e.is_file, e.name.casefold()))


def filter_entries(entries: list[DirectoryEntry], query: str) -> list[DirectoryEntry]:
    if not query:
        return list(entries)
    needle = query.lower()
    return [e for e in entries if needle in e.display_name.lower()]


class ExplorerSession:
    """
    Browsing state of one archive explorer: the active tab, the folder being
    shown, the back stack and the search box.

    Loads can overlap when the user navigates faster than the archive
    answers. Every load takes a sequence number and a result is only applied
    if no newer load started in the meantime.
    """

    def __init__(self, service: DirectoryService, roots: dict[str, str]):
        self.service = service
        self.roots = roots
        self.active_tab: str | None = None
        self.current_url: str | None = None
        self.entries: list[DirectoryEntry] = []
        self.history: list[str] = []
        self.search_query = ""
        self.loading = False
        self._sequence = 0

    @property
    def visible_entries(self) -> list[DirectoryEntry]:
        return filter_entries(self.entries, self.search_query)

    @property
    def playlist(self) -> list[DirectoryEntry]:
        return [e for e in self.entries if e.is_audio]

    @property
    def breadcrumb(self) -> str:
        if not self.current_url:
            return ""
        segments = [s for s in self.current_url.split("/") if s]
        return unquote(segments[-1]) if segments else ""

    async def select_tab(self, tab: str) -> list[DirectoryEntry] | None:
        if tab not in self.roots:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab
        self.history = []
        self.search_query = ""
        return await self.load(self.roots[tab])

    async def load(self, url: str, push: str | None = None, pop: bool = False) -> list[DirectoryEntry] | None:
        """
        Returns the applied entries, or None when a newer load superseded this
        one. History changes (``push``/``pop``) only happen if the result is applied.
        """
        self._sequence += 1
        ticket = self._sequence
        self.loading = True

        entries = await self.service.fetch_directory(url)

        if ticket != self._sequence:
            logger.debug(f"Discarding stale listing for {url}")
            return None

        if pop and self.history:
            self.history.pop()
        if push is not None:
            self.history.append(push)
        self.entries = sort_entries(entries)
        if url != self.current_url:
            self.search_query = ""
        self.current_url = url
        self.loading = False
        return self.entries

    async def open(self, entry: DirectoryEntry) -> list[DirectoryEntry] | None:
        """
        Descends into a folder, or returns the playlist to hand to the player
        when ``entry`` is a track.
        """
        if entry.is_file:
            return self.playlist if entry.is_audio else None
        return await self.load(entry.url, push=self.current_url)

    async def back(self) -> list[DirectoryEntry] | None:
        if not self.history:
            return None
        return await self.load(self.history[-1], pop=True)
