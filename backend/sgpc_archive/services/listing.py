from bs4 import BeautifulSoup

from sgpc_archive.domain.models import DirectoryEntry
from sgpc_archive.services.paths import to_file_url, to_folder_url

PARENT_MARKER = ".."
AUDIO_SUFFIX = ".mp3"


def is_audio_name(name: str) -> bool:
    return name.lower().endswith(AUDIO_SUFFIX)


def parse_listing(html: str, base_browsing_url: str) -> list[DirectoryEntry]:
    """
    Extracts entries from an archive directory page.

    Each ``li`` under ``#directory-listing`` carries ``data-name`` and
    ``data-href``. Items missing either, and the parent ``..`` item, are
    skipped. A page without the container yields an empty list.
    """
    soup = BeautifulSoup(html, "html.parser")
    entries = []

    for li in soup.select("#directory-listing li"):
        name = li.get("data-name")
        href = li.get("data-href")
        if not name or not href or name == PARENT_MARKER:
            continue

        if is_audio_name(name):
            # Files are always addressed by their real path, never ?dir=
            url = to_file_url(base_browsing_url, name)
            is_audio = True
        else:
            url = to_folder_url(base_browsing_url, href)
            is_audio = False

        entries.append(DirectoryEntry(name=name, url=url, is_file=is_audio, is_audio=is_audio))

    return entries
