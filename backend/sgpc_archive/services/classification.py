import logging
from pathlib import Path
from urllib.parse import unquote

from sgpc_archive.domain.models import ClassificationRecord, DirectoryEntry
from sgpc_archive.services.codec import encode_segment

logger = logging.getLogger(__name__)

ALL_TRACKS = "All Kirtan Hazris"
URL_PREFIX = "http"
MIN_FIELDS = 5  # ragi,day,name,url,Duty_Type


def parse_records(text: str) -> list[ClassificationRecord]:
    """
    Parses the ragi duties CSV.

    Track names may contain literal commas, so columns are anchored on the
    first URL-looking token rather than on position: everything between the
    day and the URL is the name, the token after the URL is the duty type.
    Rows without a URL are dropped.
    """
    records = []
    lines = text.splitlines()

    for line_no, raw in enumerate(lines[1:], start=2):
        line = raw.strip()
        if not line:
            continue

        parts = line.split(",")
        if len(parts) < MIN_FIELDS:
            logger.debug(f"Skipping short classification row {line_no}")
            continue

        url_index = next((i for i in range(2, len(parts)) if parts[i].strip().startswith(URL_PREFIX)), None)
        if url_index is None:
            logger.debug(f"Skipping classification row {line_no} without a track URL")
            continue

        duty_type = parts[url_index + 1].strip() if url_index + 1 < len(parts) else ""
        records.append(
            ClassificationRecord(
                performer=parts[0].strip(),
                day=parts[1].strip(),
                track_name=",".join(parts[2:url_index]).strip(),
                track_url=parts[url_index].strip(),
                duty_type=duty_type,
            )
        )

    return records


def _folder(name: str, url: str) -> DirectoryEntry:
    return DirectoryEntry(name=name, url=url, is_file=False, is_audio=False)


def _track(record: ClassificationRecord) -> DirectoryEntry:
    # Dataset URLs are already real file paths
    return DirectoryEntry(name=record.track_name, url=record.track_url, is_file=True, is_audio=True)


class ClassificationIndex:
    """
    Duty type / ragi taxonomy over the bundled dataset, browsed like a
    directory tree under ``classification_base``.
    """

    def __init__(self, classification_base: str, dataset_path: Path | None = None, text: str | None = None):
        if dataset_path is None and text is None:
            raise ValueError("ClassificationIndex needs a dataset path or its text")
        self.base = classification_base.rstrip("/")
        self.dataset_path = dataset_path
        self._text = text
        self._records: list[ClassificationRecord] | None = None

    def load_records(self) -> list[ClassificationRecord]:
        if self._records is None:
            text = self._text
            if text is None:
                text = self.dataset_path.read_text(encoding="utf-8-sig")
            self._records = parse_records(text)
            logger.info(f"Loaded {len(self._records)} classification records")
        return self._records

    def owns(self, url: str) -> bool:
        return url.rstrip("/") == self.base or url.startswith(self.base + "/")

    def segments_of(self, url: str) -> list[str]:
        path = url[len(self.base):] if url.startswith(self.base) else ""
        return [unquote(part) for part in path.split("/") if part]

    def query_taxonomy(self, url: str) -> list[DirectoryEntry]:
        if not self.owns(url):
            return []
        return self.query_segments(self.segments_of(url))

    def query_segments(self, segments: list[str]) -> list[DirectoryEntry]:
        records = self.load_records()

        if not segments:
            duties = sorted({r.duty_type for r in records if r.duty_type})
            return [_folder(duty, f"{self.base}/{encode_segment(duty)}") for duty in [ALL_TRACKS, *duties]]

        duty_type = segments[0]

        if len(segments) == 1:
            if duty_type == ALL_TRACKS:
                return [_track(r) for r in records]

            performers = sorted({r.performer for r in records if r.duty_type == duty_type and r.performer})
            return [
                _folder(performer, f"{self.base}/{encode_segment(duty_type)}/{encode_segment(performer)}")
                for performer in performers
            ]

        performer = segments[1]
        return [_track(r) for r in records if r.duty_type == duty_type and r.performer == performer]
