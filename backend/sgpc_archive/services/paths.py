import logging
from urllib.parse import parse_qsl, quote, unquote, urlencode, urljoin, urlsplit, urlunsplit

from sgpc_archive.services.codec import encode_segment

logger = logging.getLogger(__name__)

DIR_MARKER = "?dir="


def to_real_path(browsing_url: str) -> str:
    """
    Converts a browsing URL into the real path used to address files.
    e.g. "https://sgpc.net/kirtan/?dir=2025" -> "https://sgpc.net/kirtan/2025"
    """
    if DIR_MARKER in browsing_url:
        base, folder = browsing_url.split(DIR_MARKER, 1)
        return f"{base.rstrip('/')}/{folder}"
    return browsing_url.rstrip("/")


def to_file_url(folder_browsing_url: str, filename: str) -> str:
    return f"{to_real_path(folder_browsing_url)}/{encode_segment(filename)}"


def is_within(url: str, root: str) -> bool:
    """True when ``url`` addresses ``root`` or something below it on the same host."""
    try:
        target, base = urlsplit(url), urlsplit(root)
        dirs = [value for key, value in parse_qsl(target.query, keep_blank_values=True) if key == "dir"]
    except ValueError:
        return False
    if (target.scheme, target.netloc) != (base.scheme, base.netloc):
        return False
    if any(".." in unquote(value).split("/") for value in [target.path, *dirs]):
        return False
    base_path = base.path.rstrip("/")
    return target.path == base_path or target.path.startswith(base_path + "/")


def to_folder_url(current_browsing_url: str, href: str) -> str:
    """
    Builds the browsing URL of a subfolder listed under ``current_browsing_url``.

    Query-form listings stay in query form so the server keeps rendering its
    relative navigation; the new ``dir`` value is the current one plus ``href``.
    Absolute, root-relative and query hrefs resolve as ordinary references.
    """
    try:
        parts = urlsplit(current_browsing_url)
        query = parse_qsl(parts.query, keep_blank_values=True)
        current_dir = next((value for key, value in query if key == "dir"), "")

        if current_dir and not href.startswith(("?", "http", "/")):
            new_dir = f"{current_dir.rstrip('/')}/{href}"
            query = [(key, new_dir if key == "dir" else value) for key, value in query]
            new_query = urlencode(query, safe="/", quote_via=quote)
            return urlunsplit((parts.scheme, parts.netloc, parts.path, new_query, ""))

        return urljoin(current_browsing_url, href)
    except ValueError as e:
        logger.warning(f"Could not resolve folder href {href!r} against {current_browsing_url}: {e}")
        return f"{current_browsing_url.rstrip('/')}/{href}"
