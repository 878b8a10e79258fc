from urllib.parse import quote


def encode_segment(raw: str) -> str:
    """
    Percent-encodes a filename into a single URL path segment the archive's
    static file server accepts.

    Only ASCII letters, digits and ``-_.~`` stay literal, so ``! ' ( ) *`` come
    out as ``%21 %27 %28 %29 %2A``. Timestamped recordings such as
    ``Asa Di Var (02;00).mp3`` do not resolve with bare parentheses.
    """
    return quote(raw, safe="")
