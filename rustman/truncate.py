"""Width-bounded truncation for one-line summaries."""

ELLIPSIS = "..."


def truncate(text: str, width: int) -> str:
    """Cut `text` to at most `width` UTF-8 bytes, ending with an ellipsis if cut.

    Text that already fits is returned unchanged. Otherwise the last three
    columns are reserved for the ellipsis and the kept prefix ends on a
    character boundary.
    """
    encoded = text.encode("utf-8")
    if len(encoded) <= width:
        return text
    if width < len(ELLIPSIS):
        return ELLIPSIS[: max(width, 0)]
    # A cut through a multi-byte character leaves an incomplete tail; drop it.
    head = encoded[: width - len(ELLIPSIS)].decode("utf-8", errors="ignore")
    return head + ELLIPSIS
