"""Logic for splitting doc comments into synopsis and description."""

import re

from rustman.document import Section
from rustman.markdown_converter import to_runs

BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def split_docs(docs: str) -> tuple[str | None, str]:
    """Split docs at the first blank line into (synopsis, description).

    Without a blank line there is no synopsis and everything is description.
    """
    parts = BLANK_LINE_RE.split(docs, maxsplit=1)
    if len(parts) == 2:
        return parts[0], parts[1]
    return None, docs


def summary_line(docs: str) -> str:
    """First paragraph of the docs, or failing that their first line.

    A paragraph wrapped over several source lines is joined into one line.
    """
    synopsis, _ = split_docs(docs)
    text = synopsis if synopsis is not None else docs.split("\n", 1)[0]
    return " ".join(text.split())


def doc_sections(docs: str | None) -> list[Section]:
    """Render SYNOPSIS and DESCRIPTION sections for an item's docs."""
    if not docs:
        return []
    synopsis, description = split_docs(docs)
    sections = []
    if synopsis is not None:
        sections.append(Section("SYNOPSIS", tuple(to_runs(synopsis))))
    sections.append(Section("DESCRIPTION", tuple(to_runs(description))))
    return sections
