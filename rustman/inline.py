"""Styled text runs, the smallest unit of rendered output."""

from dataclasses import dataclass
from enum import Enum

INDENT = "  "


class Style(Enum):
    """Font of an inline run."""

    ROMAN = "roman"
    BOLD = "bold"
    ITALIC = "italic"
    LINE_BREAK = "line_break"


@dataclass(frozen=True)
class Inline:
    """A run of text in a single font, or a forced line break."""

    style: Style
    text: str = ""


def roman(text: str) -> Inline:
    """Plain text."""
    return Inline(Style.ROMAN, text)


def bold(text: str) -> Inline:
    """Bold text."""
    return Inline(Style.BOLD, text)


def italic(text: str) -> Inline:
    """Italic text."""
    return Inline(Style.ITALIC, text)


def line_break() -> Inline:
    """Forced line break."""
    return Inline(Style.LINE_BREAK)


def pad(depth: int) -> str:
    """Indentation for a nesting depth, two spaces per level."""
    return INDENT * depth


def plain_text(runs: list[Inline]) -> str:
    """Flatten runs to unstyled text, line breaks become newlines."""
    return "".join(
        "\n" if run.style is Style.LINE_BREAK else run.text for run in runs
    )
