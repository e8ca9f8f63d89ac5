"""Data models for rendered manual pages."""

from dataclasses import dataclass

from rustman.inline import Inline


@dataclass(frozen=True)
class Section:
    """A named section of a manual page."""

    label: str
    runs: tuple[Inline, ...]


@dataclass(frozen=True)
class Document:
    """A rendered manual page for one item."""

    title: str  # canonical path, e.g. mycrate::module::Item
    kind: str  # keyword used for the page name: struct, fn, mod, ...
    manual_section: str
    sections: tuple[Section, ...]

    @property
    def page_name(self) -> str:
        """File stem of the page, e.g. struct.mycrate::Item."""
        return f"{self.kind}.{self.title}"

    @property
    def labels(self) -> list[str]:
        """Section labels in order."""
        return [s.label for s in self.sections]

    def section(self, label: str) -> Section | None:
        """Return the first section with the given label."""
        for s in self.sections:
            if s.label == label:
                return s
        return None
