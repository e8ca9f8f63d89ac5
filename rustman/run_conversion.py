"""Orchestration logic for rendering every page of a crate."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rustman.item_model import Module
from rustman.render_item import render_item
from rustman.render_options import RenderOptions
from rustman.symbol_index import SymbolIndex
from rustman.write_page import write_page

logger = logging.getLogger(__name__)


@dataclass
class ConversionReport:
    """Outcome of one conversion run."""

    written: list[Path] = field(default_factory=list)
    rendered: int = 0
    skipped: int = 0
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no item failed to render."""
        return not self.failed


@dataclass
class _Walk:
    index: SymbolIndex
    out_dir: Path
    options: RenderOptions
    compress: bool
    dry_run: bool
    report: ConversionReport = field(default_factory=ConversionReport)
    visited: set[str] = field(default_factory=set)

    def visit(self, item_id: str) -> None:
        """Render one item and, for modules, everything below it."""
        if item_id in self.visited:
            logger.warning("%s was already rendered, skipping", item_id)
            return
        self.visited.add(item_id)

        try:
            item = self.index.lookup(item_id)
        except Exception:
            logger.exception("Error loading item %s", item_id)
            self.report.failed.append(item_id)
            return

        self._render(item_id, item.name or item_id)
        if isinstance(item.inner, Module):
            for child_id in item.inner.items:
                self.visit(child_id)

    def _render(self, item_id: str, name: str) -> None:
        try:
            document = render_item(self.index, item_id, self.options)
            if document is None:
                logger.info("no page for %s", name)
                self.report.skipped += 1
                return
            self.report.rendered += 1
            if self.dry_run:
                return
            path = write_page(document, self.out_dir, compress=self.compress)
        except Exception:
            logger.exception("Error rendering %s", name)
            self.report.failed.append(name)
            return
        logger.info("- writing %s", path.name)
        self.report.written.append(path)


def run_conversion(
    index: SymbolIndex,
    out_dir: Path,
    options: RenderOptions | None = None,
    *,
    compress: bool = True,
    dry_run: bool = False,
) -> ConversionReport:
    """Render the crate root and every item reachable through its modules.

    A failure in one item is logged and recorded; its siblings still render.
    """
    logger.info(
        "Rendering crate version %s (format version %s)",
        index.crate_version,
        index.format_version,
    )
    if not dry_run:
        out_dir.mkdir(parents=True, exist_ok=True)
    walk = _Walk(index, out_dir, options or RenderOptions(), compress, dry_run)
    walk.visit(index.root)
    return walk.report
