"""Tests for writing man page files."""

import gzip
from pathlib import Path

from rustman.document import Document, Section
from rustman.inline import roman
from rustman.roff import to_roff
from rustman.write_page import page_file_name, write_page

DOCUMENT = Document(
    title="c::S",
    kind="struct",
    manual_section="3r",
    sections=(Section("NAME", (roman("struct S"),)),),
)


def test_page_file_name() -> None:
    """Verify compressed and plain file names."""
    assert page_file_name(DOCUMENT) == "struct.c::S.3r.gz"
    assert page_file_name(DOCUMENT, compress=False) == "struct.c::S.3r"


def test_write_compressed_page(tmp_path: Path) -> None:
    """Verify that the gzip file holds the roff source and its inner name."""
    target = write_page(DOCUMENT, tmp_path)
    assert target == tmp_path / "struct.c::S.3r.gz"
    raw = target.read_bytes()
    assert b"struct.c::S.3r" in raw[:64]
    assert gzip.decompress(raw).decode("utf-8") == to_roff(DOCUMENT)


def test_compressed_output_is_reproducible(tmp_path: Path) -> None:
    """Verify that writing the same page twice gives identical bytes."""
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    first = write_page(DOCUMENT, tmp_path / "a")
    second = write_page(DOCUMENT, tmp_path / "b")
    assert first.read_bytes() == second.read_bytes()


def test_write_uncompressed_page(tmp_path: Path) -> None:
    """Verify plain roff output."""
    target = write_page(DOCUMENT, tmp_path, compress=False)
    assert target.name == "struct.c::S.3r"
    assert target.read_text(encoding="utf-8") == to_roff(DOCUMENT)
