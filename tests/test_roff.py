"""Tests for roff serialization."""

from rustman.document import Document, Section
from rustman.inline import bold, italic, line_break, roman
from rustman.roff import escape, section_lines, to_roff


def test_escape() -> None:
    """Verify that backslashes and hyphens are escaped."""
    assert escape("a-b") == "a\\-b"
    assert escape("\\n") == "\\en"
    assert escape("plain") == "plain"


def test_fonts_and_breaks() -> None:
    """Verify font escapes, .br on a break and .sp on a second break."""
    section = Section(
        "NAME",
        (bold("struct"), roman(" a-b"), line_break(), line_break(), italic("c")),
    )
    assert section_lines(section) == [
        '.SH "NAME"',
        "\\fBstruct\\fR a\\-b",
        ".br",
        ".sp",
        "\\fIc\\fR",
    ]


def test_control_characters_are_protected() -> None:
    """Verify that text lines starting with a dot or quote are escaped."""
    section = Section("DESCRIPTION", (roman(".hidden"), line_break(), roman("'q")))
    assert section_lines(section)[1:] == ["\\&.hidden", ".br", "\\&'q"]


def test_embedded_newlines_are_guarded() -> None:
    """Verify that every source line of a multi-line run is protected."""
    section = Section(
        "DEPRECATED", (roman("use the\n.widget API"), line_break(), roman("x\n'y"))
    )
    assert section_lines(section)[1:] == [
        "use the",
        "\\&.widget API",
        ".br",
        "x",
        "\\&'y",
    ]


def test_empty_styled_run_emits_nothing() -> None:
    """Verify that an empty bold run does not leave stray font escapes."""
    section = Section("X", (bold(""), roman("a")))
    assert section_lines(section) == ['.SH "X"', "a"]


def test_to_roff() -> None:
    """Verify the title header and section order of a full page."""
    document = Document(
        title="c::S",
        kind="struct",
        manual_section="3r",
        sections=(
            Section("NAME", (roman("struct "), bold("S"))),
            Section('SAY "HI"', (roman("hi"),)),
        ),
    )
    assert to_roff(document) == (
        '.TH "c::S" 3r\n'
        '.SH "NAME"\n'
        "struct \\fBS\\fR\n"
        '.SH "SAY \\(dqHI\\(dq"\n'
        "hi\n"
    )
