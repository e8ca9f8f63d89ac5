"""Serialization of rendered documents to roff man page markup."""

from rustman.document import Document, Section
from rustman.inline import Inline, Style

FONT_ESCAPES = {Style.BOLD: "\\fB", Style.ITALIC: "\\fI"}
FONT_RESET = "\\fR"


def escape(text: str) -> str:
    """Escape backslashes and hyphens for roff."""
    return text.replace("\\", "\\e").replace("-", "\\-")


def _quote(arg: str) -> str:
    return '"' + escape(arg).replace('"', '\\(dq') + '"'


def _text_line(line: str) -> str:
    # A leading . or ' would be read as a control line.
    if line.startswith((".", "'")):
        return "\\&" + line
    return line


def _run_text(run: Inline) -> str:
    text = escape(run.text)
    font = FONT_ESCAPES.get(run.style)
    if font and text:
        return f"{font}{text}{FONT_RESET}"
    return text


def section_lines(section: Section) -> list[str]:
    """Render a section header and its runs as roff lines.

    A line break ends the current output line with `.br`; a second break in a
    row leaves a blank line with `.sp` instead. A newline inside a run only
    starts a new source line.
    """
    lines = [f".SH {_quote(section.label)}"]
    current = ""
    last_break = False
    for run in section.runs:
        if run.style is Style.LINE_BREAK:
            if current:
                lines += [_text_line(current), ".br"]
                current = ""
            elif last_break:
                lines.append(".sp")
            else:
                lines.append(".br")
            last_break = True
            continue
        # Text with embedded newlines continues the filled paragraph on new
        # source lines, each of which needs its own control-character guard.
        for i, piece in enumerate(run.text.split("\n")):
            if i and current:
                lines.append(_text_line(current))
                current = ""
            current += _run_text(Inline(run.style, piece))
        last_break = False
    if current:
        lines.append(_text_line(current))
    return lines


def to_roff(document: Document) -> str:
    """Serialize a document to man page source."""
    lines = [f".TH {_quote(document.title)} {document.manual_section}"]
    for section in document.sections:
        lines += section_lines(section)
    return "\n".join(lines) + "\n"
