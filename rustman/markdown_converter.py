"""Logic for converting markdown doc comments into styled runs.

The parse itself is done by markdown-it-py; this module walks the resulting
syntax tree depth first and keeps the styling state rustdoc comments need.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import count

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from rustman.inline import Inline, bold, italic, line_break, pad, roman

_PARSER = MarkdownIt("commonmark").enable("strikethrough")

STRIKE = "~~"


def parse_markdown(text: str) -> SyntaxTreeNode:
    """Parse markdown into a read-only syntax tree."""
    return SyntaxTreeNode(_PARSER.parse(text))


def _bullets() -> Iterator[str]:
    while True:
        yield "-"


def _numbers(start: int) -> Iterator[str]:
    return (str(n) for n in count(start))


@dataclass
class _State:
    bold: bool = False
    italic: bool = False
    start: bool = False  # at the start of a line that still needs indenting
    indentation: int = 0
    lists: list[Iterator[str]] = field(default_factory=list)

    def styled(self, text: str) -> Inline:
        if self.bold:
            return bold(text)
        if self.italic:
            return italic(text)
        return roman(text)


def _is_hidden_doctest_line(line: str) -> bool:
    return line == "#" or line.startswith("# ")


def _emit(runs: list[Inline], state: _State, text: str) -> None:
    if text:
        runs.append(state.styled(text))


def _traverse(node: SyntaxTreeNode, runs: list[Inline], state: _State) -> None:
    kind = node.type
    was_bold, was_italic = state.bold, state.italic

    if kind == "blockquote":
        state.indentation += 2
    elif kind in ("bullet_list", "ordered_list"):
        state.indentation += 1
        if kind == "ordered_list":
            state.lists.append(_numbers(int(node.attrs.get("start", 1))))
        else:
            state.lists.append(_bullets())
    elif kind == "code_inline":
        _emit(runs, state, f"`{node.content}`")
    elif kind == "s":
        _emit(runs, state, STRIKE)
    elif kind == "em":
        state.italic = True
    elif kind == "strong":
        state.bold = True
    elif kind == "heading":
        level = int(node.tag[1:])
        runs.append(line_break())
        _emit(runs, state, " ")
        _emit(runs, state, pad(state.indentation))
        _emit(runs, state, "#" * level)
        _emit(runs, state, " ")
        state.bold = True
    elif kind == "text":
        _emit(runs, state, node.content)
    elif kind == "softbreak":
        _emit(runs, state, " ")
    elif kind == "hardbreak":
        runs.append(line_break())
    elif kind in ("fence", "code_block"):
        runs += [line_break(), line_break()]
        for line in node.content.splitlines():
            if _is_hidden_doctest_line(line):
                continue
            _emit(runs, state, pad(state.indentation + 1))
            _emit(runs, state, line)
            runs.append(line_break())
        runs.append(line_break())
    elif kind == "paragraph":
        if state.start:
            _emit(runs, state, pad(state.indentation))
        state.start = False
    elif kind == "list_item":
        _emit(runs, state, pad(state.indentation))
        _emit(runs, state, next(state.lists[-1]))
        _emit(runs, state, " ")
        state.start = False
    elif kind == "hr":
        runs.append(line_break())

    for child in node.children:
        _traverse(child, runs, state)

    if kind == "blockquote":
        state.indentation -= 2
    elif kind in ("bullet_list", "ordered_list"):
        state.indentation -= 1
        state.lists.pop()
        state.start = True
    elif kind == "list_item":
        state.start = True
    elif kind == "s":
        _emit(runs, state, STRIKE)
    elif kind in ("em", "strong"):
        state.bold, state.italic = was_bold, was_italic
    elif kind == "heading":
        state.bold = was_bold
        runs.append(line_break())
        state.start = True
    elif kind in ("paragraph", "hr"):
        runs.append(line_break())
        state.start = True
    elif kind in ("fence", "code_block"):
        state.start = True


def convert_tree(tree: SyntaxTreeNode, indentation: int = 0) -> list[Inline]:
    """Convert a parsed markdown tree to runs, indented `indentation` levels.

    The first line is not indented; callers place it themselves.
    """
    runs: list[Inline] = []
    _traverse(tree, runs, _State(indentation=indentation))
    return runs


def to_runs(markdown: str, indentation: int = 0) -> list[Inline]:
    """Parse and convert markdown text."""
    return convert_tree(parse_markdown(markdown), indentation)
