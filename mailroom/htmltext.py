"""Plain-text rendering of HTML email bodies."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Iterator, Union

_VOID = frozenset(
    {"br", "img", "hr", "meta", "link", "input", "area", "base", "col",
     "embed", "param", "source", "track", "wbr"}
)
_SKIP = frozenset({"script", "style", "head", "title", "noscript", "template"})
_BLOCK = frozenset(
    {"p", "div", "section", "article", "header", "footer", "nav", "aside",
     "main", "form", "address", "center", "dl", "dt", "dd", "figure",
     "figcaption", "fieldset", "h3", "h4", "h5", "h6", "hr"}
)
_ROW_GROUPS = frozenset({"thead", "tbody", "tfoot"})

# Characters that survive whitespace cleanup and are turned back at the end.
_SP = "\ue000"
_NL = "\ue001"
_TAB = "\ue002"
_PROTECT = str.maketrans({" ": _SP, "\n": _NL, "\t": _TAB})
_RESTORE = str.maketrans({_SP: " ", _NL: "\n", _TAB: "\t"})

_WHITESPACE = re.compile(r"\s+")
_MANY_NEWLINES = re.compile(r"\n{3,}")
_MANY_SPACES = re.compile(r" {2,}")


@dataclass
class _Node:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Union["_Node", str]] = field(default_factory=list)


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = _Node("#root")
        self._stack = [self.root]

    def handle_starttag(self, tag, attrs):
        node = _Node(tag, {k: v or "" for k, v in attrs})
        self._stack[-1].children.append(node)
        if tag not in _VOID:
            self._stack.append(node)

    def handle_startendtag(self, tag, attrs):
        self._stack[-1].children.append(_Node(tag, {k: v or "" for k, v in attrs}))

    def handle_endtag(self, tag):
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag:
                del self._stack[depth:]
                return

    def handle_data(self, data):
        self._stack[-1].children.append(data)


def _inner(node: _Node, pre: bool) -> str:
    return "".join(_render(child, pre) for child in node.children)


def _rows(node: _Node) -> Iterator[_Node]:
    for child in node.children:
        if isinstance(child, _Node):
            if child.tag == "tr":
                yield child
            elif child.tag in _ROW_GROUPS:
                yield from _rows(child)


def _table(node: _Node) -> str:
    rows: list[list[str]] = []
    header: list[str] | None = None
    for index, tr in enumerate(_rows(node)):
        cells = [c for c in tr.children if isinstance(c, _Node) and c.tag in ("td", "th")]
        texts = [
            " ".join(_inner(c, False).translate(_RESTORE).split()) for c in cells
        ]
        if index == 0 and cells and all(c.tag == "th" for c in cells):
            header = [t.upper() for t in texts]
        else:
            rows.append(texts)
    all_rows = ([header] if header is not None else []) + rows
    if not all_rows:
        return ""
    columns = max(len(r) for r in all_rows)
    all_rows = [r + [""] * (columns - len(r)) for r in all_rows]
    widths = [max(len(r[i]) for r in all_rows) for i in range(columns)]

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(row: list[str]) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(row, widths)) + " |"

    out = [border]
    body = all_rows
    if header is not None:
        out += [line(all_rows[0]), border]
        body = all_rows[1:]
    out += [line(r) for r in body]
    if body:
        out.append(border)
    return "\n\n" + "\n".join(out).translate(_PROTECT) + "\n\n"


def _render(node: Union[_Node, str], pre: bool = False) -> str:
    if isinstance(node, str):
        if pre:
            return node.translate(_PROTECT)
        return _WHITESPACE.sub(" ", node)

    tag = node.tag
    if tag in _SKIP:
        return ""
    if tag == "br":
        return _NL if pre else "\n"
    if tag == "img":
        return node.attrs.get("alt", "")
    if tag == "pre":
        return "\n\n" + _inner(node, True) + "\n\n"
    if tag == "table":
        return _table(node)
    if tag in ("h1", "h2"):
        content = _inner(node, pre).strip()
        width = max((len(l) for l in content.split("\n")), default=0)
        rule = ("*" if tag == "h1" else "-") * width
        return f"\n\n{rule}\n{content}\n{rule}\n\n"
    if tag in ("ul", "ol"):
        return "\n\n" + _inner(node, pre) + "\n\n"
    if tag == "li":
        return "\n* " + _inner(node, pre).strip() + "\n"
    if tag == "a":
        text = _inner(node, pre).strip()
        href = node.attrs.get("href", "")
        if href.startswith("mailto:"):
            href = href[len("mailto:"):]
        if not href or href == text:
            return text
        if not text:
            return href
        return f"{text} ( {href} )"
    if tag == "blockquote":
        content = _MANY_NEWLINES.sub(
            "\n\n", "\n".join(l.strip(" ") for l in _inner(node, pre).split("\n"))
        ).strip()
        quoted = "\n".join("> " + l for l in content.split("\n"))
        return "\n\n" + quoted + "\n\n"
    if tag in _BLOCK:
        return "\n\n" + _inner(node, pre) + "\n\n"
    return _inner(node, pre)


def generate_text(html: str) -> str:
    """Render an HTML document as readable plain text."""
    builder = _TreeBuilder()
    builder.feed(html)
    builder.close()
    text = _render(builder.root)
    text = "\n".join(line.strip(" ") for line in text.split("\n"))
    text = _MANY_NEWLINES.sub("\n\n", text)
    text = _MANY_SPACES.sub(" ", text)
    return text.strip().translate(_RESTORE)