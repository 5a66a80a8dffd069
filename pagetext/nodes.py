from __future__ import annotations

import enum
from typing import Optional, Sequence

from bs4 import CData, NavigableString, Tag
from bs4.element import (
    Comment,
    Declaration,
    Doctype,
    PageElement,
    ProcessingInstruction,
    Script,
    Stylesheet,
)


# Tags rendered with a line break before and after them.
BLOCK_TAGS = frozenset(
    {
        "html",
        "head",
        "body",
        "frameset",
        "script",
        "noscript",
        "style",
        "meta",
        "link",
        "title",
        "frame",
        "noframes",
        "section",
        "nav",
        "aside",
        "hgroup",
        "header",
        "footer",
        "p",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "ul",
        "ol",
        "pre",
        "div",
        "blockquote",
        "hr",
        "address",
        "figure",
        "figcaption",
        "form",
        "fieldset",
        "ins",
        "del",
        "dl",
        "dt",
        "dd",
        "li",
        "table",
        "caption",
        "thead",
        "tfoot",
        "tbody",
        "colgroup",
        "col",
        "tr",
        "th",
        "td",
        "video",
        "audio",
        "canvas",
        "details",
        "menu",
        "plaintext",
        "template",
        "article",
        "main",
        "svg",
        "math",
        "center",
        "dir",
        "applet",
        "marquee",
        "listing",
    }
)

PRESERVE_WHITESPACE_TAGS = frozenset({"pre", "plaintext", "title", "textarea"})

LINE_BREAK_TAG = "br"

# Raw data containers; their strings are never part of the visible text.
_OTHER_STRING_TYPES = (Comment, Declaration, Doctype, ProcessingInstruction, Script, Stylesheet)


class NodeKind(enum.Enum):
    ELEMENT = "element"
    TEXT = "text"
    CDATA = "cdata"
    OTHER = "other"


def node_kind(node: PageElement) -> NodeKind:
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, CData):
        return NodeKind.CDATA
    if isinstance(node, _OTHER_STRING_TYPES):
        return NodeKind.OTHER
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    return NodeKind.OTHER


def is_textual(node: Optional[PageElement]) -> bool:
    return node is not None and node_kind(node) in (NodeKind.TEXT, NodeKind.CDATA)


def tag_name(tag: Tag) -> str:
    return (tag.name or "").lower()


def is_block(tag: Tag) -> bool:
    return tag_name(tag) in BLOCK_TAGS


def is_line_break(tag: Tag) -> bool:
    return tag_name(tag) == LINE_BREAK_TAG


def preserves_whitespace(tag: Tag) -> bool:
    return tag_name(tag) in PRESERVE_WHITESPACE_TAGS


def children(node: PageElement) -> Sequence[PageElement]:
    if isinstance(node, Tag):
        return node.contents
    return ()


def child_count(node: Optional[PageElement]) -> int:
    if node is None:
        return 0
    return len(children(node))
