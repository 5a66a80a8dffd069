from __future__ import annotations

import re
from typing import Optional

from bs4 import Tag
from bs4.element import NavigableString, PageElement

from pagetext.nodes import NodeKind, node_kind, preserves_whitespace


# Number of element levels (starting element included) inspected when looking
# for an ancestor that keeps its whitespace. Tunable lookup bound.
PRESERVE_WHITESPACE_DEPTH = 6

_WHITESPACE_CHARS = " \t\n\f\r\u00a0"
_BOUNDARY_WHITESPACE = " \t\n\f\r"

_re_whitespace_run = re.compile(f"[{_WHITESPACE_CHARS}]+")
_re_invisible = re.compile("[\u200b\u00ad]")


class Accumulator:
    """Append-only text buffer owned by a single extraction call."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0
        self._last = ""

    def __len__(self) -> int:
        return self._length

    def append(self, text: str) -> None:
        if not text:
            return
        self._parts.append(text)
        self._length += len(text)
        self._last = text[-1]

    def ends_with_whitespace(self) -> bool:
        return self._last != "" and self._last in _BOUNDARY_WHITESPACE

    def truncate(self, size: int) -> None:
        if size < 0 or size >= self._length:
            return
        text = self.getvalue()[:size]
        self._parts = [text] if text else []
        self._length = len(text)
        self._last = text[-1] if text else ""

    def getvalue(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""


def normalise_whitespace(text: str) -> str:
    return _re_whitespace_run.sub(" ", _re_invisible.sub("", text))


def append_normalised_whitespace(accum: Accumulator, text: str, strip_leading: bool) -> None:
    collapsed = normalise_whitespace(text)
    if strip_leading and collapsed.startswith(" "):
        collapsed = collapsed[1:]
    accum.append(collapsed)


def preserve_whitespace(node: Optional[PageElement], *, max_depth: int = PRESERVE_WHITESPACE_DEPTH) -> bool:
    if not isinstance(node, Tag):
        return False
    el: Optional[Tag] = node
    depth = 0
    while el is not None and depth < max_depth:
        if preserves_whitespace(el):
            return True
        el = el.parent
        depth += 1
    return False


def append_text(accum: Accumulator, node: NavigableString) -> None:
    text = str(node)
    if node_kind(node) is NodeKind.CDATA or preserve_whitespace(node.parent):
        accum.append(text)
    else:
        append_normalised_whitespace(accum, text, accum.ends_with_whitespace())
