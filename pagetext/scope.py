from __future__ import annotations

import logging
from typing import Callable, Iterable, List

import soupsieve as sv
from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError


log = logging.getLogger("pagetext.scope")

Selector = Callable[[Tag, str], List[Tag]]

__all__ = ["SelectorSyntaxError", "Selector", "resolve_scope", "select"]


def select(root: Tag, pattern: str) -> List[Tag]:
    """Elements matching ``pattern`` in document order, ``root`` included."""
    matches = list(sv.select(pattern, root))
    if not isinstance(root, BeautifulSoup) and sv.match(pattern, root):
        matches.insert(0, root)
    return matches


def resolve_scope(root: Tag, patterns: Iterable[str], *, selector: Selector = select) -> List[Tag]:
    for pattern in patterns:
        matches = selector(root, pattern)
        if matches:
            log.debug("Pattern %r matched %d region(s)", pattern, len(matches))
            return list(matches)
        log.debug("Pattern %r matched nothing", pattern)

    log.debug("No include pattern matched, using the whole document")
    return [root]
