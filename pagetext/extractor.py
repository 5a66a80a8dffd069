from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import PageElement

from pagetext.config import ExtractorConfig
from pagetext.exclusion import ExclusionTracker
from pagetext.nodes import NodeKind, is_block, is_line_break, is_textual
from pagetext.normalize import Accumulator, append_text
from pagetext.scope import Selector, resolve_scope, select
from pagetext.traversal import TraversalContext, traverse


log = logging.getLogger("pagetext.extract")


class TextVisitor:
    """Emits visible text, spacing block boundaries like a rendered page."""

    def on_enter(self, node: PageElement, kind: NodeKind, depth: int, context: TraversalContext) -> None:
        accum = context.accum
        if kind in (NodeKind.TEXT, NodeKind.CDATA):
            if not context.exclusion.active:
                append_text(accum, node)
        elif kind is NodeKind.ELEMENT:
            context.exclusion.enter(node)
            if len(accum) > 0 and (is_block(node) or is_line_break(node)) and not accum.ends_with_whitespace():
                accum.append(" ")

    def on_exit(self, node: PageElement, kind: NodeKind, depth: int, context: TraversalContext) -> None:
        if kind is not NodeKind.ELEMENT:
            return
        context.exclusion.exit(node)
        # <div>One</div>Two should read "One Two"
        accum = context.accum
        if is_block(node) and is_textual(node.next_sibling) and not accum.ends_with_whitespace():
            accum.append(" ")


class TextExtractor:
    """Plain-text rendering of a parsed document.

    The first include pattern that matches anything scopes the output to its
    matches; without patterns, or when none match, the whole document is
    used. Subtrees rooted at an excluded tag contribute no text.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None, *, selector: Selector = select) -> None:
        self.config = config or ExtractorConfig()
        self._selector = selector
        self._visitor = TextVisitor()

    def extract(self, root: Optional[PageElement]) -> str:
        cfg = self.config
        if cfg.no_text:
            return ""
        if not isinstance(root, Tag):
            return ""

        accum = Accumulator()
        if not cfg.include_patterns and not cfg.exclude_tags:
            self._walk(root, accum)
        else:
            regions = resolve_scope(root, cfg.include_patterns, selector=self._selector)
            for region in regions:
                self._walk(region, accum)
                accum.append("\n")

        if cfg.max_text_size > 0 and len(accum) > cfg.max_text_size:
            log.debug("Text cut from %d to %d chars", len(accum), cfg.max_text_size)
            accum.truncate(cfg.max_text_size)
        return accum.getvalue().strip()

    text = extract

    def _walk(self, region: Tag, accum: Accumulator) -> None:
        context = TraversalContext(
            accum=accum,
            max_size=self.config.max_text_size,
            exclusion=ExclusionTracker(self.config.exclude_tags),
        )
        traverse(self._visitor, region, context)


def extract_from_html(
    html: str,
    config: Optional[ExtractorConfig] = None,
    *,
    parser: str = "html.parser",
) -> str:
    soup = BeautifulSoup(html, parser)
    return TextExtractor(config).extract(soup)
