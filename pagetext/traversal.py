from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple, runtime_checkable

from bs4.element import PageElement

from pagetext.exclusion import ExclusionTracker
from pagetext.nodes import NodeKind, child_count, children, node_kind
from pagetext.normalize import Accumulator


log = logging.getLogger("pagetext.traversal")


@dataclass
class TraversalContext:
    accum: Accumulator = field(default_factory=Accumulator)
    max_size: int = -1
    exclusion: ExclusionTracker = field(default_factory=ExclusionTracker)

    def size_exceeded(self) -> bool:
        return self.max_size > 0 and len(self.accum) >= self.max_size


@runtime_checkable
class NodeVisitor(Protocol):
    def on_enter(self, node: PageElement, kind: NodeKind, depth: int, context: TraversalContext) -> None:
        ...

    def on_exit(self, node: PageElement, kind: NodeKind, depth: int, context: TraversalContext) -> None:
        ...


def traverse(visitor: NodeVisitor, root: PageElement, context: TraversalContext) -> None:
    """Depth-first walk of ``root`` and its descendants in document order.

    ``on_enter`` may detach or replace the node it is given. A replaced node
    is followed by walking its replacement's children; a removed node is
    skipped without an ``on_exit`` call and the walk resumes at its former
    next sibling (or closes out its parent). The walk stops as soon as the
    context's size limit is reached.
    """
    if visitor is None:
        raise ValueError("null visitor in traverse")
    if root is None:
        raise ValueError("null root node in traverse")

    node: Optional[PageElement] = root
    depth = 0

    while node is not None:
        if context.size_exceeded():
            log.debug("Traversal stopped at %d chars (limit %d)", len(context.accum), context.max_size)
            return

        # The root is never resynchronized: mutations only concern visited nodes inside it.
        parent = node.parent if node is not root else None
        orig_size = child_count(parent)
        next_sibling = node.next_sibling

        visitor.on_enter(node, node_kind(node), depth, context)

        if parent is not None and node.parent is not parent:
            # a detached node never reaches on_exit, so it cannot stay the exclusion root
            context.exclusion.exit(node)
            if child_count(parent) == orig_size:
                # replaced in place: same slot, new occupant
                node = next_sibling.previous_sibling if next_sibling is not None else parent.contents[-1]
            elif next_sibling is not None:
                node = next_sibling
                continue
            else:
                # removed last child: the parent has nothing left to walk
                node, depth = _ascend(visitor, root, parent, depth - 1, context)
                continue

        kids = children(node)
        if kids:
            node = kids[0]
            depth += 1
        else:
            node, depth = _ascend(visitor, root, node, depth, context)


def _ascend(
    visitor: NodeVisitor,
    root: PageElement,
    node: PageElement,
    depth: int,
    context: TraversalContext,
) -> Tuple[Optional[PageElement], int]:
    while node.next_sibling is None and depth > 0:
        visitor.on_exit(node, node_kind(node), depth, context)
        node = node.parent
        depth -= 1
    visitor.on_exit(node, node_kind(node), depth, context)
    if node is root:
        return None, depth
    return node.next_sibling, depth
