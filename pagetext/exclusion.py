from __future__ import annotations

from typing import Iterable, Optional

from bs4 import Tag

from pagetext.nodes import tag_name


class ExclusionTracker:
    """Single-slot record of the excluded subtree currently being walked.

    Excluded tags nested inside an active exclusion neither replace nor stack
    on the tracked root; the slot clears when that root is exited.
    """

    def __init__(self, excluded_tags: Iterable[str] = ()) -> None:
        self._excluded_tags = frozenset(t.lower() for t in excluded_tags)
        self._root: Optional[Tag] = None

    @property
    def root(self) -> Optional[Tag]:
        return self._root

    @property
    def active(self) -> bool:
        return self._root is not None

    def enter(self, tag: Tag) -> None:
        if self._root is None and tag_name(tag) in self._excluded_tags:
            self._root = tag

    def exit(self, tag: Tag) -> None:
        if tag is self._root:
            self._root = None
