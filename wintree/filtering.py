from __future__ import annotations

from typing import Optional

from .config import InspectorOptions
from .tree_builder import WindowNode


class WindowFilter:
    def __init__(self, options: InspectorOptions) -> None:
        self.options = options
        self._class_contains_lc = (options.class_contains or "").casefold()
        self._title_contains_lc = (options.title_contains or "").casefold()

    @property
    def active(self) -> bool:
        return self.options.filter_active

    def matches(self, node: WindowNode) -> bool:
        """True iff the node satisfies every configured filter."""
        opts = self.options

        if opts.visible_only and not node.visible:
            return False

        if opts.size_filter_active:
            # unknown size fails; the node can still survive through its children
            if not node.rect_known:
                return False
            width = node.measured_width
            height = node.measured_height
            if opts.min_rect is not None and (width < opts.min_rect.width or height < opts.min_rect.height):
                return False
            if opts.max_rect is not None and (width > opts.max_rect.width or height > opts.max_rect.height):
                return False

        if self._class_contains_lc and self._class_contains_lc not in (node.class_name or "").casefold():
            return False
        if self._title_contains_lc and self._title_contains_lc not in (node.title or "").casefold():
            return False
        if opts.class_regex is not None and not opts.class_regex.search(node.class_name or ""):
            return False
        if opts.title_regex is not None and not opts.title_regex.search(node.title or ""):
            return False
        return True

    def filter_prune(self, node: Optional[WindowNode]) -> Optional[WindowNode]:
        if node is None:
            return None

        kept = []
        for child in node.children:
            pruned = self.filter_prune(child)
            if pruned is not None:
                kept.append(pruned)
        node.children = kept

        node.match = self.matches(node)
        if not self.active:
            return node
        return node if node.match or node.children else None


__all__ = ["WindowFilter"]
