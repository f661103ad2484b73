from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Set, TypeVar

from .config import InspectorOptions

T = TypeVar("T")


@dataclass
class RectInfo:
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


@dataclass
class ClientInfo:
    width: int
    height: int


@dataclass
class WindowNode:
    hwnd: int
    pid: int
    tid: int
    visible: bool
    class_name: str
    title: str
    style: Optional[int] = None
    ex_style: Optional[int] = None
    rect: Optional[RectInfo] = None
    client: Optional[ClientInfo] = None
    match: bool = False
    children: List["WindowNode"] = field(default_factory=list)

    # raw window size for the size filters, kept even when rect is not displayed
    measured_width: Optional[int] = field(default=None, repr=False)
    measured_height: Optional[int] = field(default=None, repr=False)

    @property
    def hwnd_hex(self) -> str:
        return f"0x{self.hwnd:X}"

    @property
    def rect_known(self) -> bool:
        return self.measured_width is not None and self.measured_height is not None


class TreeBuilder:
    """Builds one top-level window subtree from a window provider.

    The provider is duck-typed (see ``Win32API``). Attribute queries that
    fail degrade to placeholders; they never abort the walk.
    """

    def __init__(self, api: Any, options: InspectorOptions, logger: logging.Logger) -> None:
        self.api = api
        self.options = options
        self.logger = logger

    def build_root(self, hwnd: int, target_pids: Set[int]) -> Optional[WindowNode]:
        return self.build(hwnd, 0, set(), target_pids)

    def build(self, hwnd: int, depth: int, visited: Set[int], target_pids: Set[int]) -> Optional[WindowNode]:
        if not hwnd or not self._query(hwnd, "is_window", self.api.is_window, False):
            return None

        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            return None

        if hwnd in visited:
            self.logger.debug("hwnd 0x%X reached twice, not expanding again", hwnd)
            return self.make_node(hwnd)
        visited.add(hwnd)

        node = self.make_node(hwnd)
        if max_depth is not None and depth == max_depth:
            return node

        for child in self._query(hwnd, "child_windows", self.api.child_windows, []):
            if self.options.child_pid_only:
                child_pid, _tid = self._query(child, "pid", self.api.get_window_thread_process_ids, (0, 0))
                if child_pid not in target_pids:
                    continue
            child_node = self.build(child, depth + 1, visited, target_pids)
            if child_node is not None:
                node.children.append(child_node)
        return node

    def make_node(self, hwnd: int) -> WindowNode:
        opts = self.options
        pid, tid = self._query(hwnd, "pid", self.api.get_window_thread_process_ids, (0, 0))
        node = WindowNode(
            hwnd=hwnd,
            pid=pid,
            tid=tid,
            visible=bool(self._query(hwnd, "visible", self.api.is_window_visible, False)),
            class_name=self._query(hwnd, "class", self.api.get_class_name, "") or "",
            title=self._query(hwnd, "title", self.api.get_window_text, "") or "",
        )

        if opts.needs_rect:
            rect = self._query(hwnd, "rect", self.api.get_window_rect, None)
            if rect is not None:
                info = RectInfo(*rect)
                node.measured_width = info.width
                node.measured_height = info.height
                if opts.show_rect:
                    node.rect = info

        if opts.show_rect:
            client = self._query(hwnd, "client", self.api.get_client_rect, None)
            if client is not None:
                left, top, right, bottom = client
                node.client = ClientInfo(width=right - left, height=bottom - top)

        if opts.show_style:
            node.style = self._query(hwnd, "style", self.api.get_window_style, None)
            node.ex_style = self._query(hwnd, "exstyle", self.api.get_window_ex_style, None)

        return node

    def _query(self, hwnd: int, what: str, fn: Callable[[int], T], fallback: T) -> T:
        try:
            return fn(hwnd)
        except Exception as exc:
            self.logger.debug("query %s failed for hwnd 0x%X (%s: %s)", what, hwnd, exc.__class__.__name__, exc)
            return fallback


__all__ = ["WindowNode", "RectInfo", "ClientInfo", "TreeBuilder"]
