from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Sequence

from .config import InspectorOptions
from .filtering import WindowFilter
from .ordering import sort_processes, sort_roots
from .services import ProcInfo
from .tree_builder import TreeBuilder, WindowNode
from .win32_api import Win32API


@dataclass
class TreeSnapshot:
    generated_at: str
    processes: List[ProcInfo] = field(default_factory=list)
    roots: List[WindowNode] = field(default_factory=list)
    matched_top_count: int = 0


class WindowTreeInspector:
    def __init__(
        self,
        logger: logging.Logger,
        options: InspectorOptions,
        api: Optional[Any] = None,
    ) -> None:
        self.logger = logger.getChild("WindowTreeInspector")
        self.options = options
        self.api = api or Win32API()
        self._builder = TreeBuilder(self.api, options, self.logger.getChild("TreeBuilder"))
        self._filter = WindowFilter(options)

    def snapshot(self, processes: Sequence[ProcInfo]) -> TreeSnapshot:
        target_pids = {proc.pid for proc in processes}
        snap = TreeSnapshot(
            generated_at=datetime.now().astimezone().isoformat(),
            processes=sort_processes(processes),
        )

        roots: List[WindowNode] = []
        for hwnd in self.api.top_level_windows():
            try:
                pid, _tid = self.api.get_window_thread_process_ids(hwnd)
            except Exception as exc:
                self.logger.debug("top-level hwnd 0x%X skipped (%s)", hwnd, exc.__class__.__name__)
                continue
            if pid not in target_pids:
                continue

            snap.matched_top_count += 1
            root = self._filter.filter_prune(self._builder.build_root(hwnd, target_pids))
            if root is not None:
                roots.append(root)

        snap.roots = sort_roots(roots)
        self.logger.info(
            "snapshot: %d process(es), %d top-level window(s), %d kept",
            len(snap.processes),
            snap.matched_top_count,
            len(snap.roots),
        )
        return snap


__all__ = ["WindowTreeInspector", "TreeSnapshot"]
