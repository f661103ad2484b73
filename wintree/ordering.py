from __future__ import annotations

from typing import Iterable, List

from .services import ProcInfo
from .tree_builder import WindowNode


def sort_processes(processes: Iterable[ProcInfo]) -> List[ProcInfo]:
    return sorted(processes, key=lambda proc: proc.pid)


def sort_roots(roots: Iterable[WindowNode]) -> List[WindowNode]:
    """Native enumeration order follows z-order, so roots are re-sorted by (pid, hwnd)."""
    return sorted(roots, key=lambda node: (node.pid, node.hwnd))


__all__ = ["sort_processes", "sort_roots"]
