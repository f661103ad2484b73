from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import psutil

from .errors import ProcessNotFoundError

logger = logging.getLogger("WindowTreeInspector.ProcessInspector")

UNKNOWN_PROCESS_NAME = "<unknown>"


@dataclass(frozen=True)
class ProcInfo:
    name: str
    pid: int


class ProcessInspector:
    @staticmethod
    def _strip_exe(image_name: str) -> str:
        name = (image_name or "").strip()
        if name.lower().endswith(".exe"):
            name = name[:-4]
        return name

    @staticmethod
    def _display_name(image_name: str) -> str:
        name = (image_name or "").strip()
        return name if name.lower().endswith(".exe") else f"{name}.exe"

    @staticmethod
    def find_by_pid(pid: int) -> ProcInfo:
        try:
            name = psutil.Process(pid).name()
        except (psutil.NoSuchProcess, ValueError):
            raise ProcessNotFoundError(f"Could not find process with PID {pid}.") from None
        except psutil.AccessDenied:
            # the process exists; its image name is just not readable
            name = UNKNOWN_PROCESS_NAME
        return ProcInfo(name=ProcessInspector._display_name(name), pid=pid)

    @staticmethod
    def find_by_name(image_name: str) -> List[ProcInfo]:
        wanted = ProcessInspector._strip_exe(image_name)
        wanted_lc = wanted.lower()
        found: Dict[int, ProcInfo] = {}
        if wanted_lc:
            for proc in psutil.process_iter(["pid", "name"]):
                try:
                    proc_info = proc.info or {}
                    proc_name = proc_info.get("name") or ""
                    if ProcessInspector._strip_exe(proc_name).lower() != wanted_lc:
                        continue
                    pid = int(proc_info["pid"])
                except Exception as exc:
                    logger.debug("skip process entry (%s)", exc.__class__.__name__)
                    continue
                found[pid] = ProcInfo(name=ProcessInspector._display_name(proc_name), pid=pid)
        if not found:
            raise ProcessNotFoundError(f"Could not find process '{wanted}'.")
        return [found[pid] for pid in sorted(found)]

    @staticmethod
    def resolve_targets(pid: Optional[int] = None, name: Optional[str] = None) -> List[ProcInfo]:
        if pid is not None:
            return [ProcessInspector.find_by_pid(pid)]
        return ProcessInspector.find_by_name(name or "")


__all__ = ["ProcInfo", "ProcessInspector", "UNKNOWN_PROCESS_NAME"]
