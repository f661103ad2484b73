from __future__ import annotations

import json
import os
import re
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, List, Optional, Pattern

from .errors import ConfigError

VERSION = "1.0.0"
APPDATA_DIRNAME = "WindowTreeInspector"

_LOAD_WARNINGS: List[str] = []
_LOAD_WARNINGS_LOCK = threading.Lock()

_RECT_WH_RE = re.compile(r"^\s*(\d+)\s*[xX,]\s*(\d+)\s*$")


def _push_load_warning(message: str) -> None:
    with _LOAD_WARNINGS_LOCK:
        _LOAD_WARNINGS.append(message)


def consume_load_warnings() -> List[str]:
    with _LOAD_WARNINGS_LOCK:
        out = list(_LOAD_WARNINGS)
        _LOAD_WARNINGS.clear()
        return out


def get_app_data_dir() -> str:
    appdata = os.environ.get("APPDATA")
    if not appdata:
        appdata = str(Path.home() / "AppData" / "Roaming")
    return str(Path(appdata) / APPDATA_DIRNAME)


APPDATA_DIR = get_app_data_dir()
SETTINGS_FILE = os.path.join(APPDATA_DIR, "settings.json")
LOG_FILE = os.path.join(APPDATA_DIR, "wintree.log")


def _coerce_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_str(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value.strip() else default


def _load_json_object(path: str, label: str) -> dict[str, Any] | None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return None
    except Exception as exc:
        _push_load_warning(f"{label}: JSON parse failed ({exc.__class__.__name__}), using defaults")
        return None
    if not isinstance(raw, dict):
        _push_load_warning(f"{label}: top-level value is not an object, using defaults")
        return None
    return raw


@dataclass(frozen=True)
class SizeWH:
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def parse_pid(value: str) -> Optional[int]:
    """Parse a decimal or ``0x`` hexadecimal pid; ``None`` when it is not one."""
    text = (value or "").strip()
    if not text:
        return None
    try:
        if text.lower().startswith("0x"):
            pid = int(text[2:], 16)
        elif text.isdigit():
            pid = int(text)
        else:
            return None
    except ValueError:
        return None
    if pid < 0 or pid > 0xFFFFFFFF:
        return None
    return pid


def parse_non_neg_int(value: str, option_name: str) -> int:
    try:
        out = int((value or "").strip())
    except ValueError:
        raise ConfigError(f"Invalid {option_name} value: {value}") from None
    if out < 0:
        raise ConfigError(f"Invalid {option_name} value: {value}")
    return out


def parse_rect_wh(value: str, option_name: str) -> SizeWH:
    if not value or not value.strip():
        raise ConfigError(f"Invalid {option_name} value: (empty)")
    match = _RECT_WH_RE.match(value)
    if not match:
        raise ConfigError(f"Invalid {option_name} value: {value} (e.g., 800x600)")
    return SizeWH(int(match.group(1)), int(match.group(2)))


def compile_filter_regex(value: str, option_name: str) -> Pattern[str]:
    try:
        return re.compile(value, re.IGNORECASE)
    except re.error as exc:
        raise ConfigError(f"Invalid {option_name} value: {value} ({exc})") from None


@dataclass
class InspectorOptions:
    target_pid: Optional[int] = None
    target_name: Optional[str] = None
    ascii_tree: bool = False
    max_depth: Optional[int] = None
    child_pid_only: bool = False
    visible_only: bool = False
    min_rect: Optional[SizeWH] = None
    max_rect: Optional[SizeWH] = None
    show_style: bool = False
    show_rect: bool = False
    class_contains: Optional[str] = None
    title_contains: Optional[str] = None
    class_regex: Optional[Pattern[str]] = None
    title_regex: Optional[Pattern[str]] = None
    json_output: bool = False
    json_file: Optional[str] = None

    @property
    def size_filter_active(self) -> bool:
        return self.min_rect is not None or self.max_rect is not None

    @property
    def needs_rect(self) -> bool:
        return self.show_rect or self.size_filter_active

    @property
    def filter_active(self) -> bool:
        return (
            self.visible_only
            or self.size_filter_active
            or bool(self.class_contains)
            or bool(self.title_contains)
            or self.class_regex is not None
            or self.title_regex is not None
        )


@dataclass
class InspectorSettings:
    log_level: str = "WARNING"
    log_to_file: bool = False
    ascii_tree: bool = False

    @classmethod
    def load(cls, path: str = SETTINGS_FILE) -> "InspectorSettings":
        defaults = cls()
        raw = _load_json_object(path, "settings.json")
        if raw is None:
            return defaults
        return cls(
            log_level=_coerce_str(raw.get("log_level"), defaults.log_level).upper(),
            log_to_file=_coerce_bool(raw.get("log_to_file"), defaults.log_to_file),
            ascii_tree=_coerce_bool(raw.get("ascii_tree"), defaults.ascii_tree),
        )

    def save(self, path: str = SETTINGS_FILE) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2, ensure_ascii=False)


__all__ = [
    "VERSION",
    "APPDATA_DIRNAME",
    "APPDATA_DIR",
    "SETTINGS_FILE",
    "LOG_FILE",
    "SizeWH",
    "InspectorOptions",
    "InspectorSettings",
    "parse_pid",
    "parse_non_neg_int",
    "parse_rect_wh",
    "compile_filter_regex",
    "get_app_data_dir",
    "consume_load_warnings",
]
