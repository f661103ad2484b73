from __future__ import annotations

import ctypes
import ctypes.wintypes
import os
import struct
from typing import Callable, List, Optional, Tuple

Rect = Tuple[int, int, int, int]

GW_HWNDNEXT = 2
GW_CHILD = 5
GWL_STYLE = -16
GWL_EXSTYLE = -20

_IS_64BIT = struct.calcsize("P") == 8


class Win32API:
    """Read-only view of the user32 window hierarchy."""

    def __init__(self) -> None:
        self.available = os.name == "nt"
        self._callback_refs = []
        if not self.available:
            return

        self.user32 = ctypes.WinDLL("user32", use_last_error=True)
        self.WNDENUMPROC = ctypes.WINFUNCTYPE(
            ctypes.c_bool,
            ctypes.wintypes.HWND,
            ctypes.wintypes.LPARAM,
        )
        self._bind_signatures()

    def _bind_signatures(self) -> None:
        hwnd_t = ctypes.wintypes.HWND
        lparam_t = ctypes.wintypes.LPARAM
        bool_t = ctypes.wintypes.BOOL
        uint_t = ctypes.wintypes.UINT
        dword_t = ctypes.wintypes.DWORD
        rect_ptr_t = ctypes.POINTER(ctypes.wintypes.RECT)
        dword_ptr_t = ctypes.POINTER(ctypes.wintypes.DWORD)

        self.user32.EnumWindows.argtypes = [self.WNDENUMPROC, lparam_t]
        self.user32.EnumWindows.restype = bool_t

        self.user32.GetWindow.argtypes = [hwnd_t, uint_t]
        self.user32.GetWindow.restype = hwnd_t

        self.user32.GetWindowThreadProcessId.argtypes = [hwnd_t, dword_ptr_t]
        self.user32.GetWindowThreadProcessId.restype = dword_t

        self.user32.GetClassNameW.argtypes = [hwnd_t, ctypes.wintypes.LPWSTR, ctypes.c_int]
        self.user32.GetClassNameW.restype = ctypes.c_int

        self.user32.GetWindowTextLengthW.argtypes = [hwnd_t]
        self.user32.GetWindowTextLengthW.restype = ctypes.c_int

        self.user32.GetWindowTextW.argtypes = [hwnd_t, ctypes.wintypes.LPWSTR, ctypes.c_int]
        self.user32.GetWindowTextW.restype = ctypes.c_int

        self.user32.GetWindowRect.argtypes = [hwnd_t, rect_ptr_t]
        self.user32.GetWindowRect.restype = bool_t

        self.user32.GetClientRect.argtypes = [hwnd_t, rect_ptr_t]
        self.user32.GetClientRect.restype = bool_t

        self.user32.IsWindow.argtypes = [hwnd_t]
        self.user32.IsWindow.restype = bool_t

        self.user32.IsWindowVisible.argtypes = [hwnd_t]
        self.user32.IsWindowVisible.restype = bool_t

        # GetWindowLongPtrW is a macro for GetWindowLongW in 32-bit user32
        if _IS_64BIT:
            self._get_window_long = self.user32.GetWindowLongPtrW
            self._get_window_long.restype = ctypes.c_longlong
        else:
            self._get_window_long = self.user32.GetWindowLongW
            self._get_window_long.restype = ctypes.c_long
        self._get_window_long.argtypes = [hwnd_t, ctypes.c_int]

    def enum_windows(self, callback: Callable[[int], bool]) -> bool:
        if not self.available:
            return False

        def _cb(hwnd, _lparam):
            try:
                return bool(callback(int(hwnd or 0)))
            except Exception:
                return True

        c_cb = self.WNDENUMPROC(_cb)
        self._callback_refs.append(c_cb)
        try:
            return bool(self.user32.EnumWindows(c_cb, 0))
        finally:
            self._callback_refs.remove(c_cb)

    def top_level_windows(self) -> List[int]:
        handles: List[int] = []
        self.enum_windows(lambda hwnd: handles.append(hwnd) or True)
        return handles

    def child_windows(self, parent_hwnd: int) -> List[int]:
        """Direct children only; EnumChildWindows would also yield grandchildren."""
        if not self.available:
            return []
        children: List[int] = []
        child = int(self.user32.GetWindow(parent_hwnd, GW_CHILD) or 0)
        while child:
            children.append(child)
            child = int(self.user32.GetWindow(child, GW_HWNDNEXT) or 0)
        return children

    def get_window_thread_process_ids(self, hwnd: int) -> Tuple[int, int]:
        if not self.available:
            return 0, 0
        pid = ctypes.wintypes.DWORD(0)
        tid = self.user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
        return int(pid.value), int(tid)

    def get_class_name(self, hwnd: int) -> str:
        if not self.available:
            return ""
        buf = ctypes.create_unicode_buffer(256)
        if self.user32.GetClassNameW(hwnd, buf, 256) <= 0:
            return ""
        return buf.value

    def get_window_text(self, hwnd: int) -> str:
        if not self.available:
            return ""
        length = int(self.user32.GetWindowTextLengthW(hwnd) or 0)
        size = max(length + 1, 256)
        buf = ctypes.create_unicode_buffer(size)
        self.user32.GetWindowTextW(hwnd, buf, size)
        return buf.value

    def get_window_rect(self, hwnd: int) -> Optional[Rect]:
        if not self.available:
            return None
        rect = ctypes.wintypes.RECT()
        ok = self.user32.GetWindowRect(hwnd, ctypes.byref(rect))
        if not ok:
            return None
        return (int(rect.left), int(rect.top), int(rect.right), int(rect.bottom))

    def get_client_rect(self, hwnd: int) -> Optional[Rect]:
        if not self.available:
            return None
        rect = ctypes.wintypes.RECT()
        ok = self.user32.GetClientRect(hwnd, ctypes.byref(rect))
        if not ok:
            return None
        return (int(rect.left), int(rect.top), int(rect.right), int(rect.bottom))

    def _window_long(self, hwnd: int, index: int) -> Optional[int]:
        if not self.available:
            return None
        ctypes.set_last_error(0)
        value = int(self._get_window_long(hwnd, index))
        # zero is a legal style value; only a zero with an error code is a failure
        if value == 0 and ctypes.get_last_error() != 0:
            return None
        return value & 0xFFFFFFFF

    def get_window_style(self, hwnd: int) -> Optional[int]:
        return self._window_long(hwnd, GWL_STYLE)

    def get_window_ex_style(self, hwnd: int) -> Optional[int]:
        return self._window_long(hwnd, GWL_EXSTYLE)

    def is_window(self, hwnd: int) -> bool:
        if not self.available:
            return False
        return bool(self.user32.IsWindow(hwnd))

    def is_window_visible(self, hwnd: int) -> bool:
        if not self.available:
            return False
        return bool(self.user32.IsWindowVisible(hwnd))


__all__ = [
    "Win32API",
    "Rect",
    "GW_CHILD",
    "GW_HWNDNEXT",
    "GWL_STYLE",
    "GWL_EXSTYLE",
]
