import ctypes
import ctypes.wintypes
import os

import pytest

from wintree.win32_api import GW_CHILD, GW_HWNDNEXT, Win32API


class _FakeFunc:
    def __init__(self, fn=None):
        self.argtypes = None
        self.restype = None
        self._fn = fn

    def __call__(self, *args):
        return self._fn(*args)


class _FakeUser32:
    def __init__(self):
        for name in (
            "EnumWindows",
            "GetWindow",
            "GetWindowThreadProcessId",
            "GetClassNameW",
            "GetWindowTextLengthW",
            "GetWindowTextW",
            "GetWindowRect",
            "GetClientRect",
            "IsWindow",
            "IsWindowVisible",
            "GetWindowLongPtrW",
            "GetWindowLongW",
        ):
            setattr(self, name, _FakeFunc())


def _bound_api():
    api = Win32API.__new__(Win32API)
    api.available = True
    api.user32 = _FakeUser32()
    api.WNDENUMPROC = object()
    api._bind_signatures()
    return api


def test_bind_signatures_sets_argtypes_and_restypes():
    api = _bound_api()

    assert api.user32.EnumWindows.argtypes == [api.WNDENUMPROC, ctypes.wintypes.LPARAM]
    assert api.user32.GetWindow.argtypes == [ctypes.wintypes.HWND, ctypes.wintypes.UINT]
    assert api.user32.GetWindow.restype == ctypes.wintypes.HWND
    assert api.user32.GetClassNameW.restype == ctypes.c_int
    assert api.user32.GetWindowTextLengthW.restype == ctypes.c_int
    assert api._get_window_long.argtypes == [ctypes.wintypes.HWND, ctypes.c_int]


def test_child_windows_walks_sibling_chain():
    api = _bound_api()
    links = {(1, GW_CHILD): 10, (10, GW_HWNDNEXT): 11, (11, GW_HWNDNEXT): 12, (12, GW_HWNDNEXT): None}
    api.user32.GetWindow = _FakeFunc(lambda hwnd, cmd: links.get((hwnd, cmd)))

    assert api.child_windows(1) == [10, 11, 12]
    assert api.child_windows(10) == []


def test_window_long_masks_to_32_bits(monkeypatch):
    api = _bound_api()
    api._get_window_long = _FakeFunc(lambda hwnd, index: -0x7FFFFFFF - 1)
    monkeypatch.setattr(ctypes, "set_last_error", lambda _value: 0, raising=False)
    monkeypatch.setattr(ctypes, "get_last_error", lambda: 0, raising=False)

    assert api.get_window_style(1) == 0x80000000


def test_window_long_zero_with_error_is_unknown(monkeypatch):
    api = _bound_api()
    api._get_window_long = _FakeFunc(lambda hwnd, index: 0)
    monkeypatch.setattr(ctypes, "set_last_error", lambda _value: 0, raising=False)
    monkeypatch.setattr(ctypes, "get_last_error", lambda: 1400, raising=False)

    assert api.get_window_ex_style(1) is None


@pytest.mark.parametrize(
    "method, args, expected",
    [
        ("top_level_windows", (), []),
        ("child_windows", (1,), []),
        ("get_window_thread_process_ids", (1,), (0, 0)),
        ("get_class_name", (1,), ""),
        ("get_window_text", (1,), ""),
        ("get_window_rect", (1,), None),
        ("get_client_rect", (1,), None),
        ("get_window_style", (1,), None),
        ("is_window", (1,), False),
        ("is_window_visible", (1,), False),
    ],
)
def test_unavailable_api_returns_neutral_values(method, args, expected):
    api = Win32API.__new__(Win32API)
    api.available = False
    api._callback_refs = []

    assert getattr(api, method)(*args) == expected


@pytest.mark.skipif(os.name == "nt", reason="user32 is only missing off Windows")
def test_api_unavailable_off_windows():
    assert Win32API().available is False
