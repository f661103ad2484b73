from __future__ import annotations

from importlib import import_module
from typing import Dict, Tuple

_MODULE_EXPORTS = {
    "app": "wintree.app",
}

_ATTR_EXPORTS: Dict[str, Tuple[str, str]] = {
    "main": ("wintree.app", "main"),
    "VERSION": ("wintree.config", "VERSION"),
    "APPDATA_DIR": ("wintree.config", "APPDATA_DIR"),
    "SETTINGS_FILE": ("wintree.config", "SETTINGS_FILE"),
    "LOG_FILE": ("wintree.config", "LOG_FILE"),
    "SizeWH": ("wintree.config", "SizeWH"),
    "InspectorOptions": ("wintree.config", "InspectorOptions"),
    "InspectorSettings": ("wintree.config", "InspectorSettings"),
    "consume_load_warnings": ("wintree.config", "consume_load_warnings"),
    "WinTreeError": ("wintree.errors", "WinTreeError"),
    "ConfigError": ("wintree.errors", "ConfigError"),
    "ProcessNotFoundError": ("wintree.errors", "ProcessNotFoundError"),
    "WindowNode": ("wintree.tree_builder", "WindowNode"),
    "RectInfo": ("wintree.tree_builder", "RectInfo"),
    "ClientInfo": ("wintree.tree_builder", "ClientInfo"),
    "TreeBuilder": ("wintree.tree_builder", "TreeBuilder"),
    "WindowFilter": ("wintree.filtering", "WindowFilter"),
    "sort_processes": ("wintree.ordering", "sort_processes"),
    "sort_roots": ("wintree.ordering", "sort_roots"),
    "WindowTreeInspector": ("wintree.inspector", "WindowTreeInspector"),
    "TreeSnapshot": ("wintree.inspector", "TreeSnapshot"),
    "TextTreeRenderer": ("wintree.render_text", "TextTreeRenderer"),
    "build_document": ("wintree.render_json", "build_document"),
    "ProcInfo": ("wintree.services", "ProcInfo"),
    "ProcessInspector": ("wintree.services", "ProcessInspector"),
    "Win32API": ("wintree.win32_api", "Win32API"),
    "setup_logging": ("wintree.logging_setup", "setup_logging"),
}

__all__ = ["app", *_ATTR_EXPORTS.keys()]


def __getattr__(name: str):
    module_name = _MODULE_EXPORTS.get(name)
    if module_name is not None:
        module = import_module(module_name)
        globals()[name] = module
        return module

    target = _ATTR_EXPORTS.get(name)
    if target is not None:
        source_module_name, source_attr_name = target
        source_module = import_module(source_module_name)
        value = getattr(source_module, source_attr_name)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(__all__))
