from __future__ import annotations


class WinTreeError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(WinTreeError, ValueError):
    pass


class ProcessNotFoundError(WinTreeError, LookupError):
    pass


__all__ = ["WinTreeError", "ConfigError", "ProcessNotFoundError"]
