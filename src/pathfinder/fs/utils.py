"""Platform and native path helpers."""

from __future__ import annotations

import sys


def current_platform() -> str:
    """Short platform name: ``"macos"``, ``"windows"``, ``"linux"`` or ``sys.platform``."""
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def path_separator(platform: str | None = None) -> str:
    """Native path separator for *platform* (defaults to the running one)."""
    platform = platform or current_platform()
    return "\\" if platform == "windows" else "/"


def parent_path(path: str, separator: str) -> str:
    """Drop the last *separator*-delimited component of *path*.

    The parent of a top-level absolute path is the root, never ``""``.

    Examples:
        parent_path("/tmp/foo.txt", "/") -> "/tmp"
        parent_path("/tmp", "/") -> "/"
        parent_path("C:\\Users\\me", "\\") -> "C:\\Users"
        parent_path("foo", "/") -> ""
    """
    head, sep, _ = path.rpartition(separator)
    if not sep:
        return ""
    if not head:
        return separator
    return head


def join_child(parent: str, name: str, separator: str) -> str:
    """Append *name* to *parent*, adding *separator* only when missing.

    Examples:
        join_child("/tmp", "a", "/") -> "/tmp/a"
        join_child("/tmp/", "a", "/") -> "/tmp/a"
    """
    if parent.endswith(separator):
        return f"{parent}{name}"
    return f"{parent}{separator}{name}"
