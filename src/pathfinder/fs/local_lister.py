"""LocalLister — native directory listing with truncate-and-retry recovery."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING

from .types import DirEntryInfo, Entry, ListResult
from .utils import join_child, parent_path, path_separator

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def scan_dir(path: str) -> list[DirEntryInfo]:
    """Read the entries of directory *path*.

    Raises ``OSError`` when *path* does not exist or is not a directory, and
    ``ValueError`` when it contains a NUL character.
    """
    entries: list[DirEntryInfo] = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                is_symlink = entry.is_symlink()
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            entries.append(
                DirEntryInfo(name=entry.name, is_directory=is_dir, is_symlink=is_symlink)
            )
    return entries


class LocalLister:
    """Lists local directories for suggestions.

    A listing that fails (the path names a file, a partially typed
    component, or nothing at all) is retried once with the parent
    directory.  When the retry fails too, an unsuccessful
    :class:`ListResult` is returned; listing errors never escape.
    """

    def __init__(
        self,
        separator: str | None = None,
        read_dir: Callable[[str], list[DirEntryInfo]] | None = None,
    ) -> None:
        self.separator = separator or path_separator()
        self._read_dir = read_dir or scan_dir

    async def _read(self, path: str) -> list[DirEntryInfo]:
        return await asyncio.to_thread(self._read_dir, path)

    async def list(self, path: str) -> ListResult:
        """List the children of *path*, falling back to its parent once."""
        cleaned = path
        try:
            raw = await self._read(cleaned)
        except (OSError, ValueError) as first:
            logger.debug("local listing of %r failed (%s), retrying parent", path, first)
            cleaned = parent_path(path, self.separator)
            try:
                raw = await self._read(cleaned)
            except (OSError, ValueError) as e:
                logger.warning("local listing of %r failed after retry", path, exc_info=True)
                return ListResult(
                    success=False,
                    message=f"Cannot list directory: {e}",
                    path=cleaned,
                )

        entries = [
            Entry(
                is_directory=item.is_directory,
                name=item.name,
                path=join_child(cleaned, item.name, self.separator),
            )
            for item in raw
            if not item.is_symlink
        ]
        entries.sort(key=lambda x: (not x.is_directory, x.name.lower()))

        return ListResult(
            success=True,
            message=f"Found {len(entries)} entries",
            entries=entries,
            path=cleaned,
        )
