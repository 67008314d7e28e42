"""Known remote names."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .address import REMOTE_SEPARATOR

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .protocol import RemoteListingAPI

logger = logging.getLogger(__name__)


def normalize_remote_name(name: str) -> str:
    """Strip whitespace and any trailing ``:`` or ``:/`` from *name*.

    Examples:
        normalize_remote_name("gdrive") -> "gdrive"
        normalize_remote_name("gdrive:") -> "gdrive"
        normalize_remote_name(" gdrive:/ ") -> "gdrive"
    """
    name = name.strip()
    if name.endswith(REMOTE_SEPARATOR):
        name = name[: -len(REMOTE_SEPARATOR)]
    return name.rstrip(":")


class RemoteRegistry:
    """Registry of configured remotes.

    Owned by the application; the suggestion engine only reads it, at
    resolution time, so a refresh between keystrokes is picked up by the
    next resolution.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._remotes: set[str] = set()
        self.replace(names)

    def add_remote(self, name: str) -> None:
        """Register *name*.  Empty names are ignored."""
        name = normalize_remote_name(name)
        if name:
            self._remotes.add(name)

    def remove_remote(self, name: str) -> None:
        """Forget *name*; unknown names are ignored."""
        self._remotes.discard(normalize_remote_name(name))

    def has_remote(self, name: str) -> bool:
        return normalize_remote_name(name) in self._remotes

    def replace(self, names: Iterable[str]) -> None:
        """Replace the whole set with *names*."""
        self._remotes = {n for n in (normalize_remote_name(x) for x in names) if n}

    def list_remotes(self) -> list[str]:
        """All remote names, sorted."""
        return sorted(self._remotes)

    @property
    def names(self) -> frozenset[str]:
        """Immutable snapshot of the remote names."""
        return frozenset(self._remotes)

    def __len__(self) -> int:
        return len(self._remotes)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_remote(name)

    async def refresh(self, api: RemoteListingAPI) -> list[str]:
        """Reload the remote names from *api* and return them sorted."""
        names = await api.list_remotes()
        self.replace(names)
        logger.debug("remote registry refreshed: %d remotes", len(self._remotes))
        return self.list_remotes()
