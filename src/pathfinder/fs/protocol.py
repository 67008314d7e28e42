"""Collaborator protocols.

External collaborators, injected at construction time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathfinder.mount.process import CommandOutput

    from .types import ListOptions, RemoteItem


@runtime_checkable
class RemoteListingAPI(Protocol):
    """Remote listing backend (rclone's rc API in production)."""

    async def list_path(
        self, remote: str, path: str, options: ListOptions
    ) -> list[RemoteItem]:
        """List *path* inside *remote*.

        Fails with a backend-defined error for unknown remotes or
        unreachable backends.
        """
        ...

    async def list_remotes(self) -> list[str]:
        """Names of all configured remotes."""
        ...


@runtime_checkable
class FolderPicker(Protocol):
    """Native folder picker dialog."""

    async def open(
        self,
        *,
        directory: bool = True,
        multiple: bool = False,
        default_path: str | None = None,
    ) -> str | list[str] | None:
        """Return the selected path(s), or ``None`` when cancelled."""
        ...


@runtime_checkable
class Dialogs(Protocol):
    """Yes/no confirmation dialog."""

    async def ask(
        self,
        message: str,
        *,
        title: str = "",
        kind: str = "info",
        ok_label: str = "Ok",
        cancel_label: str = "Cancel",
    ) -> bool: ...


@runtime_checkable
class CommandRunner(Protocol):
    """Runs an OS command and collects its exit code and output."""

    async def __call__(self, program: str, *args: str) -> CommandOutput: ...
