"""Unmount with busy-retry escalation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pathfinder.exceptions import UnmountBusyError, UnmountFailedError
from pathfinder.fs.utils import current_platform

from .process import run_command

if TYPE_CHECKING:
    from pathfinder.fs.protocol import CommandRunner, Dialogs

logger = logging.getLogger(__name__)

BUSY_MARKER = "busy"
NOT_MOUNTED_MARKER = "not currently mounted"
FORCE_PROMPT = "This resource is busy, do you wish to force unmount?"


class UnmountState(Enum):
    IDLE = "idle"
    UNMOUNTING = "unmounting"
    BUSY_PROMPT_PENDING = "busy_prompt_pending"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class UnmountResult:
    """Outcome of a successful unmount."""

    mount_point: str
    state: UnmountState
    forced: bool = False
    message: str = ""


def unmount_command(mount_point: str, force: bool = False) -> list[str]:
    """Argument vector for the ``umount`` utility."""
    args = ["umount"]
    if force:
        args.append("-f")
    args.append(mount_point)
    return args


class Unmounter:
    """Unmount state machine.

    ``IDLE -> UNMOUNTING -> DONE | BUSY_PROMPT_PENDING | FAILED``

    A busy mount point prompts the user once; on confirmation the
    command is re-run with ``-f``.  A forced attempt that still reports
    busy fails without asking again, so the command runs at most twice.
    "not currently mounted" counts as success.

    ``history`` lists every state visited by the last :meth:`unmount`.
    """

    def __init__(
        self,
        dialogs: Dialogs,
        runner: CommandRunner = run_command,
        platform: str | None = None,
    ) -> None:
        self._dialogs = dialogs
        self._runner = runner
        self._platform = platform or current_platform()
        self.state = UnmountState.IDLE
        self.history: list[UnmountState] = [UnmountState.IDLE]

    def _enter(self, state: UnmountState) -> None:
        self.state = state
        self.history.append(state)

    async def unmount(self, mount_point: str, force: bool = False) -> UnmountResult:
        """Unmount *mount_point*.

        Raises:
            UnmountBusyError: still busy after a forced attempt, or the
                user declined to force.
            UnmountFailedError: any other failure.
        """
        self.state = UnmountState.IDLE
        self.history = [UnmountState.IDLE]

        if self._platform == "windows":
            self._enter(UnmountState.FAILED)
            raise UnmountFailedError("Unmounting is not supported on Windows")

        forced = force
        while True:
            self._enter(UnmountState.UNMOUNTING)
            logger.debug("unmount %s (force=%s)", mount_point, forced)
            try:
                output = await self._runner(*unmount_command(mount_point, forced))
            except OSError as e:
                self._enter(UnmountState.FAILED)
                raise UnmountFailedError(f"Could not run umount: {e}") from e

            if output.code == 0:
                self._enter(UnmountState.DONE)
                return UnmountResult(mount_point, UnmountState.DONE, forced=forced)

            stderr = output.stderr.lower()

            if BUSY_MARKER in stderr:
                if forced:
                    self._enter(UnmountState.FAILED)
                    raise UnmountBusyError(output.stderr.strip())

                self._enter(UnmountState.BUSY_PROMPT_PENDING)
                confirmed = await self._dialogs.ask(
                    FORCE_PROMPT,
                    title="Could not unmount",
                    kind="warning",
                    ok_label="Force Unmount",
                    cancel_label="Cancel",
                )
                if not confirmed:
                    self._enter(UnmountState.FAILED)
                    raise UnmountBusyError(output.stderr.strip())
                forced = True
                continue

            if NOT_MOUNTED_MARKER in stderr:
                logger.info("%s is not currently mounted", mount_point)
                self._enter(UnmountState.DONE)
                return UnmountResult(
                    mount_point,
                    UnmountState.DONE,
                    forced=forced,
                    message=output.stderr.strip(),
                )

            logger.error("failed to unmount %s: %s", mount_point, output.stderr.strip())
            self._enter(UnmountState.FAILED)
            raise UnmountFailedError(output.stderr.strip())


async def unmount(
    mount_point: str,
    force: bool = False,
    *,
    dialogs: Dialogs,
    runner: CommandRunner = run_command,
    platform: str | None = None,
) -> UnmountResult:
    """Unmount *mount_point* with a one-off :class:`Unmounter`."""
    return await Unmounter(dialogs, runner, platform).unmount(mount_point, force)
