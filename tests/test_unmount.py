"""Tests for the unmount state machine."""

from __future__ import annotations

import pytest
from conftest import FakeDialogs, FakeRunner

from pathfinder.exceptions import UnmountBusyError, UnmountFailedError
from pathfinder.mount.process import CommandOutput
from pathfinder.mount.unmount import (
    FORCE_PROMPT,
    Unmounter,
    UnmountState,
    unmount,
    unmount_command,
)

OK = CommandOutput(code=0)
BUSY = CommandOutput(code=1, stderr="umount: /mnt/x: target is busy.")
MAC_BUSY = CommandOutput(code=1, stderr="umount(/Volumes/x): Resource busy -- try 'diskutil unmount'")
NOT_MOUNTED = CommandOutput(code=1, stderr="umount: /mnt/x: not currently mounted")
DENIED = CommandOutput(code=32, stderr="umount: /mnt/x: must be superuser to unmount.")


class TestCommand:
    def test_plain(self):
        assert unmount_command("/mnt/x") == ["umount", "/mnt/x"]

    def test_forced(self):
        assert unmount_command("/mnt/x", force=True) == ["umount", "-f", "/mnt/x"]


class TestUnmount:
    async def test_success(self):
        runner = FakeRunner(OK)
        unmounter = Unmounter(FakeDialogs(), runner, platform="linux")
        result = await unmounter.unmount("/mnt/x")
        assert result.state is UnmountState.DONE
        assert result.forced is False
        assert runner.calls == [("umount", "/mnt/x")]
        assert unmounter.history == [
            UnmountState.IDLE,
            UnmountState.UNMOUNTING,
            UnmountState.DONE,
        ]

    async def test_busy_confirm_forces(self):
        dialogs = FakeDialogs(True)
        runner = FakeRunner(BUSY, OK)
        unmounter = Unmounter(dialogs, runner, platform="linux")
        result = await unmounter.unmount("/mnt/x")
        assert result.state is UnmountState.DONE
        assert result.forced is True
        assert runner.calls == [("umount", "/mnt/x"), ("umount", "-f", "/mnt/x")]
        assert dialogs.asked[0]["message"] == FORCE_PROMPT
        assert dialogs.asked[0]["ok_label"] == "Force Unmount"
        assert unmounter.history == [
            UnmountState.IDLE,
            UnmountState.UNMOUNTING,
            UnmountState.BUSY_PROMPT_PENDING,
            UnmountState.UNMOUNTING,
            UnmountState.DONE,
        ]

    async def test_busy_case_insensitive(self):
        runner = FakeRunner(MAC_BUSY, OK)
        result = await unmount("/Volumes/x", dialogs=FakeDialogs(True), runner=runner, platform="macos")
        assert result.forced is True

    async def test_busy_declined(self):
        runner = FakeRunner(BUSY, OK)
        unmounter = Unmounter(FakeDialogs(False), runner, platform="linux")
        with pytest.raises(UnmountBusyError, match="target is busy"):
            await unmounter.unmount("/mnt/x")
        assert len(runner.calls) == 1
        assert unmounter.state is UnmountState.FAILED

    async def test_still_busy_after_force(self):
        dialogs = FakeDialogs(True, True)
        runner = FakeRunner(BUSY, BUSY, OK)
        with pytest.raises(UnmountBusyError):
            await unmount("/mnt/x", dialogs=dialogs, runner=runner, platform="linux")
        assert len(runner.calls) == 2
        assert len(dialogs.asked) == 1

    async def test_forced_busy_never_prompts(self):
        dialogs = FakeDialogs(True)
        runner = FakeRunner(BUSY)
        with pytest.raises(UnmountBusyError):
            await unmount("/mnt/x", True, dialogs=dialogs, runner=runner, platform="linux")
        assert dialogs.asked == []
        assert runner.calls == [("umount", "-f", "/mnt/x")]

    @pytest.mark.parametrize("force", [False, True])
    async def test_not_mounted_is_success(self, force):
        runner = FakeRunner(NOT_MOUNTED)
        result = await unmount("/mnt/x", force, dialogs=FakeDialogs(), runner=runner, platform="linux")
        assert result.state is UnmountState.DONE
        assert "not currently mounted" in result.message

    async def test_other_failure(self):
        runner = FakeRunner(DENIED)
        unmounter = Unmounter(FakeDialogs(), runner, platform="linux")
        with pytest.raises(UnmountFailedError, match="must be superuser"):
            await unmounter.unmount("/mnt/x")
        assert unmounter.history[-1] is UnmountState.FAILED

    async def test_missing_umount(self):
        async def runner(program, *args):
            raise FileNotFoundError(program)

        with pytest.raises(UnmountFailedError, match="Could not run umount"):
            await unmount("/mnt/x", dialogs=FakeDialogs(), runner=runner, platform="linux")

    async def test_windows_unsupported(self):
        runner = FakeRunner()
        with pytest.raises(UnmountFailedError):
            await unmount("X:", dialogs=FakeDialogs(), runner=runner, platform="windows")
        assert runner.calls == []

    async def test_history_reset_between_calls(self):
        unmounter = Unmounter(FakeDialogs(), FakeRunner(OK, OK), platform="linux")
        await unmounter.unmount("/mnt/a")
        await unmounter.unmount("/mnt/b")
        assert unmounter.history == [
            UnmountState.IDLE,
            UnmountState.UNMOUNTING,
            UnmountState.DONE,
        ]
