"""FUSE driver prerequisites and unmounting."""

from pathfinder.mount.plugins import (
    MOUNT_PLUGINS,
    MountPlugin,
    default_downloads_dir,
    download_file,
    needs_mount_plugin,
    offer_mount_plugin_download,
    reveal_in_file_browser,
)
from pathfinder.mount.process import CommandOutput, run_command
from pathfinder.mount.unmount import (
    UnmountResult,
    Unmounter,
    UnmountState,
    unmount,
    unmount_command,
)

__all__ = [
    "MOUNT_PLUGINS",
    "CommandOutput",
    "MountPlugin",
    "UnmountResult",
    "UnmountState",
    "Unmounter",
    "default_downloads_dir",
    "download_file",
    "needs_mount_plugin",
    "offer_mount_plugin_download",
    "reveal_in_file_browser",
    "run_command",
    "unmount",
    "unmount_command",
]
