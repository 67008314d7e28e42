"""Mount driver detection and guided installer download.

Mounting remotes needs a filesystem-in-userspace driver: fuse-t (or
macFUSE) on macOS, WinFsp on Windows.  Other platforms are assumed to
either provide FUSE natively or not support mounting at all.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import platformdirs

from pathfinder.exceptions import DownloadError
from pathfinder.fs.utils import current_platform

from .process import run_command

if TYPE_CHECKING:
    from collections.abc import Callable

    from pathfinder.fs.protocol import CommandRunner, Dialogs

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 120.0


@dataclass(frozen=True)
class MountPlugin:
    """A platform's FUSE driver and where to get it."""

    name: str
    check_paths: tuple[str, ...]
    """Install locations; the driver is present if any of them exists."""

    installer_url: str
    installer_filename: str

    @property
    def title(self) -> str:
        return f"{self.name} not installed"

    def message(self, platform_label: str) -> str:
        return (
            f"{self.name} is required on {platform_label} to mount remotes. "
            "You can continue the operation once you're done with the installation."
        )


MOUNT_PLUGINS: dict[str, MountPlugin] = {
    "macos": MountPlugin(
        name="Fuse-t",
        check_paths=(
            "/Library/Application Support/fuse-t",
            "/Library/Filesystems/macfuse.fs",
        ),
        installer_url=(
            "https://github.com/macos-fuse-t/fuse-t/releases/download/1.0.49/"
            "fuse-t-macos-installer-1.0.49.pkg"
        ),
        installer_filename="fuse-t-installer.pkg",
    ),
    "windows": MountPlugin(
        name="WinFsp",
        check_paths=(
            "C:\\Program Files\\WinFsp",
            "C:\\Program Files (x86)\\WinFsp",
        ),
        installer_url="https://github.com/winfsp/winfsp/releases/download/v2.0/winfsp-2.0.23075.msi",
        installer_filename="winfsp-installer.msi",
    ),
}

_PLATFORM_LABELS = {"macos": "macOS", "windows": "Windows"}


def needs_mount_plugin(
    platform: str | None = None,
    exists: Callable[[str], bool] = os.path.exists,
) -> bool:
    """True when *platform* needs a FUSE driver that is not installed."""
    platform = platform or current_platform()
    plugin = MOUNT_PLUGINS.get(platform)
    if plugin is None:
        return False

    found = {path: exists(path) for path in plugin.check_paths}
    logger.debug("needs_mount_plugin(%s): %s", platform, found)
    return not any(found.values())


def default_downloads_dir() -> Path:
    """The user's downloads directory."""
    return Path(platformdirs.user_downloads_dir())


async def reveal_in_file_browser(
    path: Path,
    runner: CommandRunner = run_command,
    platform: str | None = None,
) -> None:
    """Show *path* in the OS file browser.  Failures are logged, not raised."""
    platform = platform or current_platform()
    if platform == "macos":
        command = ("open", "-R", str(path))
    elif platform == "windows":
        command = ("explorer", f"/select,{path}")
    else:
        command = ("xdg-open", str(path.parent))

    try:
        output = await runner(*command)
    except OSError:
        logger.warning("could not reveal %s", path, exc_info=True)
        return
    # explorer.exe exits non-zero even when it succeeds
    if output.code != 0 and platform != "windows":
        logger.warning("could not reveal %s: %s", path, output.stderr.strip())


async def download_file(url: str, dest: Path, http: httpx.AsyncClient | None = None) -> Path:
    """Stream *url* into *dest*.

    Raises:
        DownloadError: the request failed or *dest* could not be written.
            A partially written file is left in place.
    """
    client = http or httpx.AsyncClient(follow_redirects=True, timeout=DOWNLOAD_TIMEOUT)
    try:
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            with dest.open("wb") as fh:
                async for chunk in response.aiter_bytes():
                    fh.write(chunk)
    except httpx.HTTPError as e:
        raise DownloadError(f"Download of {url} failed: {e}") from e
    except OSError as e:
        raise DownloadError(f"Cannot write {dest}: {e}") from e
    finally:
        if http is None:
            await client.aclose()

    logger.info("downloaded %s to %s", url, dest)
    return dest


async def offer_mount_plugin_download(
    dialogs: Dialogs,
    *,
    platform: str | None = None,
    http: httpx.AsyncClient | None = None,
    downloads_dir: Path | None = None,
    runner: CommandRunner = run_command,
) -> Path | None:
    """Ask the user to download the platform's FUSE driver installer.

    On acceptance the installer is saved to *downloads_dir* and revealed
    in the file browser.  Returns the installer path, or None when the
    platform needs no driver or the user declined.

    Raises:
        DownloadError: the download failed.  Not retried.
    """
    platform = platform or current_platform()
    plugin = MOUNT_PLUGINS.get(platform)
    if plugin is None:
        return None

    wants_download = await dialogs.ask(
        plugin.message(_PLATFORM_LABELS.get(platform, platform)),
        title=plugin.title,
        kind="warning",
        ok_label="Download",
        cancel_label="Cancel",
    )
    if not wants_download:
        logger.debug("%s download declined", plugin.name)
        return None

    dest = (downloads_dir or default_downloads_dir()) / plugin.installer_filename
    await download_file(plugin.installer_url, dest, http)
    await reveal_in_file_browser(dest, runner, platform)
    return dest
