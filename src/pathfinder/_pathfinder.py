"""PathFinder — async facade wiring fields, listers, remotes and mounts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pathfinder.config import PathFinderConfig
from pathfinder.events import EventBus
from pathfinder.exceptions import PathFinderError
from pathfinder.fields.aggregator import SuggestionAggregator
from pathfinder.fields.controller import FieldController
from pathfinder.fs.local_lister import LocalLister
from pathfinder.fs.rclone import RcloneClient
from pathfinder.fs.remote_lister import RemoteLister
from pathfinder.fs.remotes import RemoteRegistry
from pathfinder.mount.plugins import needs_mount_plugin, offer_mount_plugin_download
from pathfinder.mount.process import run_command
from pathfinder.mount.unmount import Unmounter

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from pathfinder.fields.window_lock import WindowLock
    from pathfinder.fs.protocol import (
        CommandRunner,
        Dialogs,
        FolderPicker,
        RemoteListingAPI,
    )
    from pathfinder.fs.types import Field, FieldState
    from pathfinder.mount.unmount import UnmountResult

logger = logging.getLogger(__name__)


class PathFinder:
    """Source/destination path input backed by local and remote listings.

    Usage::

        async with PathFinder(picker=my_picker, dialogs=my_dialogs) as pf:
            pf.set_text(Field.SOURCE, "gdrive:/Photos")
            await pf.wait_idle()
            for entry in pf.state(Field.SOURCE).visible_suggestions:
                print(entry.name, entry.path)

    Without an explicit *api* an :class:`RcloneClient` is created for
    ``config.rc_url`` and closed on exit.
    """

    def __init__(
        self,
        config: PathFinderConfig | None = None,
        *,
        api: RemoteListingAPI | None = None,
        picker: FolderPicker | None = None,
        dialogs: Dialogs | None = None,
        runner: CommandRunner = run_command,
        window_lock: WindowLock | None = None,
        registry: RemoteRegistry | None = None,
    ) -> None:
        self.config = config or PathFinderConfig()
        self._owns_api = api is None
        self._api: RemoteListingAPI = api or RcloneClient(
            self.config.rc_url, timeout=self.config.rc_timeout
        )
        self._dialogs = dialogs
        self._runner = runner

        self.registry = registry or RemoteRegistry()
        self.event_bus = EventBus()
        self.aggregator = SuggestionAggregator(
            self.registry,
            LocalLister(),
            RemoteLister(self._api),
            self.event_bus,
        )
        self.controller = FieldController(
            self.aggregator,
            self.event_bus,
            picker=picker,
            window_lock=window_lock,
            switchable=self.config.switchable,
            source_options=self.config.source_options,
            dest_options=self.config.dest_options,
        )

    async def __aenter__(self) -> PathFinder:
        try:
            await self.refresh_remotes()
        except PathFinderError:
            logger.warning("could not load remotes", exc_info=True)
        self.controller.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Finish pending resolutions and release the rc client."""
        await self.controller.wait_idle()
        self.controller.close()
        if self._owns_api and isinstance(self._api, RcloneClient):
            await self._api.close()

    # ------------------------------------------------------------------
    # Remotes
    # ------------------------------------------------------------------

    async def refresh_remotes(self) -> list[str]:
        """Reload the known remotes from the listing API."""
        return await self.registry.refresh(self._api)

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def state(self, field: Field) -> FieldState:
        return self.controller.state(field)

    def set_text(self, field: Field, value: str) -> None:
        self.controller.set_text(field, value)

    def swap(self) -> bool:
        return self.controller.swap()

    def clear(self, field: Field) -> bool:
        return self.controller.clear(field)

    def focus(self, field: Field) -> bool:
        return self.controller.focus(field)

    async def browse(self, field: Field) -> str | None:
        return await self.controller.browse(field)

    async def wait_idle(self) -> None:
        await self.controller.wait_idle()

    # ------------------------------------------------------------------
    # Mounting
    # ------------------------------------------------------------------

    def needs_mount_plugin(self) -> bool:
        return needs_mount_plugin()

    def _require_dialogs(self) -> Dialogs:
        if self._dialogs is None:
            raise PathFinderError("No dialogs configured")
        return self._dialogs

    async def offer_mount_plugin_download(self) -> Path | None:
        """Offer the FUSE driver installer; see :func:`offer_mount_plugin_download`."""
        return await offer_mount_plugin_download(
            self._require_dialogs(),
            downloads_dir=self.config.downloads_dir,
            runner=self._runner,
        )

    async def unmount(self, mount_point: str, force: bool = False) -> UnmountResult:
        """Unmount *mount_point*, asking before forcing a busy one."""
        unmounter = Unmounter(self._require_dialogs(), self._runner)
        return await unmounter.unmount(mount_point, force)
