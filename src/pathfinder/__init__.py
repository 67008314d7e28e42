"""pathfinder: local and remote path suggestions for rclone front ends.

Classify addresses, list local directories and rclone remotes, keep two
path fields' suggestions race-free, and manage mount prerequisites.
"""

__version__ = "0.1.0"

from pathfinder._pathfinder import PathFinder
from pathfinder.config import PathFinderConfig
from pathfinder.events import EventBus, EventType, FieldEvent
from pathfinder.exceptions import (
    DownloadError,
    InvalidAddressError,
    ListingError,
    PathFinderError,
    PickerError,
    RemoteAPIError,
    UnmountBusyError,
    UnmountFailedError,
)
from pathfinder.fields import FieldController, SuggestionAggregator, WindowLock
from pathfinder.fs import (
    Address,
    AddressKind,
    Entry,
    Field,
    FieldOptions,
    FieldState,
    LocalLister,
    RcloneClient,
    RemoteLister,
    RemoteRegistry,
    classify,
)
from pathfinder.mount import (
    UnmountResult,
    Unmounter,
    UnmountState,
    needs_mount_plugin,
    offer_mount_plugin_download,
    unmount,
)

__all__ = [
    "Address",
    "AddressKind",
    "DownloadError",
    "Entry",
    "EventBus",
    "EventType",
    "Field",
    "FieldController",
    "FieldEvent",
    "FieldOptions",
    "FieldState",
    "InvalidAddressError",
    "ListingError",
    "LocalLister",
    "PathFinder",
    "PathFinderConfig",
    "PathFinderError",
    "PickerError",
    "RcloneClient",
    "RemoteAPIError",
    "RemoteLister",
    "RemoteRegistry",
    "SuggestionAggregator",
    "UnmountBusyError",
    "UnmountFailedError",
    "UnmountResult",
    "UnmountState",
    "Unmounter",
    "WindowLock",
    "__version__",
    "classify",
    "needs_mount_plugin",
    "offer_mount_plugin_download",
    "unmount",
]
