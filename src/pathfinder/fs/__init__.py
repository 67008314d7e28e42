"""Address classification, local and remote listing, and the remote registry."""

from pathfinder.fs.address import (
    Address,
    AddressKind,
    classify,
    is_remote_path,
    join_remote,
    remote_root,
)
from pathfinder.fs.local_lister import LocalLister, scan_dir
from pathfinder.fs.protocol import CommandRunner, Dialogs, FolderPicker, RemoteListingAPI
from pathfinder.fs.rclone import RcloneClient
from pathfinder.fs.remote_lister import RemoteLister
from pathfinder.fs.remotes import RemoteRegistry
from pathfinder.fs.types import (
    DirEntryInfo,
    Entry,
    Field,
    FieldOptions,
    FieldState,
    ListOptions,
    ListResult,
    RemoteItem,
)
from pathfinder.fs.utils import current_platform, path_separator

__all__ = [
    "Address",
    "AddressKind",
    "CommandRunner",
    "Dialogs",
    "DirEntryInfo",
    "Entry",
    "Field",
    "FieldOptions",
    "FieldState",
    "FolderPicker",
    "ListOptions",
    "ListResult",
    "LocalLister",
    "RcloneClient",
    "RemoteItem",
    "RemoteLister",
    "RemoteListingAPI",
    "RemoteRegistry",
    "classify",
    "current_platform",
    "is_remote_path",
    "join_remote",
    "path_separator",
    "remote_root",
    "scan_dir",
]
