"""Custom exception hierarchy for pathfinder."""


class PathFinderError(Exception):
    """Base exception for all pathfinder errors."""


class InvalidAddressError(PathFinderError):
    """Raised when a ``remote:/path`` address has an empty remote name."""


class ListingError(PathFinderError):
    """Raised when a local or remote listing fails after recovery attempts."""


class RemoteAPIError(ListingError):
    """Raised when the remote listing API rejects a request or is unreachable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PickerError(PathFinderError):
    """Raised when the native folder picker could not be invoked."""


class UnmountBusyError(PathFinderError):
    """Raised when a mount point stays busy or the user declines a forced unmount."""


class UnmountFailedError(PathFinderError):
    """Raised on any other unmount failure."""


class DownloadError(PathFinderError):
    """Raised when an installer download or write fails."""
