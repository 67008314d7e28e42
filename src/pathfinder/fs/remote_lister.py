"""RemoteLister — maps remote listing API items onto Entry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pathfinder.exceptions import InvalidAddressError, ListingError

from .address import join_remote
from .types import Entry, ListOptions, ListResult

if TYPE_CHECKING:
    from .protocol import RemoteListingAPI

logger = logging.getLogger(__name__)

# Suggestion lists never show modification times or MIME types.
SUGGESTION_LIST_OPTIONS = ListOptions(no_mod_time=True, no_mime_type=True)


class RemoteLister:
    """Adapter between a :class:`RemoteListingAPI` and suggestion entries.

    This is the only place that knows the API's item shape.  Each
    item's ``path`` is relative to the remote root, so the entry address
    is ``remote:/<item.path>`` and re-enters resolution unchanged.
    """

    def __init__(self, api: RemoteListingAPI) -> None:
        self.api = api

    async def list(self, remote: str, sub_path: str = "") -> ListResult:
        """List *sub_path* inside *remote*.

        Raises:
            InvalidAddressError: *remote* is empty.
            ListingError: the API call failed.
        """
        if not remote:
            raise InvalidAddressError("Invalid remote path format: empty remote name")

        try:
            items = await self.api.list_path(remote, sub_path, SUGGESTION_LIST_OPTIONS)
        except ListingError:
            raise
        except Exception as e:
            raise ListingError(f"Cannot list {join_remote(remote, sub_path)}: {e}") from e

        entries = [
            Entry(
                is_directory=item.is_dir,
                name=item.path,
                path=join_remote(remote, item.path),
            )
            for item in items
        ]
        logger.debug("listed %d items from %s", len(entries), join_remote(remote, sub_path))

        return ListResult(
            success=True,
            message=f"Found {len(entries)} entries",
            entries=entries,
            path=join_remote(remote, sub_path),
        )
