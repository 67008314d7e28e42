"""RcloneClient — remote listing API over rclone's rc HTTP interface."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from pathfinder.exceptions import RemoteAPIError

from .types import ListOptions, RemoteItem

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_RC_URL = "http://localhost:5572"
DEFAULT_RC_TIMEOUT = 10.0


def item_from_rc(data: dict[str, Any]) -> RemoteItem:
    """Build a :class:`RemoteItem` from one ``operations/list`` entry."""
    size = data.get("Size")
    return RemoteItem(
        is_dir=bool(data.get("IsDir", False)),
        path=str(data.get("Path") or ""),
        name=str(data.get("Name") or ""),
        size=int(size) if size is not None else -1,
        mime_type=data.get("MimeType"),
    )


class RcloneClient:
    """Async client for the rclone remote-control API.

    Implements the :class:`~pathfinder.fs.protocol.RemoteListingAPI`
    protocol.  Pass an existing ``httpx.AsyncClient`` to share a
    connection pool (or a mock transport in tests); otherwise one is
    created and closed with this client.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_RC_URL,
        *,
        timeout: float = DEFAULT_RC_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> RcloneClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def call(self, command: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST *params* to the rc endpoint *command* and return the JSON reply.

        Raises:
            RemoteAPIError: transport failure or a non-2xx reply.  The
                message is rclone's ``error`` field when present.
        """
        url = f"{self.base_url}/{command.lstrip('/')}"
        try:
            response = await self._client.post(url, json=params or {})
        except httpx.HTTPError as e:
            raise RemoteAPIError(f"rc request {command} failed: {e}") from e

        if response.is_error:
            try:
                detail = response.json().get("error") or response.text
            except ValueError:
                detail = response.text
            logger.debug("rc %s returned %s: %s", command, response.status_code, detail)
            raise RemoteAPIError(str(detail), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteAPIError(f"rc {command} returned invalid JSON") from e

    async def list_path(
        self, remote: str, path: str, options: ListOptions | None = None
    ) -> list[RemoteItem]:
        """List *path* inside *remote* via ``operations/list``."""
        options = options or ListOptions()
        data = await self.call(
            "operations/list",
            {
                "fs": f"{remote}:",
                "remote": path,
                "opt": {
                    "noModTime": options.no_mod_time,
                    "noMimeType": options.no_mime_type,
                },
            },
        )
        return [item_from_rc(item) for item in data.get("list") or []]

    async def list_remotes(self) -> list[str]:
        """Configured remote names via ``config/listremotes``."""
        data = await self.call("config/listremotes")
        return [str(name) for name in data.get("remotes") or []]
