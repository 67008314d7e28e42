"""Settings for the PathFinder facade."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pathfinder.fs.rclone import DEFAULT_RC_TIMEOUT, DEFAULT_RC_URL

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pathfinder.fs.types import FieldOptions

ENV_RC_URL = "PATHFINDER_RC_URL"
ENV_RC_TIMEOUT = "PATHFINDER_RC_TIMEOUT"
ENV_DOWNLOADS_DIR = "PATHFINDER_DOWNLOADS_DIR"


@dataclass(frozen=True)
class PathFinderConfig:
    """Configuration for a :class:`~pathfinder.PathFinder` session."""

    rc_url: str = DEFAULT_RC_URL
    """Base URL of the rclone rc server."""

    rc_timeout: float = DEFAULT_RC_TIMEOUT
    """Per-request timeout for rc calls, in seconds."""

    downloads_dir: Path | None = None
    """Where driver installers are saved.  ``None`` uses the user's downloads folder."""

    switchable: bool = True
    """Whether source and destination can be swapped."""

    source_options: FieldOptions | None = None
    dest_options: FieldOptions | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PathFinderConfig:
        """Build a config from ``PATHFINDER_*`` environment variables.

        Raises ``ValueError`` if ``PATHFINDER_RC_TIMEOUT`` is not a number.
        """
        env = os.environ if environ is None else environ
        downloads = env.get(ENV_DOWNLOADS_DIR)
        return cls(
            rc_url=env.get(ENV_RC_URL) or DEFAULT_RC_URL,
            rc_timeout=float(env.get(ENV_RC_TIMEOUT) or DEFAULT_RC_TIMEOUT),
            downloads_dir=Path(downloads).expanduser() if downloads else None,
        )
