"""Address classification: empty, local path, or ``remote:/sub/path``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pathfinder.exceptions import InvalidAddressError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

REMOTE_SEPARATOR = ":/"


class AddressKind(Enum):
    EMPTY = "empty"
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class Address:
    """A classified address.

    Attributes:
        kind: Which source the address refers to.
        path: The text that was classified, unchanged.
        remote: Remote name (REMOTE only).
        sub_path: Path inside the remote, without a trailing ``/`` (REMOTE only).
    """

    kind: AddressKind
    path: str
    remote: str | None = None
    sub_path: str | None = None


def is_remote_path(path: str) -> bool:
    """True when *path* uses the ``remote:/`` syntax."""
    return REMOTE_SEPARATOR in path


def remote_root(remote: str) -> str:
    """Address of the top of *remote*, e.g. ``"gdrive:/"``."""
    return f"{remote}{REMOTE_SEPARATOR}"


def join_remote(remote: str, sub_path: str) -> str:
    """Build ``remote:/sub_path``."""
    return f"{remote}{REMOTE_SEPARATOR}{sub_path}"


def classify(path: str, known_remotes: Iterable[str] | None = None) -> Address:
    """Classify *path* as EMPTY, LOCAL or REMOTE.

    Classification is purely syntactic: *known_remotes* is accepted so
    callers can pass the registry they hold, but an unregistered remote
    still classifies as REMOTE and fails later when it is listed.

    Examples:
        classify("gdrive:/Photos/2023") -> REMOTE("gdrive", "Photos/2023")
        classify("") -> EMPTY
        classify("/usr/local") -> LOCAL

    Raises:
        InvalidAddressError: the text before ``:/`` is empty.
    """
    if not path:
        return Address(kind=AddressKind.EMPTY, path=path)

    if not is_remote_path(path):
        return Address(kind=AddressKind.LOCAL, path=path)

    remote, _, sub_path = path.partition(REMOTE_SEPARATOR)
    if not remote:
        raise InvalidAddressError(f"Invalid remote path format: {path!r}")

    if sub_path.endswith("/"):
        sub_path = sub_path[:-1]

    logger.debug("classified %r as remote %r sub-path %r", path, remote, sub_path)
    return Address(kind=AddressKind.REMOTE, path=path, remote=remote, sub_path=sub_path)
