"""Listing and field types: Entry, ListResult, FieldState, etc."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_PLACEHOLDER = "Enter a remote:/path or local path"


class Field(Enum):
    """The two independent path inputs."""

    SOURCE = "source"
    DEST = "dest"


@dataclass(frozen=True, slots=True)
class Entry:
    """A single directory or file suggestion.

    Attributes:
        is_directory: True when the entry can be descended into.
        name: Display name.  For remote listings this is the path
            returned by the listing API.
        path: Fully qualified address; feeding it back into resolution
            lists the entry's children when it is a directory.
    """

    is_directory: bool
    name: str
    path: str


@dataclass
class ListResult:
    """Result of a list operation."""

    success: bool
    message: str
    entries: list[Entry] = field(default_factory=list)
    path: str = ""


@dataclass(frozen=True, slots=True)
class DirEntryInfo:
    """Raw local directory entry, before normalization."""

    name: str
    is_directory: bool
    is_symlink: bool = False


@dataclass(frozen=True, slots=True)
class RemoteItem:
    """One item returned by the remote listing API."""

    is_dir: bool
    path: str
    name: str = ""
    size: int = -1
    mime_type: str | None = None


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Detail flags passed to the remote listing API."""

    no_mod_time: bool = True
    no_mime_type: bool = True


@dataclass(frozen=True)
class FieldOptions:
    """Presentation and behaviour flags for one field."""

    label: str = ""
    placeholder: str = DEFAULT_PLACEHOLDER
    folder_picker: bool = True
    remote_suggestions: bool = True
    clearable: bool = True

    @classmethod
    def for_field(cls, which: Field) -> FieldOptions:
        """Default options for *which*."""
        label = "Source" if which is Field.SOURCE else "Destination"
        return cls(label=label)


@dataclass
class FieldState:
    """Read model for one field.

    ``raw_text`` is written only by the controller; ``suggestions``,
    ``is_loading`` and ``last_error`` only by the aggregator.
    """

    field: Field
    options: FieldOptions
    raw_text: str = ""
    suggestions: tuple[Entry, ...] = ()
    is_loading: bool = False
    last_error: str | None = None

    @property
    def visible_suggestions(self) -> tuple[Entry, ...]:
        """Suggestions to render, empty when suggestions are disabled."""
        if not self.options.remote_suggestions:
            return ()
        return self.suggestions
