"""Shared fixtures and fake collaborators for pathfinder tests."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from pathfinder.events import EventBus
from pathfinder.fields.aggregator import SuggestionAggregator
from pathfinder.fields.controller import FieldController
from pathfinder.fs.local_lister import LocalLister
from pathfinder.fs.remote_lister import RemoteLister
from pathfinder.fs.remotes import RemoteRegistry
from pathfinder.fs.types import RemoteItem
from pathfinder.mount.process import CommandOutput

if TYPE_CHECKING:
    from pathfinder.fs.types import ListOptions


class FakeRemoteAPI:
    """In-memory remote listing API.

    ``tree`` maps ``(remote, path)`` to the items listed there.  Listing
    anything else raises, like rclone does for unknown remotes.
    ``gates`` lets a test hold a listing open until it sets the event.
    """

    def __init__(
        self,
        tree: dict[tuple[str, str], list[RemoteItem]] | None = None,
        remotes: list[str] | None = None,
    ) -> None:
        self.tree = tree or {}
        self.remotes = remotes if remotes is not None else sorted({r for r, _ in self.tree})
        self.calls: list[tuple[str, str, ListOptions]] = []
        self.gates: dict[tuple[str, str], asyncio.Event] = {}

    async def list_path(self, remote: str, path: str, options: ListOptions) -> list[RemoteItem]:
        self.calls.append((remote, path, options))
        gate = self.gates.get((remote, path))
        if gate is not None:
            await gate.wait()
        if (remote, path) not in self.tree:
            raise RuntimeError(f"didn't find section in config file ({remote!r})")
        return list(self.tree[(remote, path)])

    async def list_remotes(self) -> list[str]:
        return list(self.remotes)


class FakePicker:
    """Folder picker returning a canned selection, or raising."""

    def __init__(self, selection: str | list[str] | None = None, error: Exception | None = None):
        self.selection = selection
        self.error = error
        self.calls: list[dict] = []

    async def open(self, *, directory=True, multiple=False, default_path=None):
        self.calls.append(
            {"directory": directory, "multiple": multiple, "default_path": default_path}
        )
        if self.error is not None:
            raise self.error
        return self.selection


class FakeDialogs:
    """Confirmation dialog with scripted answers."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.asked: list[dict] = []

    async def ask(self, message, *, title="", kind="info", ok_label="Ok", cancel_label="Cancel"):
        self.asked.append(
            {
                "message": message,
                "title": title,
                "kind": kind,
                "ok_label": ok_label,
                "cancel_label": cancel_label,
            }
        )
        return self.answers.pop(0) if self.answers else False


class FakeRunner:
    """Command runner replaying scripted outputs and recording argv."""

    def __init__(self, *outputs: CommandOutput) -> None:
        self.outputs = list(outputs)
        self.calls: list[tuple[str, ...]] = []

    async def __call__(self, program: str, *args: str) -> CommandOutput:
        self.calls.append((program, *args))
        if not self.outputs:
            return CommandOutput(code=0)
        return self.outputs.pop(0)


def item(path: str, is_dir: bool = True) -> RemoteItem:
    """Remote item helper."""
    return RemoteItem(is_dir=is_dir, path=path, name=path.rsplit("/", 1)[-1])


@pytest.fixture
def remote_api() -> FakeRemoteAPI:
    return FakeRemoteAPI(
        {
            ("gdrive", ""): [item("Photos"), item("notes.txt", is_dir=False)],
            ("gdrive", "Photos"): [item("Photos/2023"), item("Photos/2024")],
            ("gdrive", "Photos/2023"): [item("Photos/2023/beach.jpg", is_dir=False)],
            ("s3", ""): [],
        }
    )


@pytest.fixture
def registry(remote_api: FakeRemoteAPI) -> RemoteRegistry:
    return RemoteRegistry(remote_api.remotes)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def aggregator(
    registry: RemoteRegistry, remote_api: FakeRemoteAPI, bus: EventBus
) -> SuggestionAggregator:
    return SuggestionAggregator(
        registry, LocalLister(separator="/"), RemoteLister(remote_api), bus
    )


@pytest.fixture
def picker() -> FakePicker:
    return FakePicker()


@pytest.fixture
def controller(
    aggregator: SuggestionAggregator, bus: EventBus, picker: FakePicker
) -> FieldController:
    return FieldController(aggregator, bus, picker=picker)


@pytest.fixture
def tree(tmp_path):
    """A small local directory tree.

    ::

        tmp_path/
            alpha/
                inner.txt
            Beta/
            foo.txt
            zeta.md
    """
    (tmp_path / "alpha").mkdir()
    (tmp_path / "alpha" / "inner.txt").write_text("x")
    (tmp_path / "Beta").mkdir()
    (tmp_path / "foo.txt").write_text("foo")
    (tmp_path / "zeta.md").write_text("z")
    return tmp_path
