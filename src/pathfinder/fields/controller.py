"""FieldController — swap, clear, browse and text edits over two fields."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pathfinder.events import EventType, FieldEvent
from pathfinder.exceptions import PickerError
from pathfinder.fs.address import is_remote_path
from pathfinder.fs.types import Field

from .window_lock import WindowLock

if TYPE_CHECKING:
    from pathfinder.events import EventBus
    from pathfinder.fs.protocol import FolderPicker
    from pathfinder.fs.types import FieldOptions, FieldState

    from .aggregator import SuggestionAggregator

logger = logging.getLogger(__name__)

PICKER_ERROR = "Failed to open folder picker"


class FieldController:
    """User-facing operations on the source and destination fields.

    The controller is the only writer of ``raw_text``.  Text changes are
    published on the event bus from a task scheduled on the running
    loop, so ``set_text`` returns before any resolution starts and must
    be called from inside that loop.

    Usage::

        controller = FieldController(aggregator, bus, picker=picker)
        controller.start()
        controller.set_text(Field.SOURCE, "gdrive:/Photos")
        await controller.wait_idle()
        controller.state(Field.SOURCE).suggestions
    """

    def __init__(
        self,
        aggregator: SuggestionAggregator,
        event_bus: EventBus,
        *,
        picker: FolderPicker | None = None,
        window_lock: WindowLock | None = None,
        switchable: bool = True,
        source_options: FieldOptions | None = None,
        dest_options: FieldOptions | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._event_bus = event_bus
        self._picker = picker
        self._window_lock = window_lock or WindowLock()
        self.switchable = switchable
        self._pending: set[asyncio.Task[None]] = set()

        aggregator.open_field(Field.SOURCE, source_options)
        aggregator.open_field(Field.DEST, dest_options)

    # ------------------------------------------------------------------
    # Read model
    # ------------------------------------------------------------------

    def state(self, field: Field) -> FieldState:
        return self._aggregator.state(field)

    def text(self, field: Field) -> str:
        return self.state(field).raw_text

    @property
    def window_lock(self) -> WindowLock:
        return self._window_lock

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Resolve both fields' current text once, as on first display."""
        for field in Field:
            self._publish(EventType.TEXT_CHANGED, field, self.text(field))

    def set_text(self, field: Field, value: str) -> None:
        """Replace the text of *field*; a change triggers a new resolution."""
        state = self.state(field)
        if state.raw_text == value:
            return
        state.raw_text = value
        self._publish(EventType.TEXT_CHANGED, field, value)

    def swap(self) -> bool:
        """Exchange source and destination text.

        Both values are written before either change is published.
        Returns False, doing nothing, when swapping is disabled or both
        fields are empty.
        """
        source = self.state(Field.SOURCE)
        dest = self.state(Field.DEST)
        if not self.switchable or (not source.raw_text and not dest.raw_text):
            return False

        source.raw_text, dest.raw_text = dest.raw_text, source.raw_text
        self._publish(EventType.TEXT_CHANGED, Field.SOURCE, source.raw_text)
        self._publish(EventType.TEXT_CHANGED, Field.DEST, dest.raw_text)
        return True

    def clear(self, field: Field) -> bool:
        """Empty *field* if its options allow it.  Returns True when cleared."""
        if not self.state(field).options.clearable:
            return False
        self.set_text(field, "")
        return True

    def focus(self, field: Field) -> bool:
        """List all remotes for an empty *field* that gains focus."""
        if self.text(field):
            return False
        self._publish(EventType.FIELD_FOCUSED, field, "")
        return True

    async def browse(self, field: Field) -> str | None:
        """Pick a folder for *field* with the native picker.

        The window lock is held while the picker is open.  Returns the
        selected path, or None when cancelled, disabled or failed; a
        failure is recorded as the field's error.
        """
        state = self.state(field)
        if self._picker is None or not state.options.folder_picker:
            logger.debug("folder picker unavailable for %s", field.value)
            return None

        try:
            selected = await self._pick(state.raw_text)
        except PickerError as e:
            logger.warning("folder picker failed for %s", field.value, exc_info=True)
            state.last_error = str(e)
            return None

        if selected:
            self.set_text(field, selected)
        return selected

    async def wait_idle(self) -> None:
        """Wait until every published event has been fully handled."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def close(self) -> None:
        """Close both fields; results still in flight are discarded."""
        for field in Field:
            self._aggregator.close_field(field)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _pick(self, current: str) -> str | None:
        assert self._picker is not None  # for type narrowing
        default_path = current if current and not is_remote_path(current) else None
        try:
            async with self._window_lock.hold():
                selected = await self._picker.open(
                    directory=True, multiple=False, default_path=default_path
                )
        except Exception as e:
            raise PickerError(PICKER_ERROR) from e

        if isinstance(selected, list):
            return selected[0] if selected else None
        return selected or None

    def _publish(self, event_type: EventType, field: Field, value: str) -> None:
        event = FieldEvent(event_type, field, value)
        task = asyncio.get_running_loop().create_task(self._event_bus.emit(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
