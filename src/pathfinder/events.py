"""EventBus and event types connecting fields, resolution and rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pathfinder.fs.types import Field

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of field events."""

    TEXT_CHANGED = "text_changed"
    FIELD_FOCUSED = "field_focused"
    SUGGESTIONS_UPDATED = "suggestions_updated"


@dataclass(frozen=True, slots=True)
class FieldEvent:
    """Immutable record of something that happened to a field.

    Attributes:
        event_type: The kind of event.
        field: The field it happened to.
        value: The field's text when the event was raised.
    """

    event_type: EventType
    field: Field
    value: str = ""


if TYPE_CHECKING:
    FieldHandler = Callable[[FieldEvent], Awaitable[None]]


class EventBus:
    """Routes field events from the controller to resolution and rendering.

    A handler subscribes to one :class:`EventType`, optionally narrowed
    to a single :class:`Field`.  Handlers for an event are awaited one
    after another in subscription order.
    A handler that raises is logged with the event's field and text;
    the remaining handlers still run and :meth:`emit` returns normally.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[EventType, list[tuple[Field | None, FieldHandler]]] = {
            et: [] for et in EventType
        }

    def register(
        self, event_type: EventType, handler: FieldHandler, field: Field | None = None
    ) -> None:
        """Subscribe *handler* to *event_type*, for *field* only when given."""
        self._subscriptions[event_type].append((field, handler))

    def unregister(self, event_type: EventType, handler: FieldHandler) -> bool:
        """Drop the oldest subscription of *handler* to *event_type*.

        Returns False when *handler* was not subscribed.
        """
        subscriptions = self._subscriptions[event_type]
        for i, (_, subscribed) in enumerate(subscriptions):
            if subscribed == handler:
                del subscriptions[i]
                return True
        return False

    async def emit(self, event: FieldEvent) -> None:
        """Await every handler subscribed to *event*'s type and field."""
        # snapshot: handlers may subscribe or unsubscribe while running
        for field, handler in list(self._subscriptions[event.event_type]):
            if field is not None and field is not event.field:
                continue
            try:
                await handler(event)
            except Exception:
                logger.warning(
                    "%s handler %r failed on %s field (text %r)",
                    event.event_type.value,
                    handler,
                    event.field.value,
                    event.value,
                    exc_info=True,
                )

    @property
    def handler_count(self) -> int:
        return sum(len(subs) for subs in self._subscriptions.values())

    def clear(self) -> None:
        for subscriptions in self._subscriptions.values():
            subscriptions.clear()
