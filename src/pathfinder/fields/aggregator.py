"""SuggestionAggregator — per-field resolution with last-writer-wins ordering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pathfinder.events import EventType, FieldEvent
from pathfinder.exceptions import ListingError
from pathfinder.fs.address import AddressKind, classify, remote_root
from pathfinder.fs.types import Entry, Field, FieldOptions, FieldState

if TYPE_CHECKING:
    from pathfinder.events import EventBus
    from pathfinder.fs.local_lister import LocalLister
    from pathfinder.fs.remote_lister import RemoteLister
    from pathfinder.fs.remotes import RemoteRegistry

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Failed to fetch suggestions"


class SuggestionAggregator:
    """Turns a field's text into its suggestion list.

    Every call to :meth:`resolve` takes a ticket from a per-field
    counter before its first suspension point.  When the listing
    completes, the result is applied only if that ticket is still the
    newest one issued for the field; otherwise it is dropped.  In-flight
    listings are never cancelled, their results are simply ignored.

    When built with an event bus, the aggregator resolves on
    ``TEXT_CHANGED`` and ``FIELD_FOCUSED`` and announces applied results
    with ``SUGGESTIONS_UPDATED``.
    """

    def __init__(
        self,
        registry: RemoteRegistry,
        local_lister: LocalLister,
        remote_lister: RemoteLister | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._registry = registry
        self._local = local_lister
        self._remote = remote_lister
        self._event_bus = event_bus
        self._states: dict[Field, FieldState] = {}
        self._tickets: dict[Field, int] = {}

        if event_bus is not None:
            event_bus.register(EventType.TEXT_CHANGED, self._on_field_event)
            event_bus.register(EventType.FIELD_FOCUSED, self._on_field_event)

    # =========================================================================
    # Field Lifecycle
    # =========================================================================

    def open_field(self, field: Field, options: FieldOptions | None = None) -> FieldState:
        """Create (or replace) the state for *field*."""
        state = FieldState(field=field, options=options or FieldOptions.for_field(field))
        self._states[field] = state
        self._tickets.setdefault(field, 0)
        return state

    def close_field(self, field: Field) -> None:
        """Drop the state for *field*; pending results for it are discarded."""
        self._states.pop(field, None)

    def state(self, field: Field) -> FieldState:
        """Current state of *field*.  Raises ``KeyError`` if it is not open."""
        return self._states[field]

    def latest_ticket(self, field: Field) -> int:
        """Sequence number of the newest resolution issued for *field*."""
        return self._tickets.get(field, 0)

    # =========================================================================
    # Resolution
    # =========================================================================

    async def resolve(self, field: Field, path: str) -> bool:
        """Resolve *path* into suggestions for *field*.

        Returns True when the result was applied, False when it was
        superseded by a newer resolution or the field was closed.
        Listing failures are recorded on the field, never raised.
        """
        state = self._states.get(field)
        if state is None:
            logger.debug("resolve on closed field %s ignored", field.value)
            return False

        ticket = self._tickets[field] + 1
        self._tickets[field] = ticket
        state.is_loading = True
        state.last_error = None

        suggestions: tuple[Entry, ...] = ()
        error: str | None = None
        try:
            suggestions = tuple(await self._fetch(path))
        except Exception as e:
            logger.warning("suggestions for %s (%r) failed", field.value, path, exc_info=True)
            error = str(e) or FALLBACK_ERROR

        if self._states.get(field) is not state or self._tickets[field] != ticket:
            logger.debug(
                "discarding stale resolution %d for %s (latest %d)",
                ticket,
                field.value,
                self._tickets[field],
            )
            return False

        state.suggestions = suggestions
        # cleared when the resolution started; a picker error set since then stays
        if error is not None:
            state.last_error = error
        state.is_loading = False

        if self._event_bus is not None:
            await self._event_bus.emit(
                FieldEvent(EventType.SUGGESTIONS_UPDATED, field, state.raw_text)
            )
        return True

    async def _fetch(self, path: str) -> list[Entry]:
        address = classify(path, self._registry.names)

        if address.kind is AddressKind.EMPTY:
            return [
                Entry(is_directory=True, name=remote_root(r), path=remote_root(r))
                for r in self._registry.list_remotes()
            ]

        if address.kind is AddressKind.LOCAL:
            result = await self._local.list(address.path)
            if not result.success:
                raise ListingError(result.message)
            return result.entries

        if self._remote is None:
            raise ListingError("Remote listing is not configured")

        assert address.remote is not None  # for type narrowing
        result = await self._remote.list(address.remote, address.sub_path or "")
        return result.entries

    async def _on_field_event(self, event: FieldEvent) -> None:
        await self.resolve(event.field, event.value)
