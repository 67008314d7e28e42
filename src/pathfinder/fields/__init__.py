"""Suggestion aggregation and user interactions for the two path fields."""

from pathfinder.fields.aggregator import SuggestionAggregator
from pathfinder.fields.controller import FieldController
from pathfinder.fields.window_lock import WindowLock

__all__ = [
    "FieldController",
    "SuggestionAggregator",
    "WindowLock",
]
