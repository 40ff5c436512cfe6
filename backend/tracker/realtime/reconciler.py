"""Folds change events into an ordered, most-recent-first list.

``apply`` never mutates its input. Identity is the store row id.
"""
import logging
from operator import attrgetter
from typing import Callable, List, Sequence, TypeVar

from tracker.realtime.events import ChangeEvent, Created, Modified, Removed

logger = logging.getLogger(__name__)

T = TypeVar("T")

row_id = attrgetter("id")


def apply(items: Sequence[T], event: ChangeEvent, key: Callable[[T], object] = row_id) -> List[T]:
    if isinstance(event, Created):
        new_key = key(event.row)
        if any(key(item) == new_key for item in items):
            logger.debug(f"Duplicate insert for {new_key}, skipping")
            return list(items)
        return [event.row, *items]

    if isinstance(event, Modified):
        new_key = key(event.row)
        result = list(items)
        for index, item in enumerate(result):
            if key(item) == new_key:
                result[index] = event.row
                return result
        # not in the snapshot yet
        logger.debug(f"Update for unknown row {new_key} dropped")
        return result

    if isinstance(event, Removed):
        return [item for item in items if key(item) != event.key]

    raise TypeError(f"Not a change event: {event!r}")


def apply_all(items: Sequence[T], events, key: Callable[[T], object] = row_id) -> List[T]:
    result = list(items)
    for event in events:
        result = apply(result, event, key)
    return result
