"""
History Providers
=================
Sources of usage history the analytics engine can pull from.

Anything with a `fetch_usage(part_id)` method works: tests hand in fixed
events, production wires in the application's data layer (or the file
based DataLoader).
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Protocol, runtime_checkable

from .models import UsageEvent


@runtime_checkable
class HistoryProvider(Protocol):
    """Supplies the usage events of one part."""

    def fetch_usage(self, part_id: Any) -> List[UsageEvent]:
        ...


class InMemoryHistoryProvider:
    """Serve usage events from a list already held in memory."""

    def __init__(self, events: Iterable[UsageEvent] = ()):
        self._by_part: Dict[Any, List[UsageEvent]] = defaultdict(list)
        for event in events:
            self._by_part[event.part_id].append(event)

    def fetch_usage(self, part_id: Any) -> List[UsageEvent]:
        return list(self._by_part.get(part_id, []))

    def part_ids(self) -> List[Any]:
        return list(self._by_part)


def group_by_part(history: Iterable[UsageEvent]) -> Dict[Any, List[UsageEvent]]:
    """Index events by part id, keeping their input order."""
    grouped: Dict[Any, List[UsageEvent]] = defaultdict(list)
    for event in history:
        grouped[event.part_id].append(event)
    return dict(grouped)
