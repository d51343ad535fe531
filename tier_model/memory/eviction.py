from typing import Sequence

from tier_model.memory.access_counter import AccessCounter


class EvictionPolicy:
    """
    All tier victim selectors must implement choose_victim().

    ``entries`` is always passed in insertion order, oldest first.
    """

    name: str = "BASE"

    def choose_victim(self, entries: Sequence[str]) -> str:
        raise NotImplementedError


class LeastAccessedPolicy(EvictionPolicy):
    """
    Pick the entry with the smallest global access count.

    min() keeps the first minimal element, so equal counts resolve to the
    earliest inserted entry. This is frequency ordering, not recency: an
    address hit many times long ago outlives one hit once just now.
    """

    name = "LEAST_ACCESSED"

    def __init__(self, counter: AccessCounter):
        self.counter = counter

    def choose_victim(self, entries):
        if not entries:
            raise RuntimeError(f"{self.name} called with no entries")
        return min(entries, key=self.counter.count)


class OldestEntryPolicy(EvictionPolicy):
    """Pick the least recently inserted entry."""

    name = "OLDEST"

    def choose_victim(self, entries):
        if not entries:
            raise RuntimeError(f"{self.name} called with no entries")
        return entries[0]


__all__ = ["EvictionPolicy", "LeastAccessedPolicy", "OldestEntryPolicy"]
