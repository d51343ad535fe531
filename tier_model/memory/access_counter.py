from collections import Counter
from typing import Dict, Hashable


class AccessCounter:
    """
    Global access count per address token.

    Counts only grow; nothing in the hierarchy ever resets or removes an
    entry, so an address dropped from disk keeps its history when it comes
    back.
    """

    def __init__(self):
        self._counts: Counter = Counter()

    def record(self, address: Hashable) -> int:
        self._counts[address] += 1
        return self._counts[address]

    def count(self, address: Hashable) -> int:
        # Counter lookups on a missing key return 0 without inserting it
        return self._counts[address]

    def __getitem__(self, address: Hashable) -> int:
        return self.count(address)

    def __contains__(self, address: Hashable) -> bool:
        return address in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def snapshot(self) -> Dict[Hashable, int]:
        return dict(self._counts)


__all__ = ["AccessCounter"]
