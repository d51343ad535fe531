from collections import Counter


class AbstractMemoryManager:
    def __init__(self, tier, capacity, next_level=None):
        self.tier = tier
        self.capacity = capacity
        self.next_level = next_level

    def admit(self, address):
        raise NotImplementedError

    def remove(self, address) -> bool:
        raise NotImplementedError

    def stat(self) -> Counter:
        return Counter()


__all__ = ["AbstractMemoryManager"]
