"""
Tiered-store primitives used by the tier-sim platform.

The engine models a cache/page/disk hierarchy with fixed capacities. Every
tier is an insertion-ordered set of address tokens chained to the next
slower tier, and victims are picked by a global access count rather than by
recency.
"""

__all__ = [
    "arch",
    "entity",
    "memory",
]
