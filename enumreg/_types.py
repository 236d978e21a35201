from typing import Hashable, TypeVar

# E is the entry type a storage holds.
E = TypeVar("E")

# ValueKey is the hashable form of an entry value used by the reverse map.
ValueKey = Hashable

__all__ = ["E", "ValueKey"]
