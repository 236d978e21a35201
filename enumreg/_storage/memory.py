from typing import Any, Dict, Generic, Iterator, Optional, Tuple

from enumreg._storage.base import AbstractStorage
from enumreg._storage.keys import value_key
from enumreg._types import E, ValueKey


class MemoryStorage(AbstractStorage[E], Generic[E]):
    """In-memory storage backed by two insertion-ordered dictionaries."""

    def __init__(self) -> None:
        # name -> (entry, value key); the key is kept so delete() can clear
        # the reverse map without recomputing it.
        self._by_name: Dict[str, Tuple[E, ValueKey]] = {}
        self._by_value: Dict[ValueKey, str] = {}

    def add(self, name: str, value: Any, entry: E) -> None:
        key = value_key(value)
        self._by_name[name] = (entry, key)
        self._by_value[key] = name

    def get(self, name: str) -> Optional[E]:
        stored = self._by_name.get(name)
        return stored[0] if stored is not None else None

    def get_by_value(self, value: Any) -> Optional[E]:
        name = self.name_for(value)
        return self.get(name) if name is not None else None

    def name_for(self, value: Any) -> Optional[str]:
        try:
            key = value_key(value)
        except TypeError:
            return None
        return self._by_value.get(key)

    def delete(self, name: str) -> Optional[E]:
        stored = self._by_name.pop(name, None)
        if stored is None:
            return None
        entry, key = stored
        del self._by_value[key]
        return entry

    def keys(self) -> Iterator[str]:
        return iter(list(self._by_name.keys()))

    def entries(self) -> Iterator[E]:
        return iter([entry for entry, _ in self._by_name.values()])

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._by_name
