from abc import ABC, abstractmethod
from typing import Any, Generic, Iterator, Optional

from enumreg._types import E


class AbstractStorage(ABC, Generic[E]):
    """Abstract base class for storage implementations."""

    @abstractmethod
    def add(self, name: str, value: Any, entry: E) -> None:
        pass

    @abstractmethod
    def get(self, name: str) -> Optional[E]:
        pass

    @abstractmethod
    def get_by_value(self, value: Any) -> Optional[E]:
        pass

    @abstractmethod
    def name_for(self, value: Any) -> Optional[str]:
        pass

    @abstractmethod
    def delete(self, name: str) -> Optional[E]:
        pass

    @abstractmethod
    def keys(self) -> Iterator[str]:
        pass

    @abstractmethod
    def entries(self) -> Iterator[E]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __contains__(self, name: object) -> bool:
        pass
