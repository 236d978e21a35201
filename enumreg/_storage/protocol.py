from typing import (
    Any,
    Iterator,
    Optional,
    Protocol,
    runtime_checkable,
)

from enumreg._types import E


@runtime_checkable
class StorageProtocol(Protocol[E]):
    """Minimal protocol describing the storage interface expected by Enum.

    A storage owns both the name -> entry map and the value -> name map of
    one definition and keeps them in sync. Only the members that
    `enumreg.core.registry` uses are specified here.
    """

    def add(
        self, name: str, value: Any, entry: E
    ) -> None:  # pragma: no cover - interface
        ...

    def get(self, name: str) -> Optional[E]:  # pragma: no cover - interface
        ...

    def get_by_value(self, value: Any) -> Optional[E]:  # pragma: no cover
        ...

    def name_for(self, value: Any) -> Optional[str]:  # pragma: no cover
        ...

    def delete(self, name: str) -> Optional[E]:  # pragma: no cover - interface
        ...

    def keys(self) -> Iterator[str]:  # pragma: no cover - interface
        ...

    def entries(self) -> Iterator[E]:  # pragma: no cover - interface
        ...

    def __len__(self) -> int:  # pragma: no cover - interface
        ...

    def __contains__(self, name: object) -> bool:  # pragma: no cover
        ...
