from typing import Any, Optional


class EntryAccessor:
    """Class attribute that resolves to the entry registered under ``name``.

    One accessor is attached to a definition per declared entry, so
    ``Status.draft`` works like ``Status.fetch("draft")``. The accessor
    only answers for the definition that declared it: subclasses start
    with an empty registry and must not see their parent's entries.
    """

    __slots__ = ("owner", "name")

    def __init__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name

    def __get__(self, obj: Any, objtype: Optional[type] = None) -> Any:
        if obj is not None:
            raise AttributeError(
                f"{self.name!r} is reachable only via the definition class, "
                "not its entries"
            )
        cls = objtype
        if cls is not self.owner:
            raise AttributeError(
                f"type object {cls.__name__!r} has no attribute {self.name!r}"
            )
        # Read the store directly; the definition lock may already be held.
        entry = self.owner.__dict__["_store"].get(self.name)
        if entry is None:
            raise AttributeError(
                f"{self.owner.__name__}.{self.name} has been removed"
            )
        return entry

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{self.__class__.__name__}({self.owner.__name__}.{self.name})"
