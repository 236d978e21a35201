import functools
from typing import Any, Callable, Optional, cast

from enumreg._storage import MemoryStorage, StorageProtocol
from enumreg.exceptions import ConfigError, InvalidNameError

LOCK_METHODS = ("__enter__", "__exit__", "acquire", "release")


def locked_method(method: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to run a definition classmethod under the definition's lock.

    Must sit below ``@classmethod``. The abstract base has no lock of its
    own, so calling a registry method on it raises ConfigError.
    """

    @functools.wraps(method)
    def wrapper(cls: type, *args: Any, **kwargs: Any) -> Any:
        with definition_lock(cls):
            return method(cls, *args, **kwargs)

    return wrapper


def make_default_store() -> StorageProtocol[Any]:
    """Create a default StorageProtocol instance.

    Localizes the cast from the concrete MemoryStorage to the protocol.
    """
    return cast(StorageProtocol[Any], MemoryStorage())


def validate_name(name: Any) -> str:
    """Return ``name`` in canonical form or raise InvalidNameError."""
    if not isinstance(name, str):
        raise InvalidNameError(f"Enum entry name must be a string, got {type(name)}")
    elif not name:
        raise InvalidNameError("Enum entry name cannot be an empty string")
    elif any(c.isspace() for c in name):
        raise InvalidNameError(
            f"Enum entry name {name!r} cannot contain whitespace characters"
        )
    return name


def validate_lock(lock: Any) -> None:
    if lock is not None and not all(hasattr(lock, m) for m in LOCK_METHODS):
        raise ConfigError("lock must be a threading.RLock or similar object")


def validate_log_level(log_level: Any) -> int:
    if (
        isinstance(log_level, bool)
        or not isinstance(log_level, int)
        or not (50 >= log_level >= 0)
    ):
        raise ConfigError("log_level must be a valid logging level between 0 and 50")
    return log_level


def validate_store(store: Optional[Any]) -> StorageProtocol[Any]:
    if store is None:
        return make_default_store()
    if not isinstance(store, StorageProtocol):
        raise ConfigError(
            f"store must implement StorageProtocol, got {type(store).__name__}"
        )
    if len(store) != 0:
        raise ConfigError("store must be empty; definitions never share entries")
    return store


def is_entry_candidate(attr: str, obj: Any) -> bool:
    """Whether a class-body attribute should be declared as an entry."""
    if attr.startswith("_"):
        return False
    if isinstance(obj, (classmethod, staticmethod, property, type)):
        return False
    if callable(obj) or hasattr(obj, "__get__"):
        return False
    return True


def definition_lock(cls: type) -> Any:
    lock = cls.__dict__.get("_lock")
    if lock is None:
        raise ConfigError(
            f"{cls.__name__} is not a concrete enum definition; subclass it"
        )
    return lock
