import contextlib
import json
import logging
import sys
import types
from threading import RLock
from typing import (
    Any,
    ContextManager,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from enumreg._storage import StorageProtocol, value_key
from enumreg.core.accessor import EntryAccessor
from enumreg.core.utils import (
    definition_lock,
    is_entry_candidate,
    locked_method,
    validate_lock,
    validate_log_level,
    validate_name,
    validate_store,
)
from enumreg.exceptions import (
    ConfigError,
    DuplicateNameError,
    DuplicateValueError,
    MalformedInputError,
    MissingFieldError,
    NotFoundError,
    TypeMismatchError,
)

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

T = TypeVar("T", bound="Enum")


class EnumType(type):
    """Metaclass giving definitions a read-only mapping interface.

    ``Status["draft"]`` fetches, ``len(Status)`` counts entries, iterating
    yields entries in registration order and ``in`` accepts a name or an
    entry of the definition.
    """

    def __getitem__(cls, name: str) -> Any:
        return cls.fetch(name)

    def __iter__(cls) -> Iterator[Any]:
        return iter(cls.all())

    def __len__(cls) -> int:
        return cls._count()

    def __bool__(cls) -> bool:
        # A definition is truthy even with no entries.
        return True

    def __contains__(cls, item: object) -> bool:
        return cls._contains(item)


class Enum(metaclass=EnumType):
    """
    Base class for declarative enum definitions.

    Every subclass owns an isolated registry mapping unique names to unique
    values. Public plain-data attributes of the class body become entries,
    in order. Each entry is an immutable instance of the subclass wrapping
    its value; the name is resolved through the registry when needed.

    Class keyword arguments:
        value_type: Optional class every entry value must be an instance of.
        strict: If True, unresolved names and values raise NotFoundError
            instead of falling back to ``"unknown"`` / ``None``.
        lock: Optional re-entrant lock guarding the registry. If None, a
            new RLock is created.
        log_level: Logging level for the registry logger.
        store: Optional empty storage backend implementing StorageProtocol.

    Raises:
        ConfigError: If an option is invalid.
        TypeMismatchError: If a value does not match ``value_type``.
        DuplicateValueError: If two entries share a value.
        DuplicateNameError: If two entries share a name.

    Examples:
        >>> class HttpStatus(Enum, value_type=int, strict=True):
        ...     ok = 200
        ...     not_found = 404
        >>> HttpStatus.ok.value
        200
        >>> HttpStatus.name_for(404)
        'not_found'
        >>> HttpStatus.ok.to_json()
        '{"name": "ok", "value": 200}'
        >>> HttpStatus.from_json('{"name": "ok"}') is HttpStatus.ok
        True
    """

    __slots__ = ("_value",)

    _lock: RLock
    _store: StorageProtocol[Any]
    _value_type: Optional[type]
    _strict: bool

    def __init_subclass__(
        cls,
        *,
        value_type: Optional[type] = None,
        strict: bool = False,
        lock: Optional[RLock] = None,
        log_level: Optional[int] = None,
        store: Optional[StorageProtocol[Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        validate_lock(lock)
        if log_level is not None:
            logger.setLevel(validate_log_level(log_level))

        cls._lock = lock or RLock()
        cls._store = validate_store(store)
        cls._value_type = None
        cls._strict = bool(strict)

        if value_type is not None:
            cls.declare_type(value_type, strict=strict)

        # Class-body values are replaced by accessors once declared.
        candidates = [
            (attr, obj)
            for attr, obj in list(cls.__dict__.items())
            if is_entry_candidate(attr, obj)
        ]
        for attr, _ in candidates:
            delattr(cls, attr)
        for attr, obj in candidates:
            cls.declare_entry(attr, obj)

    def __new__(cls: Type[T], value: Any) -> T:
        store = cls.__dict__.get("_store")
        if store is not None:
            existing = store.get_by_value(value)
            if existing is not None:
                return existing
        return cls._build(value)

    @classmethod
    def _build(cls: Type[T], value: Any) -> T:
        entry = object.__new__(cls)
        object.__setattr__(entry, "_value", value)
        return entry

    # -- definition ---------------------------------------------------------

    @classmethod
    @locked_method
    def declare_type(cls, value_type: type, strict: bool = False) -> None:
        """
        Declare the type every later entry value must be an instance of.

        The constraint is not applied retroactively. Entries declared before
        this call are kept as-is; a warning is logged for each one that does
        not satisfy the new type.

        Raises:
            ConfigError: If ``value_type`` is not a class.
        """
        if not isinstance(value_type, type):
            raise ConfigError(f"Expected a class, got {value_type!r}")

        for name in cls._store.keys():
            entry = cls._store.get(name)
            if entry is not None and not isinstance(entry.value, value_type):
                logger.warning(
                    "Entry %s.%s = %r predates declared type %s and is kept",
                    cls.__name__,
                    name,
                    entry.value,
                    value_type.__name__,
                )

        cls._value_type = value_type
        cls._strict = bool(strict)
        logger.debug(
            "Declared %s value type %s (strict=%s)",
            cls.__name__,
            value_type.__name__,
            cls._strict,
        )

    @classmethod
    @locked_method
    def declare_entry(cls: Type[T], name: str, value: Any) -> T:
        """
        Register a new entry and attach its accessor to the definition.

        Checks run in a fixed order: type, then duplicate value, then
        duplicate name. The definition is unchanged if any check fails.

        Returns:
            The registered entry.

        Raises:
            InvalidNameError: If ``name`` is not a usable entry name.
            TypeMismatchError: If ``value`` fails the declared type or is
                not hashable.
            DuplicateValueError: If ``value`` is already registered.
            DuplicateNameError: If ``name`` is already registered.
        """
        name = validate_name(name)
        value_type = cls._value_type
        if value_type is not None and not isinstance(value, value_type):
            raise TypeMismatchError(
                f"Invalid value type for {name!r}: expected "
                f"{value_type.__name__}, got {type(value).__name__}"
            )
        try:
            value_key(value)
        except TypeError as exc:
            raise TypeMismatchError(
                f"Invalid value for {name!r}: {type(value).__name__} "
                "is not hashable"
            ) from exc

        existing_name = cls._store.name_for(value)
        if existing_name is not None:
            raise DuplicateValueError(
                f"Duplicate value {value!r} for {name!r}; "
                f"already assigned to {existing_name!r}",
                value=value,
                existing_name=existing_name,
            )

        existing = cls._store.get(name)
        if existing is not None:
            raise DuplicateNameError(
                f"Duplicate name {name!r}; already registered with value "
                f"{existing.value!r}",
                name=name,
                existing_value=existing.value,
            )

        entry = cls._build(value)
        cls._store.add(name, value, entry)
        cls._attach_accessor(name)
        logger.debug("Registered %s.%s -> %r", cls.__name__, name, value)
        return entry

    @classmethod
    def _attach_accessor(cls, name: str) -> None:
        if cls._shadows_member(name):
            logger.warning(
                "Entry %s.%s shadows an existing member; "
                "use %s.get(%r) to reach it",
                cls.__name__,
                name,
                cls.__name__,
                name,
            )
            return
        setattr(cls, name, EntryAccessor(cls, name))

    @classmethod
    def _shadows_member(cls, name: str) -> bool:
        for klass in cls.__mro__:
            if name in klass.__dict__ and not isinstance(
                klass.__dict__[name], EntryAccessor
            ):
                return True
        return hasattr(type(cls), name)

    @classmethod
    @locked_method
    def is_strict(cls) -> bool:
        return cls._strict is True

    @classmethod
    @locked_method
    def value_type(cls) -> Optional[type]:
        return cls._value_type

    # -- lookup -------------------------------------------------------------

    @classmethod
    @locked_method
    def get(cls: Type[T], name: Any) -> Optional[T]:
        """
        Get the entry registered under ``name``, or None. Never raises.
        """
        if not isinstance(name, str):
            return None
        return cls._store.get(name)

    @classmethod
    @locked_method
    def fetch(cls: Type[T], name: Any) -> T:
        """
        Get the entry registered under ``name``.

        Raises:
            NotFoundError: If no entry is registered under ``name``.
        """
        entry = cls._store.get(name) if isinstance(name, str) else None
        if entry is None:
            raise NotFoundError(
                f"Enum name {name!r} is not registered in {cls.__name__}",
                key=name,
            )
        return entry

    @classmethod
    @locked_method
    def name_for(cls, value: Any) -> Optional[str]:
        """Reverse lookup: the name bound to ``value``, or None."""
        return cls._store.name_for(value)

    @classmethod
    @locked_method
    def all(cls: Type[T]) -> List[T]:
        return list(cls._store.entries())

    @classmethod
    @locked_method
    def keys(cls) -> List[str]:
        return list(cls._store.keys())

    @classmethod
    @locked_method
    def values(cls) -> List[Any]:
        return [entry.value for entry in cls._store.entries()]

    @classmethod
    @locked_method
    def snapshot(cls) -> Dict[str, Any]:
        """Get an ordered ``{name: value}`` copy of the registry."""
        out: Dict[str, Any] = {}
        for name in cls._store.keys():
            entry = cls._store.get(name)
            if entry is not None:
                out[name] = entry.value
        return out

    @classmethod
    @locked_method
    def _count(cls) -> int:
        return len(cls._store)

    @classmethod
    @locked_method
    def _contains(cls, item: object) -> bool:
        if isinstance(item, str):
            return item in cls._store
        if type(item) is cls:
            return cls._store.name_for(item.value) is not None
        return False

    # -- removal ------------------------------------------------------------

    @classmethod
    @locked_method
    def remove(cls: Type[T], name: Any) -> Optional[T]:
        """
        Remove the entry registered under ``name`` and detach its accessor.

        Returns:
            The removed entry, or None if nothing was registered.
        """
        if not isinstance(name, str):
            return None
        entry = cls._store.delete(name)
        if entry is None:
            return None
        if isinstance(cls.__dict__.get(name), EntryAccessor):
            delattr(cls, name)
        logger.debug("Removed %s.%s", cls.__name__, name)
        return entry

    @classmethod
    def bulk(cls: Type[T]) -> ContextManager[Type[T]]:
        """
        Context manager holding the definition lock for several operations.

        Usage:
            with Status.bulk() as definition:
                definition.declare_entry("draft", 0)
                definition.remove("legacy")
        """
        lock = definition_lock(cls)

        @contextlib.contextmanager
        def _bulk_ctx() -> Iterator[Type[T]]:
            lock.acquire()
            try:
                yield cls
            finally:
                lock.release()

        return _bulk_ctx()

    # -- serialization ------------------------------------------------------

    @classmethod
    def from_json(
        cls: Type[T], text: Union[str, bytes, bytearray], **kwargs: Any
    ) -> Optional[T]:
        """
        Resolve an entry from its JSON form. Only ``name`` is used.

        Raises:
            MalformedInputError: If ``text`` is not a JSON object.
            MissingFieldError: If the object has no ``name``.
            NotFoundError: If the name is unknown and the definition is strict.
        """
        if not isinstance(text, (str, bytes, bytearray)):
            raise MalformedInputError(
                f"Enum JSON must be str or bytes, got {type(text).__name__}"
            )
        try:
            data = json.loads(text, **kwargs)
        except (ValueError, RecursionError) as exc:
            raise MalformedInputError(f"Invalid enum JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise MalformedInputError(
                f"Enum JSON must be an object, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    @classmethod
    @locked_method
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> Optional[T]:
        """
        Resolve an entry from a decoded ``{"name": ..., "value": ...}`` mapping.

        The ``value`` field is ignored; the registry is trusted over the wire.
        """
        if not isinstance(data, Mapping):
            raise MalformedInputError(
                f"Enum data must be a mapping, got {type(data).__name__}"
            )
        name = data.get("name")
        if name is None:
            raise MissingFieldError("Missing 'name' key in enum JSON", field="name")
        if not isinstance(name, str):
            raise MalformedInputError(
                f"Enum 'name' must be a string, got {type(name).__name__}"
            )
        entry = cls._store.get(name)
        if entry is None and cls._strict:
            raise NotFoundError(f"Unregistered enum name: {name!r}", key=name)
        return entry

    # -- entry behaviour ----------------------------------------------------

    @property
    def value(self) -> Any:
        return self._value

    @property
    def name(self) -> str:
        """
        The symbolic name of this entry.

        Raises:
            NotFoundError: If the value is not registered and the definition
                is strict. Non-strict definitions return ``"unknown"``.
        """
        cls = type(self)
        name = cls.name_for(self._value)
        if name is None:
            if cls.is_strict():
                raise NotFoundError(
                    f"Unregistered enum value: {self._value!r}", key=self._value
                )
            return UNKNOWN
        return name

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self._value}

    def to_json(self, **kwargs: Any) -> str:
        """
        Serialize the entry to ``{"name": ..., "value": ...}``.

        Keyword arguments are passed to ``json.dumps``.

        Raises:
            TypeError: If the value is not JSON serializable.
        """
        return json.dumps(self.to_dict(), **kwargs)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        cls = type(self)
        store = cls.__dict__.get("_store")
        name = store.name_for(self._value) if store is not None else None
        # Falls back to "unknown" even in strict mode; repr never raises.
        name = name or UNKNOWN
        return f"#<{cls.__module__}.{cls.__qualname__} {name}:{self._value!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Enum):
            return NotImplemented
        return type(other) is type(self) and bool(other._value == self._value)

    def __hash__(self) -> int:
        return hash(value_key(self._value))

    def __reduce__(self) -> Tuple[Any, Tuple[Any]]:
        return (type(self), (self._value,))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} entries are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} entries are immutable")


def make_enum(
    name: str,
    entries: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]] = (),
    *,
    value_type: Optional[type] = None,
    strict: bool = False,
    module: Optional[str] = None,
    **options: Any,
) -> Type[Enum]:
    """
    Build a new enum definition at runtime.

    Args:
        name: Class name of the definition.
        entries: Mapping or iterable of ``(name, value)`` pairs, declared in
            order. Names may be anything ``declare_entry`` accepts,
            including Python keywords.
        value_type: Optional value type constraint.
        strict: Strict resolution mode.
        module: ``__module__`` of the new class; defaults to the caller's.
        options: Remaining class keywords (``lock``, ``log_level``, ``store``).

    Example:
        Color = make_enum("Color", {"red": "#f00", "green": "#0f0"})
    """
    if module is None:
        module = sys._getframe(1).f_globals.get("__name__", __name__)
    kwds: Dict[str, Any] = dict(options, value_type=value_type, strict=strict)

    def _exec_body(ns: Dict[str, Any]) -> None:
        ns["__module__"] = module

    definition = types.new_class(name, (Enum,), kwds, _exec_body)
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    for entry_name, value in pairs:
        definition.declare_entry(entry_name, value)
    return definition
