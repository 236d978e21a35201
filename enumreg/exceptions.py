from typing import Any, Optional


class EnumRegError(Exception):
    """Base class for every error raised by enumreg."""


class ConfigError(EnumRegError, ValueError):
    """Raised for an invalid definition option (type, lock, log level, store)."""


class InvalidNameError(EnumRegError, ValueError):
    """Raised when an entry name is not a non-empty, whitespace-free string."""


class TypeMismatchError(EnumRegError, TypeError):
    """Raised when an entry value is not an instance of the declared type."""


class AlreadyRegisteredError(EnumRegError, ValueError):
    """Raised when a name or a value is already taken in a definition."""


class DuplicateValueError(AlreadyRegisteredError):
    def __init__(self, message: str, value: Any, existing_name: str) -> None:
        super().__init__(message)
        self.value = value
        self.existing_name = existing_name


class DuplicateNameError(AlreadyRegisteredError):
    def __init__(self, message: str, name: str, existing_value: Any) -> None:
        super().__init__(message)
        self.name = name
        self.existing_value = existing_value


class NotFoundError(EnumRegError, KeyError):
    """Raised when a name or value cannot be resolved.

    Subclasses KeyError so mapping-style callers keep working, but renders
    the plain message instead of KeyError's quoted repr.
    """

    def __init__(self, message: str, key: Optional[Any] = None) -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class MalformedInputError(EnumRegError, ValueError):
    """Raised when serialized input is not a JSON object of the expected shape."""


class MissingFieldError(MalformedInputError):
    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field


__all__ = [
    "EnumRegError",
    "ConfigError",
    "InvalidNameError",
    "TypeMismatchError",
    "AlreadyRegisteredError",
    "DuplicateValueError",
    "DuplicateNameError",
    "NotFoundError",
    "MalformedInputError",
    "MissingFieldError",
]
