"""enumreg — small declarative enum registry package.

This package exposes an `Enum` base class whose subclasses map unique
symbolic names to unique values, with an optional value type, strict or
lenient lookups, and JSON round-tripping. It's intentionally small and
dependency-free.
"""
from pathlib import Path
from typing import Optional

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from enumreg._storage import AbstractStorage, MemoryStorage, StorageProtocol
from enumreg.core import UNKNOWN, Enum, EnumType, make_enum
from enumreg.exceptions import (
    AlreadyRegisteredError,
    ConfigError,
    DuplicateNameError,
    DuplicateValueError,
    EnumRegError,
    InvalidNameError,
    MalformedInputError,
    MissingFieldError,
    NotFoundError,
    TypeMismatchError,
)


def _read_version_file() -> Optional[str]:
    try:
        return Path(__file__).with_name("VERSION").read_text(encoding="utf8").strip()
    except OSError:
        return None


def _get_version() -> str:
    # 1) Try to read installed distribution metadata
    try:
        return _pkg_version("enumreg")
    except PackageNotFoundError:
        pass

    # 2) Try a VERSION file shipped next to the package
    v = _read_version_file()
    if v:
        return v

    # 3) Fall back to a safe default
    return "0.0.0"


__version__ = _get_version()


__all__ = [
    "Enum",
    "EnumType",
    "make_enum",
    "UNKNOWN",
    "AbstractStorage",
    "MemoryStorage",
    "StorageProtocol",
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
    "__version__",
]
