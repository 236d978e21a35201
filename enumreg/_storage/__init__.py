from .base import AbstractStorage
from .keys import value_key
from .memory import MemoryStorage
from .protocol import StorageProtocol

__all__ = ["AbstractStorage", "MemoryStorage", "StorageProtocol", "value_key"]
