from typing import Any

from enumreg._types import ValueKey

# Private tags keep container keys apart from any tuple a caller can build.
_LIST_TAG = object()
_DICT_TAG = object()


def value_key(value: Any) -> ValueKey:
    """Return the hashable key used to index ``value`` in the reverse map.

    Hashable values are their own key. The unhashable builtin containers
    are folded into tagged tuples so that equal containers share a key and
    a list never collides with a tuple holding the same items.

    Raises:
        TypeError: If ``value`` is neither hashable nor a supported container.
    """
    if isinstance(value, list):
        return (_LIST_TAG, tuple(value_key(item) for item in value))
    if isinstance(value, dict):
        return (
            _DICT_TAG,
            frozenset((value_key(k), value_key(v)) for k, v in value.items()),
        )
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, tuple):
        return tuple(value_key(item) for item in value)
    hash(value)
    return value
