import logging
from threading import RLock

import pytest

from enumreg import ConfigError, Enum, MemoryStorage, make_enum
from enumreg.core import logger


def test_minimal_definition() -> None:
    class Empty(Enum):
        pass

    assert len(Empty) == 0
    assert Empty.snapshot() == {}
    assert Empty.keys() == []
    assert Empty.values() == []
    assert Empty.is_strict() is False
    assert Empty.value_type() is None


def test_definition_with_lock() -> None:
    lock = RLock()

    class Locked(Enum, lock=lock):
        a = 1

    assert Locked._lock is lock
    assert Locked.a.value == 1


def test_definitions_get_their_own_lock() -> None:
    class First(Enum):
        pass

    class Second(Enum):
        pass

    assert First._lock is not Second._lock


def test_definition_with_log_level() -> None:
    class Verbose(Enum, log_level=10):
        a = 1

    assert logger.getEffectiveLevel() == 10
    logger.setLevel(logging.WARNING)


def test_debug_logging_of_registration(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="enumreg.core.registry"):

        class Logged(Enum):
            a = 1

        Logged.remove("a")
    assert "Registered Logged.a -> 1" in caplog.text
    assert "Removed Logged.a" in caplog.text


def test_definition_with_store() -> None:
    store: MemoryStorage[Enum] = MemoryStorage()

    class Stored(Enum, store=store):
        a = 1
        b = 2

    assert Stored._store is store
    assert len(store) == 2
    assert store.name_for(2) == "b"


def test_definition_with_all_params() -> None:
    lock = RLock()

    class Full(Enum, value_type=str, strict=True, lock=lock, log_level=20):
        on = "on"
        off = "off"

    assert Full._lock is lock
    assert logger.getEffectiveLevel() == 20
    assert Full.is_strict() is True
    assert Full.value_type() is str
    logger.setLevel(logging.WARNING)


def test_invalid_value_type() -> None:
    with pytest.raises(ConfigError, match="Expected a class"):

        class Broken(Enum, value_type="not a class"):  # type: ignore[arg-type]
            pass


def test_declare_type_rejects_non_class() -> None:
    class Plain(Enum):
        pass

    with pytest.raises(ConfigError):
        Plain.declare_type(42)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Plain.declare_type(None)  # type: ignore[arg-type]
    assert Plain.value_type() is None


def test_invalid_log_level() -> None:
    with pytest.raises(ConfigError):

        class Broken(Enum, log_level=-1):
            pass

    with pytest.raises(ConfigError):

        class AlsoBroken(Enum, log_level=51):
            pass


def test_invalid_lock() -> None:
    with pytest.raises(ConfigError):

        class Broken(Enum, lock="not_a_lock"):  # type: ignore[arg-type]
            pass


def test_invalid_store() -> None:
    with pytest.raises(ConfigError, match="StorageProtocol"):

        class Broken(Enum, store={}):  # type: ignore[arg-type]
            pass


def test_store_must_be_empty() -> None:
    class First(Enum):
        a = 1

    with pytest.raises(ConfigError, match="must be empty"):

        class Second(Enum, store=First._store):
            pass


def test_unknown_class_keyword_is_rejected() -> None:
    with pytest.raises(TypeError):

        class Broken(Enum, colour="red"):  # type: ignore[call-arg]
            pass


def test_make_enum_from_mapping() -> None:
    color = make_enum("Color", {"red": "#f00", "green": "#0f0"})
    assert color.__name__ == "Color"
    assert color.__module__ == __name__
    assert issubclass(color, Enum)
    assert color.red.value == "#f00"
    assert color.keys() == ["red", "green"]


def test_make_enum_from_pairs_with_options() -> None:
    http_status = make_enum(
        "HttpStatus",
        [("ok", 200), ("not_found", 404)],
        value_type=int,
        strict=True,
    )
    assert http_status.is_strict() is True
    assert http_status.value_type() is int
    assert http_status.name_for(404) == "not_found"


def test_make_enum_allows_keyword_names() -> None:
    flow = make_enum("Flow", {"class": 1, "if": 2})
    assert getattr(flow, "class").value == 1
    assert flow.fetch("if").value == 2


def test_make_enum_validates_entries() -> None:
    with pytest.raises(TypeError):
        make_enum("Bad", {"a": "x"}, value_type=int)
