import pytest

from enumreg import (
    AlreadyRegisteredError,
    Enum,
    EnumRegError,
    InvalidNameError,
    NotFoundError,
    TypeMismatchError,
)


def make_status() -> type:
    class Status(Enum):
        draft = 0
        published = 1

    return Status


def test_fetch_before_registration_raises() -> None:
    status = make_status()
    with pytest.raises(NotFoundError):
        status.fetch("missing")


def test_error_message_is_not_quoted() -> None:
    status = make_status()
    with pytest.raises(NotFoundError) as info:
        status.fetch("missing")
    assert str(info.value) == "Enum name 'missing' is not registered in Status"


def test_every_error_shares_a_base() -> None:
    status = make_status()
    with pytest.raises(EnumRegError):
        status.fetch("missing")
    with pytest.raises(EnumRegError):
        status.declare_entry("draft", 5)


def test_duplicates_are_already_registered_errors() -> None:
    status = make_status()
    with pytest.raises(AlreadyRegisteredError):
        status.declare_entry("draft", 5)
    with pytest.raises(AlreadyRegisteredError):
        status.declare_entry("other", 0)
    with pytest.raises(ValueError):
        status.declare_entry("other", 1)


@pytest.mark.parametrize("name", [0, None, b"draft"])
def test_non_string_name_is_rejected(name: object) -> None:
    status = make_status()
    with pytest.raises(InvalidNameError, match="must be a string"):
        status.declare_entry(name, 9)  # type: ignore[arg-type]


@pytest.mark.parametrize("name", ["", "two words", "tab\tname"])
def test_empty_or_whitespace_name_is_rejected(name: str) -> None:
    status = make_status()
    with pytest.raises(InvalidNameError):
        status.declare_entry(name, 9)
    assert len(status) == 2


def test_unhashable_value_is_rejected() -> None:
    class Opaque:
        __hash__ = None  # type: ignore[assignment]

    status = make_status()
    with pytest.raises(TypeMismatchError, match="not hashable"):
        status.declare_entry("opaque", Opaque())
    with pytest.raises(TypeError):
        status.declare_entry("nested", [Opaque()])
    assert status.keys() == ["draft", "published"]


def test_failed_declaration_leaves_definition_unchanged() -> None:
    class Typed(Enum, value_type=int):
        a = 1

    before = Typed.snapshot()
    for name, value in (("a", 2), ("b", 1), ("c", "3"), ("", 4)):
        with pytest.raises(EnumRegError):
            Typed.declare_entry(name, value)
    assert Typed.snapshot() == before
    assert not hasattr(Typed, "b")
    assert not hasattr(Typed, "c")


def test_bool_passes_int_type_check() -> None:
    class Typed(Enum, value_type=int):
        one = 1

    # bool is an int subclass and True == 1, so this collides on value
    with pytest.raises(AlreadyRegisteredError):
        Typed.declare_entry("yes", True)


def test_bulk_context_does_not_swallow_exceptions() -> None:
    status = make_status()
    with pytest.raises(ValueError):
        with status.bulk():
            status.declare_entry("archived", 2)
            raise ValueError("force exit")
    # confirm lock released and earlier work kept
    status.declare_entry("deleted", 3)
    assert status.keys() == ["draft", "published", "archived", "deleted"]


def test_bulk_yields_the_definition() -> None:
    status = make_status()
    with status.bulk() as definition:
        assert definition is status
        definition.remove("draft")
        definition.declare_entry("draft", 10)
    assert status.draft.value == 10
