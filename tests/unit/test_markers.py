from dataclasses import dataclass

from sqldto.mapping import CastDateTime, Codec, Identity, Ignore, IntoViaConstructor, SqlName, ToString, entity
from sqldto.mapping.markers import ENTITY_OPTIONS_ATTR, EntityOptions, FieldOptions, get_entity_options
from sqldto.mapping.naming import LowerCase


def test_no_markers() -> None:
    assert FieldOptions.from_markers([]) == FieldOptions()


def test_markers_combine() -> None:
    to_string = ToString()
    via = IntoViaConstructor(int)
    options = FieldOptions.from_markers([Identity(), SqlName("key"), to_string, via])
    assert options.identity
    assert not options.ignore
    assert options.naming == SqlName("key")
    assert options.to_storage is to_string
    assert options.from_storage is via


def test_bidirectional_marker_fills_both_halves() -> None:
    codec = CastDateTime()
    options = FieldOptions.from_markers([codec])
    assert options.to_storage is codec
    assert options.from_storage is codec


def test_later_marker_wins() -> None:
    first = Codec(to_storage=str)
    second = Codec(to_storage=repr)
    options = FieldOptions.from_markers([SqlName("a"), first, SqlName("b"), second])
    assert options.naming == SqlName("b")
    assert options.to_storage is second
    assert options.from_storage is None


def test_unrelated_metadata_is_ignored() -> None:
    assert FieldOptions.from_markers(["doc string", 42]) == FieldOptions()


def test_ignore_marker() -> None:
    assert FieldOptions.from_markers([Ignore()]).ignore


def test_entity_decorator() -> None:
    @entity(table="things", naming=LowerCase())
    @dataclass
    class Thing:
        name: str

    options = get_entity_options(Thing)
    assert options.table == SqlName("things")
    assert isinstance(options.naming, LowerCase)
    assert isinstance(getattr(Thing, ENTITY_OPTIONS_ATTR), EntityOptions)


def test_undecorated_type_has_default_options() -> None:
    @dataclass
    class Plain:
        name: str

    assert get_entity_options(Plain) == EntityOptions()
