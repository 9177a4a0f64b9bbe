"""Unit tests for entity metadata extraction and caching.

This module tests:
- Table and column naming from strategies and markers
- Identity detection and its failure modes
- Dataclass, msgspec and plain class records
- MetadataCache memoization
"""

import threading
from dataclasses import dataclass
from typing import Annotated, Optional

import pytest

from sqldto.exceptions import MappingError, MappingErrorCode
from sqldto.mapping import CastDateTime, Identity, Ignore, SqlName, entity
from sqldto.mapping.metadata import EntityMetadata, MetadataCache, RecordKind, build_metadata
from tests.models import Account, AuditEntry, Gadget, Person, SampleTable, Visit


@dataclass
class TwoIdentities:
    id: Annotated[int, Identity()]
    other: Annotated[int, Identity()]


@dataclass
class FloatIdentity:
    id: Annotated[float, Identity()]


@dataclass
class ClashingColumns:
    firstName: str
    first_name: str


@dataclass
class ForcedClash:
    a: Annotated[str, SqlName("same")]
    b: Annotated[str, SqlName("same")]


@entity(naming="everything")
@dataclass
class Inherited:
    id: Annotated[Optional[int], Identity()]


@dataclass
class Child(Inherited):
    extra: str = ""


def test_table_name_from_entity() -> None:
    assert build_metadata(Person).table_name == "people"


def test_table_name_defaults_to_snake_case() -> None:
    assert build_metadata(AuditEntry).table_name == "audit_entry"


def test_table_name_from_type_naming() -> None:
    """Test the type-level naming strategy also names the table."""
    assert build_metadata(Account).table_name == "account"


def test_field_order_and_names() -> None:
    """Test columns follow declaration order with markers applied."""
    metadata = build_metadata(Person)
    assert metadata.field_names == ["id", "first_name", "last_name", "alias"]
    assert [f.native_name for f in metadata.fields] == ["id", "firstName", "lastName", "nick"]
    assert metadata.ignored_fields == ("scratch",)
    assert metadata.kind == RecordKind.DATACLASS


def test_identity_detection() -> None:
    metadata = build_metadata(Person)
    assert metadata.identity is not None
    assert metadata.identity_name == "id"
    assert metadata.identity.identity_type is int
    assert metadata.identity.nullable
    assert [f.schema_name for f in metadata.non_identity_fields] == ["first_name", "last_name", "alias"]


def test_string_identity() -> None:
    metadata = build_metadata(SampleTable)
    assert metadata.identity_name == "field1"
    assert metadata.identity is not None
    assert metadata.identity.identity_type is str


def test_type_without_identity() -> None:
    metadata = build_metadata(AuditEntry)
    assert metadata.identity is None
    assert metadata.identity_name is None
    with pytest.raises(MappingError, match="No unique id field") as exc_info:
        metadata.require_identity()
    assert exc_info.value.code is MappingErrorCode.MISSING_IDENTITY


def test_codecs_are_attached() -> None:
    metadata = build_metadata(Visit)
    seen_at = metadata.get_field("seen_at")
    assert seen_at is not None
    assert isinstance(seen_at.to_storage, CastDateTime)
    assert isinstance(seen_at.from_storage, CastDateTime)
    price = metadata.get_field("price")
    assert price is not None
    assert price.to_storage is not None
    assert price.from_storage is not None
    assert metadata.get_field("missing") is None


def test_plain_class_skips_classvars() -> None:
    metadata = build_metadata(Account)
    assert metadata.kind == RecordKind.CLASS
    assert metadata.field_names == ["accountid", "displayname"]
    assert metadata.identity_name == "accountid"


def test_msgspec_struct() -> None:
    metadata = build_metadata(Gadget)
    assert metadata.kind == RecordKind.MSGSPEC
    assert metadata.table_name == "Gadget"
    assert metadata.field_names == ["sku", "unitCount"]
    assert metadata.identity_name == "sku"


def test_entity_options_are_not_inherited() -> None:
    assert build_metadata(Inherited).table_name == "everything"
    assert build_metadata(Child).table_name == "child"


@pytest.mark.parametrize(
    "cls,code",
    [
        (TwoIdentities, MappingErrorCode.AMBIGUOUS_IDENTITY),
        (FloatIdentity, MappingErrorCode.UNSUPPORTED_IDENTITY_TYPE),
        (ClashingColumns, MappingErrorCode.DUPLICATE_COLUMN),
        (ForcedClash, MappingErrorCode.DUPLICATE_COLUMN),
    ],
    ids=["two_identities", "float_identity", "snake_case_clash", "forced_name_clash"],
)
def test_invalid_types_fail_at_construction(cls: type, code: MappingErrorCode) -> None:
    with pytest.raises(MappingError) as exc_info:
        build_metadata(cls)
    assert exc_info.value.code is code


def test_non_type_is_rejected() -> None:
    with pytest.raises(MappingError) as exc_info:
        build_metadata(Person(id=None, firstName="a", lastName="b"))  # type: ignore[arg-type]
    assert exc_info.value.code is MappingErrorCode.NOT_A_RECORD_TYPE


def test_metadata_is_immutable() -> None:
    metadata = build_metadata(Person)
    with pytest.raises(AttributeError):
        metadata.table_name = "other"  # type: ignore[misc]


def test_cache_returns_same_instance() -> None:
    cache = MetadataCache()
    first = cache.get(Person)
    assert isinstance(first, EntityMetadata)
    assert cache.get(Person) is first
    assert Person in cache
    assert len(cache) == 1


def test_cache_clear() -> None:
    cache = MetadataCache()
    cache.get(Person)
    cache.clear()
    assert Person not in cache
    assert len(cache) == 0


def test_cache_does_not_store_failures() -> None:
    cache = MetadataCache()
    with pytest.raises(MappingError):
        cache.get(TwoIdentities)
    assert TwoIdentities not in cache


def test_cache_concurrent_first_access() -> None:
    """Test racing threads all observe a single metadata instance."""
    cache = MetadataCache()
    results: list[EntityMetadata] = []
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        results.append(cache.get(Visit))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(result is results[0] for result in results)
    assert len(cache) == 1
