"""Entity metadata extraction.

Metadata describes how one record type maps onto a table: the table name, the
ordered columns and the optional identity column. It is derived once per type
from the type's field declarations and their ``Annotated`` markers, then held
unchanged for the lifetime of the owning :class:`MetadataCache`.
"""

import dataclasses
import threading
from dataclasses import dataclass
from typing import Any, Final, Optional, get_args, get_type_hints

from sqldto.exceptions import MappingError, MappingErrorCode
from sqldto.mapping.markers import FieldOptions, get_entity_options
from sqldto.mapping.naming import DEFAULT_NAMING
from sqldto.protocols import FromStorage, ToStorage
from sqldto.utils.logging import get_logger
from sqldto.utils.type_guards import (
    is_annotated,
    is_classvar,
    is_dataclass,
    is_msgspec_struct,
    is_nullable,
    unwrap_optional,
)

__all__ = (
    "IDENTITY_TYPES",
    "EntityMetadata",
    "FieldDescriptor",
    "MetadataCache",
    "RecordKind",
    "build_metadata",
)

logger = get_logger("mapping.metadata")

IDENTITY_TYPES: Final[tuple[type, ...]] = (int, str)
"""Native types an identity field may have; generated keys are coerced into these."""


class RecordKind:
    DATACLASS: Final = "dataclass"
    MSGSPEC: Final = "msgspec"
    CLASS: Final = "class"


@dataclass(frozen=True)
class FieldDescriptor:
    """One mapped column.

    Attributes:
        schema_name: Column name used in SQL and in row mappings.
        native_name: Attribute name on the record.
        is_identity: Whether this is the identity column.
        nullable: Whether the native type accepts ``None``.
        python_type: Declared native type, with ``Annotated`` metadata removed.
        to_storage: Write-half codec, if any.
        from_storage: Read-half codec, if any.
    """

    schema_name: str
    native_name: str
    is_identity: bool = False
    nullable: bool = False
    python_type: Any = Any
    to_storage: Optional[ToStorage] = None
    from_storage: Optional[FromStorage] = None

    @property
    def identity_type(self) -> Any:
        return unwrap_optional(self.python_type)


@dataclass(frozen=True)
class EntityMetadata:
    """Derived description of how a record type maps to a table."""

    record_type: type
    table_name: str
    fields: tuple[FieldDescriptor, ...]
    identity: Optional[FieldDescriptor] = None
    kind: str = RecordKind.CLASS
    ignored_fields: tuple[str, ...] = ()

    @property
    def field_names(self) -> list[str]:
        """Schema names of all mapped fields in metadata order."""
        return [f.schema_name for f in self.fields]

    @property
    def identity_name(self) -> Optional[str]:
        """Schema name of the identity field, if the type has one."""
        return self.identity.schema_name if self.identity is not None else None

    @property
    def non_identity_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if not f.is_identity)

    def get_field(self, schema_name: str) -> Optional[FieldDescriptor]:
        for field in self.fields:
            if field.schema_name == schema_name:
                return field
        return None

    def require_identity(self) -> FieldDescriptor:
        """Return the identity field or fail.

        Raises:
            MappingError: The type declares no identity field.
        """
        if self.identity is None:
            msg = f"No unique id field for {self.table_name!r} ({self.record_type.__name__})"
            raise MappingError(msg, MappingErrorCode.MISSING_IDENTITY)
        return self.identity


def _declared_fields(cls: type, hints: "dict[str, Any]") -> "tuple[str, list[str]]":
    if is_dataclass(cls):
        return RecordKind.DATACLASS, [f.name for f in dataclasses.fields(cls)]
    if is_msgspec_struct(cls):
        return RecordKind.MSGSPEC, list(cls.__struct_fields__)
    return RecordKind.CLASS, [name for name, annotation in hints.items() if not is_classvar(annotation)]


def build_metadata(cls: type) -> EntityMetadata:
    """Introspect a record type.

    Args:
        cls: A dataclass, a msgspec struct or a plain annotated class.

    Raises:
        MappingError: ``cls`` is not a class, declares more than one identity
            field, declares an identity of an unsupported type, or maps two
            fields onto the same column.

    Returns:
        The metadata for ``cls``.
    """
    if not isinstance(cls, type):
        msg = f"Expected a record type, got {cls!r}"
        raise MappingError(msg, MappingErrorCode.NOT_A_RECORD_TYPE)

    entity_options = get_entity_options(cls)
    default_naming = entity_options.naming or DEFAULT_NAMING
    table_name = (entity_options.table or default_naming).get_field_name(cls.__name__)

    hints = get_type_hints(cls, include_extras=True)
    kind, names = _declared_fields(cls, hints)

    fields: list[FieldDescriptor] = []
    ignored: list[str] = []
    identity: Optional[FieldDescriptor] = None
    seen: dict[str, str] = {}

    for name in names:
        annotation = hints.get(name, Any)
        markers: tuple[Any, ...] = ()
        if is_annotated(annotation):
            annotation, *rest = get_args(annotation)
            markers = tuple(rest)
        options = FieldOptions.from_markers(markers)
        if options.ignore:
            ignored.append(name)
            continue

        schema_name = (options.naming or default_naming).get_field_name(name)
        if schema_name in seen:
            msg = f"Fields {seen[schema_name]!r} and {name!r} of {cls.__name__} both map to column {schema_name!r}"
            raise MappingError(msg, MappingErrorCode.DUPLICATE_COLUMN)
        seen[schema_name] = name

        descriptor = FieldDescriptor(
            schema_name=schema_name,
            native_name=name,
            is_identity=options.identity,
            nullable=is_nullable(annotation),
            python_type=annotation,
            to_storage=options.to_storage,
            from_storage=options.from_storage,
        )

        if options.identity:
            if identity is not None:
                msg = f"{cls.__name__} declares more than one identity field: {identity.native_name!r} and {name!r}"
                raise MappingError(msg, MappingErrorCode.AMBIGUOUS_IDENTITY)
            if descriptor.identity_type not in IDENTITY_TYPES:
                msg = (
                    f"Identity {cls.__name__}.{name} is of type {descriptor.identity_type!r}; "
                    "only int and str identities are supported"
                )
                raise MappingError(msg, MappingErrorCode.UNSUPPORTED_IDENTITY_TYPE)
            identity = descriptor

        fields.append(descriptor)

    return EntityMetadata(
        record_type=cls,
        table_name=table_name,
        fields=tuple(fields),
        identity=identity,
        kind=kind,
        ignored_fields=tuple(ignored),
    )


class MetadataCache:
    """Memoizes :func:`build_metadata` per record type.

    The cache never evicts: one entry is kept per distinct type for the
    lifetime of the cache. Concurrent first access may build the metadata
    twice; the first stored instance is returned to every caller.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: dict[type, EntityMetadata] = {}
        self._lock = threading.Lock()

    def get(self, cls: type) -> EntityMetadata:
        metadata = self._entries.get(cls)
        if metadata is not None:
            return metadata

        built = build_metadata(cls)
        with self._lock:
            metadata = self._entries.setdefault(cls, built)
        if metadata is built:
            logger.debug(
                "Built metadata for %s: table=%s columns=%s identity=%s",
                cls.__name__,
                built.table_name,
                built.field_names,
                built.identity_name,
                extra={"extra_fields": {"table": built.table_name, "record_type": cls.__name__}},
            )
        return metadata

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, cls: object) -> bool:
        return cls in self._entries

    def __len__(self) -> int:
        return len(self._entries)
