"""Conversion between records and rows."""

import dataclasses
from typing import TYPE_CHECKING, Any

from sqldto.exceptions import MappingError, MappingErrorCode
from sqldto.mapping.metadata import RecordKind
from sqldto.utils.logging import get_logger
from sqldto.utils.type_guards import dataclass_field_default

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqldto.mapping.metadata import EntityMetadata
    from sqldto.typing import Row

__all__ = (
    "assign_identity",
    "coerce_identity",
    "dehydrate",
    "get_identity_value",
    "hydrate",
    "identity_to_storage",
    "is_unset_identity",
)

logger = get_logger("mapping.mapper")


def hydrate(row: "Mapping[str, Any]", metadata: "EntityMetadata") -> Any:
    """Build a record from a row.

    Columns of the row that are not mapped are ignored. A mapped column missing
    from the row becomes ``None`` when the field is nullable.

    Args:
        row: Column name to storage value.
        metadata: Metadata of the record type to build.

    Raises:
        MappingError: A non-nullable field is missing from the row.

    Returns:
        A new instance of ``metadata.record_type``.
    """
    values: dict[str, Any] = {}
    for field in metadata.fields:
        if field.schema_name in row:
            value = row[field.schema_name]
            if field.from_storage is not None:
                value = field.from_storage.from_storage(value)
            values[field.native_name] = value
        elif field.nullable:
            values[field.native_name] = None
        else:
            msg = (
                f"The field {field.schema_name!r} was missing from the record set "
                f"when creating a {metadata.record_type.__name__}"
            )
            raise MappingError(msg, MappingErrorCode.MISSING_FIELD)

    cls = metadata.record_type
    if metadata.kind == RecordKind.MSGSPEC:
        return cls(**values)

    # Records are rebuilt without running __init__, the row is the source of truth
    instance = cls.__new__(cls)
    if metadata.kind == RecordKind.DATACLASS and metadata.ignored_fields:
        declared = {f.name: f for f in dataclasses.fields(cls)}
        for name in metadata.ignored_fields:
            default = dataclass_field_default(declared[name])
            if default is not dataclasses.MISSING:
                object.__setattr__(instance, name, default)
    for name, value in values.items():
        object.__setattr__(instance, name, value)
    return instance


def dehydrate(record: Any, metadata: "EntityMetadata") -> "Row":
    """Turn a record into a row, in metadata order.

    Args:
        record: An instance of ``metadata.record_type``.
        metadata: Metadata of the record type.

    Returns:
        Column name to storage value, write-half codecs applied.
    """
    row: Row = {}
    for field in metadata.fields:
        value = getattr(record, field.native_name)
        if field.to_storage is not None:
            value = field.to_storage.to_storage(value)
        row[field.schema_name] = value
    return row


def get_identity_value(record: Any, metadata: "EntityMetadata") -> Any:
    """Read the current identity value of a record.

    Raises:
        MappingError: The record type declares no identity field.
    """
    identity = metadata.require_identity()
    return getattr(record, identity.native_name, None)


def is_unset_identity(value: Any) -> bool:
    """Whether an identity value means "not assigned yet".

    ``None``, ``0`` and ``""`` are unset; booleans are never identities.
    """
    if value is None:
        return True
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        return not value
    return False


def coerce_identity(value: Any, metadata: "EntityMetadata") -> Any:
    """Coerce a generated key into the identity field's native type.

    Raises:
        MappingError: The type has no identity field, or the value cannot be
            represented as the identity's type.
    """
    identity = metadata.require_identity()
    target = identity.identity_type
    if isinstance(value, target) and not isinstance(value, bool):
        return value
    if target is int and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    elif target is str and isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    msg = (
        f"Unable to set unique value on {metadata.record_type.__name__}: "
        f"ID is of type {getattr(target, '__name__', target)!r} and a value of type {type(value).__name__!r} was given"
    )
    raise MappingError(msg, MappingErrorCode.UNSUPPORTED_IDENTITY_TYPE)


def assign_identity(record: Any, value: Any, metadata: "EntityMetadata") -> Any:
    """Set the identity field of a record, coercing ``str``/``int`` as needed.

    Returns:
        The coerced value that was assigned.
    """
    coerced = coerce_identity(value, metadata)
    setattr(record, metadata.require_identity().native_name, coerced)
    logger.debug("Assigned identity %r to %s", coerced, metadata.record_type.__name__)
    return coerced


def identity_to_storage(value: Any, metadata: "EntityMetadata") -> Any:
    """Convert an identity value into the form bound in key lookups.

    The identity field's write codec is applied, so lookups match what
    :func:`dehydrate` stored.

    Raises:
        MappingError: The record type declares no identity field.
    """
    identity = metadata.require_identity()
    if identity.to_storage is None or value is None:
        return value
    return identity.to_storage.to_storage(value)
