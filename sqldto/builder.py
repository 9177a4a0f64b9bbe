"""SQL statement synthesis.

Every function here is pure: it renders SQL text from entity metadata and a
:class:`~sqldto.dialect.SqlMode`. Placeholders are always positional ``?``
markers, and the parameter order follows the metadata field order.
"""

from typing import TYPE_CHECKING

from sqldto.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqldto.dialect import SqlMode
    from sqldto.mapping.metadata import EntityMetadata, FieldDescriptor

__all__ = (
    "bulk_insert_with_identity",
    "bulk_insert_without_identity",
    "count_by_key",
    "delete",
    "insert_with_identity",
    "insert_without_identity",
    "select_all",
    "select_by_key",
    "update",
)


def _placeholders(count: int) -> str:
    return ", ".join(["?"] * count)


def _columns(fields: "Sequence[FieldDescriptor]", sql_mode: "SqlMode") -> str:
    return ", ".join(sql_mode.quote_name(f.schema_name) for f in fields)


def _render_insert(
    metadata: "EntityMetadata", sql_mode: "SqlMode", fields: "Sequence[FieldDescriptor]", rows: int
) -> str:
    values = ", ".join([f"({_placeholders(len(fields))})"] * rows)
    return f"INSERT INTO {sql_mode.quote_name(metadata.table_name)} ({_columns(fields, sql_mode)}) VALUES {values}"


def select_by_key(metadata: "EntityMetadata", sql_mode: "SqlMode") -> str:
    """``SELECT * FROM t WHERE id = ?``.

    Raises:
        MappingError: The type has no identity field.
    """
    identity = metadata.require_identity()
    return (
        f"SELECT * FROM {sql_mode.quote_name(metadata.table_name)} "
        f"WHERE {sql_mode.quote_name(identity.schema_name)} = ?"
    )


def select_all(metadata: "EntityMetadata", sql_mode: "SqlMode") -> str:
    """``SELECT * FROM t``."""
    return f"SELECT * FROM {sql_mode.quote_name(metadata.table_name)}"


def insert_with_identity(metadata: "EntityMetadata", sql_mode: "SqlMode") -> str:
    """Insert every mapped column, identity included.

    Used when the key is assigned by the caller, e.g. a UUID, and for types
    without an identity field.
    """
    return _render_insert(metadata, sql_mode, metadata.fields, 1)


def insert_without_identity(metadata: "EntityMetadata", sql_mode: "SqlMode") -> str:
    """Insert every mapped column except the identity, which the database generates.

    Raises:
        MappingError: The type has no identity field.
    """
    metadata.require_identity()
    return _render_insert(metadata, sql_mode, metadata.non_identity_fields, 1)


def update(metadata: "EntityMetadata", sql_mode: "SqlMode") -> str:
    """``UPDATE t SET a = ?, b = ? WHERE id = ?``.

    Parameters must be given as the non-identity values in metadata order,
    followed by the identity value.

    Raises:
        MappingError: The type has no identity field.
    """
    identity = metadata.require_identity()
    assignments = ", ".join(f"{sql_mode.quote_name(f.schema_name)} = ?" for f in metadata.non_identity_fields)
    return (
        f"UPDATE {sql_mode.quote_name(metadata.table_name)} SET {assignments} "
        f"WHERE {sql_mode.quote_name(identity.schema_name)} = ?"
    )


def delete(metadata: "EntityMetadata", sql_mode: "SqlMode") -> str:
    """``DELETE FROM t WHERE id = ?``.

    Raises:
        MappingError: The type has no identity field.
    """
    identity = metadata.require_identity()
    return (
        f"DELETE FROM {sql_mode.quote_name(metadata.table_name)} "
        f"WHERE {sql_mode.quote_name(identity.schema_name)} = ?"
    )


def count_by_key(metadata: "EntityMetadata", sql_mode: "SqlMode") -> str:
    """``SELECT COUNT(*) FROM t WHERE id = ?``.

    Raises:
        MappingError: The type has no identity field.
    """
    identity = metadata.require_identity()
    return (
        f"SELECT COUNT(*) FROM {sql_mode.quote_name(metadata.table_name)} "
        f"WHERE {sql_mode.quote_name(identity.schema_name)} = ?"
    )


def _check_chunk_size(chunk_size: int) -> None:
    if chunk_size < 1:
        msg = f"Bulk insert needs at least one row per statement, got {chunk_size}"
        raise ValidationError(msg)


def bulk_insert_with_identity(metadata: "EntityMetadata", sql_mode: "SqlMode", chunk_size: int) -> str:
    """One INSERT with ``chunk_size`` value tuples covering every column.

    Raises:
        ValidationError: ``chunk_size`` is below one.
    """
    _check_chunk_size(chunk_size)
    return _render_insert(metadata, sql_mode, metadata.fields, chunk_size)


def bulk_insert_without_identity(metadata: "EntityMetadata", sql_mode: "SqlMode", chunk_size: int) -> str:
    """One INSERT with ``chunk_size`` value tuples covering the non-identity columns.

    Raises:
        ValidationError: ``chunk_size`` is below one.
    """
    _check_chunk_size(chunk_size)
    return _render_insert(metadata, sql_mode, metadata.non_identity_fields, chunk_size)
