"""Prepared statements bound to a result target."""

from typing import TYPE_CHECKING, Any, Generic, Optional

from sqldto.mapping.mapper import dehydrate, hydrate
from sqldto.mapping.primitive import Primitive
from sqldto.typing import T
from sqldto.utils.logging import get_logger
from sqldto.utils.type_guards import is_record

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqldto.mapping.metadata import EntityMetadata, MetadataCache
    from sqldto.protocols import PreparedStatementProtocol
    from sqldto.typing import StatementParameters

__all__ = ("Statement",)

logger = get_logger("statement")


class Statement(Generic[T]):
    """A client prepared statement whose rows are mapped onto ``target``.

    ``target`` decides how fetched rows come back:

    - a record type: rows are hydrated into instances of it,
    - ``bool``, ``int``, ``float`` or ``str``: the first column is cast to it,
    - ``None`` or ``dict``: rows are returned as plain dicts.

    Args:
        handle: The client's prepared statement.
        sql: The SQL text that was prepared.
        target: What rows map onto.
        metadata_cache: Cache used to map records given as parameters and
            rows fetched into a record target.
    """

    __slots__ = ("_handle", "_metadata", "_metadata_cache", "_primitive", "sql", "target")

    def __init__(
        self,
        handle: "PreparedStatementProtocol",
        sql: str,
        target: Any,
        metadata_cache: "MetadataCache",
    ) -> None:
        self._handle = handle
        self.sql = sql
        self.target = target
        self._metadata_cache = metadata_cache
        self._primitive = Primitive.create(target)
        self._metadata: Optional[EntityMetadata] = None
        if target is not None and target is not dict and self._primitive is None:
            self._metadata = metadata_cache.get(target)

    @property
    def handle(self) -> "PreparedStatementProtocol":
        return self._handle

    def execute(self, parameters: "StatementParameters | Any" = ()) -> bool:
        """Execute the statement.

        Args:
            parameters: Positional values, a mapping of named values, or a
                record, which is dehydrated into named values.

        Returns:
            Whatever success flag the client reports.
        """
        if is_record(parameters):
            parameters = dehydrate(parameters, self._metadata_cache.get(type(parameters)))
        logger.debug(
            "Executing: %s (%d parameters)",
            self.sql,
            len(parameters),
            extra={"extra_fields": {"sql": self.sql, "parameter_count": len(parameters)}},
        )
        return self._handle.execute(parameters)

    def fetch_one(self) -> "Optional[T]":
        """Fetch and map the next row.

        Returns:
            The mapped row, or ``None`` when no rows are left.
        """
        row = self._handle.fetch_one()
        if row is None:
            return None
        return self._map_row(row)

    def fetch_all(self) -> "list[T]":
        """Fetch and map all remaining rows."""
        return [self._map_row(row) for row in self._handle.fetch_all()]

    def _map_row(self, row: "Mapping[str, Any]") -> Any:
        if self._metadata is not None:
            return hydrate(row, self._metadata)
        if self._primitive is not None:
            return self._primitive.cast_result(row)
        return dict(row)

    def __repr__(self) -> str:
        return f"Statement({self.sql!r}, target={getattr(self.target, '__name__', self.target)!r})"
