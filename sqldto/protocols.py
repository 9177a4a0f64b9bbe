"""Runtime-checkable protocols for sqldto.

The client protocols describe what the persistence layer needs from an
underlying database client. The mapping protocols describe the capabilities a
field marker can carry: renaming a key, converting a value on its way into
storage and converting it on its way back out.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqldto.typing import Row, StatementParameters

__all__ = (
    "ClientProtocol",
    "FromStorage",
    "KeyStrategy",
    "PreparedStatementProtocol",
    "ToStorage",
)


@runtime_checkable
class PreparedStatementProtocol(Protocol):
    """A prepared statement handle owned by a client."""

    def execute(self, parameters: "StatementParameters") -> bool:
        """Execute the statement with positional or named parameters."""
        ...

    def fetch_one(self) -> "Optional[Row]":
        """Fetch the next row of the last execution, or ``None`` when exhausted."""
        ...

    def fetch_all(self) -> "list[Row]":
        """Fetch all remaining rows of the last execution."""
        ...


@runtime_checkable
class ClientProtocol(Protocol):
    """Database client capability consumed by :class:`~sqldto.connection.Connection`."""

    def prepare(self, sql: str) -> PreparedStatementProtocol: ...

    def begin_transaction(self) -> bool: ...

    def commit(self) -> bool: ...

    def rollback(self) -> bool: ...

    def last_insert_id(self) -> str: ...

    def error_code(self) -> Optional[str]: ...

    def error_info(self) -> Sequence[Any]: ...


@runtime_checkable
class KeyStrategy(Protocol):
    """Maps a native attribute or class name onto a schema identifier."""

    def get_field_name(self, name: str) -> str: ...


@runtime_checkable
class ToStorage(Protocol):
    """Converts a record value into the value written to the database."""

    def to_storage(self, value: Any) -> Any: ...


@runtime_checkable
class FromStorage(Protocol):
    """Converts a database value into the value set on the record."""

    def from_storage(self, value: Any) -> Any: ...
