"""DB-API 2.0 client adapter.

Wraps any PEP 249 connection (``sqlite3``, ``pymysql``, ``psycopg`` ...) so it
satisfies :class:`~sqldto.protocols.ClientProtocol`. DB-API has no separate
prepare step, so a prepared statement here is the SQL text plus the cursor of
its most recent execution.
"""

import contextlib
import re
import sys
from collections.abc import Mapping, Sequence
from typing import Any, Final, Optional

from sqldto.utils.logging import get_logger

__all__ = ("DBAPIClient", "DBAPIPreparedStatement", "qmark_to_format")

logger = get_logger("adapters.dbapi")

FORMAT_PARAMSTYLES: Final[frozenset[str]] = frozenset({"format", "pyformat"})

# Quoted literals and identifiers are matched first so their "?" survive
_QMARK_RE = re.compile(
    r"(?P<squote>'(?:''|[^'])*')|"
    r'(?P<dquote>"(?:""|[^"])*")|'
    r"(?P<btick>`(?:``|[^`])*`)|"
    r"(?P<qmark>\?)"
)


def _qmark_replacer(match: "re.Match[str]") -> str:
    if match.group("qmark") is not None:
        return "%s"
    return match.group(0)


def qmark_to_format(sql: str) -> str:
    """Rewrite ``?`` placeholders to ``%s``, leaving quoted text untouched."""
    return _QMARK_RE.sub(_qmark_replacer, sql)


class DBAPIPreparedStatement:
    """A statement prepared on a :class:`DBAPIClient`."""

    __slots__ = ("_client", "_cursor", "_driver_sql", "sql")

    def __init__(self, client: "DBAPIClient", sql: str) -> None:
        self._client = client
        self.sql = sql
        self._driver_sql = client.translate(sql)
        self._cursor: Any = None

    def execute(self, parameters: "Sequence[Any] | Mapping[str, Any]" = ()) -> bool:
        """Run the statement on a fresh cursor.

        Driver errors propagate unchanged after being recorded on the client.
        """
        self._close_cursor()
        params = parameters if isinstance(parameters, Mapping) else tuple(parameters)
        cursor = self._client.connection.cursor()
        try:
            cursor.execute(self._driver_sql, params)
        except Exception as exc:
            self._client.record_error(exc)
            with contextlib.suppress(Exception):
                cursor.close()
            raise
        self._cursor = cursor
        self._client.record_success(cursor)
        return True

    def fetch_one(self) -> "Optional[dict[str, Any]]":
        if self._cursor is None or self._cursor.description is None:
            return None
        row = self._cursor.fetchone()
        if row is None:
            return None
        return self._to_dict(row)

    def fetch_all(self) -> "list[dict[str, Any]]":
        if self._cursor is None or self._cursor.description is None:
            return []
        return [self._to_dict(row) for row in self._cursor.fetchall()]

    def _to_dict(self, row: Any) -> "dict[str, Any]":
        if isinstance(row, Mapping):
            return dict(row)
        column_names = [column[0] for column in self._cursor.description]
        return dict(zip(column_names, row))

    def _close_cursor(self) -> None:
        if self._cursor is not None:
            with contextlib.suppress(Exception):
                self._cursor.close()
            self._cursor = None


class DBAPIClient:
    """Adapts a DB-API 2.0 connection to the client protocol.

    Args:
        connection: An open DB-API connection.
        paramstyle: The driver's parameter style. Defaults to the
            ``paramstyle`` attribute of the connection's driver module when it
            can be found, else ``"qmark"``. For ``format`` and ``pyformat``
            drivers the ``?`` placeholders are rewritten to ``%s``.
    """

    def __init__(self, connection: Any, paramstyle: Optional[str] = None) -> None:
        self.connection = connection
        self.paramstyle = paramstyle or _detect_paramstyle(connection)
        self._last_insert_id: Any = None
        self._last_error: Optional[BaseException] = None

    def translate(self, sql: str) -> str:
        if self.paramstyle in FORMAT_PARAMSTYLES:
            return qmark_to_format(sql)
        return sql

    def prepare(self, sql: str) -> DBAPIPreparedStatement:
        return DBAPIPreparedStatement(self, sql)

    def begin_transaction(self) -> bool:
        if getattr(self.connection, "in_transaction", False):
            return False
        cursor = self.connection.cursor()
        try:
            cursor.execute("BEGIN")
        finally:
            cursor.close()
        return True

    def commit(self) -> bool:
        self.connection.commit()
        return True

    def rollback(self) -> bool:
        self.connection.rollback()
        return True

    def last_insert_id(self) -> str:
        if self._last_insert_id is None:
            return ""
        return str(self._last_insert_id)

    def error_code(self) -> Optional[str]:
        if self._last_error is None:
            return None
        code = getattr(self._last_error, "sqlstate", None) or getattr(self._last_error, "sqlite_errorname", None)
        if code is None and self._last_error.args:
            code = self._last_error.args[0] if isinstance(self._last_error.args[0], int) else None
        return str(code) if code is not None else type(self._last_error).__name__

    def error_info(self) -> "list[Any]":
        if self._last_error is None:
            return []
        return [self.error_code(), type(self._last_error).__name__, str(self._last_error)]

    def record_success(self, cursor: Any) -> None:
        self._last_error = None
        lastrowid = getattr(cursor, "lastrowid", None)
        # Drivers report 0 or None when the statement generated no key
        if lastrowid:
            self._last_insert_id = lastrowid

    def record_error(self, exc: BaseException) -> None:
        self._last_error = exc
        logger.debug("Driver error: %s", exc)


def _detect_paramstyle(connection: Any) -> str:
    module_name = type(connection).__module__.split(".", 1)[0]
    driver = sys.modules.get(module_name)
    paramstyle = getattr(driver, "paramstyle", None)
    return paramstyle if isinstance(paramstyle, str) else "qmark"
