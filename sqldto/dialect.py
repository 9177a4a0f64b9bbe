"""SQL modes.

The only dialect difference modelled is how identifiers are quoted: MySQL
uses backticks, ANSI SQL uses double quotes.
"""

from enum import Enum
from functools import lru_cache
from typing import Optional

from sqlglot import exp

__all__ = ("SqlMode",)


class SqlMode(Enum):
    """Identifier quoting style for generated SQL."""

    MYSQL = "mysql"
    ANSI = "ansi"

    @property
    def sqlglot_dialect(self) -> Optional[str]:
        """Name of the sqlglot dialect rendering identifiers for this mode."""
        return "mysql" if self is SqlMode.MYSQL else None

    @property
    def start_quote(self) -> str:
        return "`" if self is SqlMode.MYSQL else '"'

    @property
    def end_quote(self) -> str:
        return self.start_quote

    def quote_name(self, name: str) -> str:
        """Quote an identifier, escaping embedded quote characters.

        Args:
            name: Table or column name.

        Returns:
            The quoted identifier, e.g. ```field1``` or ``"field1"``.
        """
        return _quote(name, self.sqlglot_dialect)

    @classmethod
    def from_scheme(cls, scheme: str) -> "SqlMode":
        """Pick the mode for a database URL scheme.

        ``mysql`` and ``mariadb`` (with or without a ``+driver`` suffix) use
        backticks; every other scheme uses ANSI quoting.
        """
        family = scheme.split("+", 1)[0].lower()
        return cls.MYSQL if family in {"mysql", "mariadb"} else cls.ANSI


@lru_cache(maxsize=1024)
def _quote(name: str, dialect: Optional[str]) -> str:
    return exp.to_identifier(name, quoted=True).sql(dialect=dialect)
