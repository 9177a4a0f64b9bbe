"""Key naming strategies.

Each strategy turns a native name (an attribute or a class name) into the
identifier used in SQL and in row mappings. Strategies can be attached to a
field through ``Annotated`` or to a record type through
:func:`~sqldto.mapping.markers.entity`.
"""

from typing import Union

from sqldto.protocols import KeyStrategy
from sqldto.utils.text import snake_case

__all__ = (
    "DEFAULT_NAMING",
    "LowerCase",
    "NoTranslation",
    "SnakeCase",
    "SqlName",
    "resolve_naming",
)


class SnakeCase:
    """``someFieldName`` becomes ``some_field_name``."""

    __slots__ = ()

    def get_field_name(self, name: str) -> str:
        return snake_case(name)

    def __repr__(self) -> str:
        return "SnakeCase()"


class LowerCase:
    """``SomeFieldName`` becomes ``somefieldname``."""

    __slots__ = ()

    def get_field_name(self, name: str) -> str:
        return name.lower()

    def __repr__(self) -> str:
        return "LowerCase()"


class NoTranslation:
    """The native name is used verbatim."""

    __slots__ = ()

    def get_field_name(self, name: str) -> str:
        return name

    def __repr__(self) -> str:
        return "NoTranslation()"


class SqlName:
    """Force a fixed identifier, whatever the native name is.

    Args:
        forced_name: The identifier to use in SQL.
    """

    __slots__ = ("forced_name",)

    def __init__(self, forced_name: str) -> None:
        self.forced_name = forced_name

    def get_field_name(self, name: str) -> str:
        return self.forced_name

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SqlName) and other.forced_name == self.forced_name

    def __hash__(self) -> int:
        return hash((SqlName, self.forced_name))

    def __repr__(self) -> str:
        return f"SqlName({self.forced_name!r})"


DEFAULT_NAMING: KeyStrategy = SnakeCase()


def resolve_naming(strategy: "Union[KeyStrategy, str, None]") -> "KeyStrategy | None":
    """Normalize a user supplied naming option.

    Args:
        strategy: A strategy, a literal identifier or ``None``.

    Returns:
        The strategy, a :class:`SqlName` for a literal identifier, or ``None``.
    """
    if strategy is None or isinstance(strategy, KeyStrategy):
        return strategy
    if isinstance(strategy, str):
        return SqlName(strategy)
    msg = f"Expected a naming strategy or a string, got {type(strategy).__name__}"
    raise TypeError(msg)
