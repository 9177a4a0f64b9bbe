"""Declarative markers for record types.

Field markers are attached through :data:`typing.Annotated`::

    @entity(table="people")
    @dataclass
    class Person:
        id: Annotated[Optional[int], Identity()]
        first_name: str
        nick: Annotated[str, SqlName("alias")]
        scratch: Annotated[str, Ignore()] = ""
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union

from sqldto.mapping.naming import resolve_naming
from sqldto.protocols import FromStorage, KeyStrategy, ToStorage

__all__ = (
    "ENTITY_OPTIONS_ATTR",
    "EntityOptions",
    "FieldOptions",
    "Identity",
    "Ignore",
    "entity",
    "get_entity_options",
)

ENTITY_OPTIONS_ATTR = "__sqldto_entity__"

_C = TypeVar("_C", bound=type)


class Identity:
    """Marks the field holding the table's unique key."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Identity()"


class Ignore:
    """Excludes a field from mapping."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Ignore()"


@dataclass(frozen=True)
class FieldOptions:
    """Capabilities declared on one field, folded from its ``Annotated`` markers."""

    naming: "Optional[KeyStrategy]" = None
    to_storage: "Optional[ToStorage]" = None
    from_storage: "Optional[FromStorage]" = None
    identity: bool = False
    ignore: bool = False

    @classmethod
    def from_markers(cls, markers: Iterable[Any]) -> "FieldOptions":
        """Fold field markers into one options struct.

        A marker may carry several capabilities at once. When two markers carry
        the same capability, the later one wins.

        Args:
            markers: The metadata of an ``Annotated`` annotation.

        Returns:
            The folded options.
        """
        naming = None
        to_storage = None
        from_storage = None
        identity = False
        ignore = False
        for marker in markers:
            if isinstance(marker, Identity):
                identity = True
            if isinstance(marker, Ignore):
                ignore = True
            if isinstance(marker, KeyStrategy):
                naming = marker
            if isinstance(marker, ToStorage):
                to_storage = marker
            if isinstance(marker, FromStorage):
                from_storage = marker
        return cls(naming=naming, to_storage=to_storage, from_storage=from_storage, identity=identity, ignore=ignore)


@dataclass(frozen=True)
class EntityOptions:
    """Type-level mapping options set by :func:`entity`."""

    table: "Optional[KeyStrategy]" = None
    naming: "Optional[KeyStrategy]" = None


def entity(
    table: "Union[KeyStrategy, str, None]" = None,
    naming: "Union[KeyStrategy, str, None]" = None,
) -> "Callable[[_C], _C]":
    """Class decorator configuring how a record type maps to its table.

    Args:
        table: Table name override, either a strategy applied to the class name
            or a literal table name.
        naming: Default strategy for field names, also used for the table name
            when ``table`` is not given. Falls back to snake case.

    Returns:
        A decorator returning the class unchanged apart from its options.
    """
    options = EntityOptions(table=resolve_naming(table), naming=resolve_naming(naming))

    def decorator(cls: "_C") -> "_C":
        setattr(cls, ENTITY_OPTIONS_ATTR, options)
        return cls

    return decorator


def get_entity_options(cls: type) -> EntityOptions:
    # Only options declared on the class itself apply, not inherited ones
    options = cls.__dict__.get(ENTITY_OPTIONS_ATTR)
    if isinstance(options, EntityOptions):
        return options
    return EntityOptions()
