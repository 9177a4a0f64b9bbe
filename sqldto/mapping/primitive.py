"""Scalar results.

Queries such as ``SELECT COUNT(*) ...`` return a single column that is cast
to a builtin scalar type instead of being hydrated into a record.
"""

from collections.abc import Mapping
from typing import Any, Final, Optional

__all__ = ("PRIMITIVE_TYPES", "Primitive")

PRIMITIVE_TYPES: Final[tuple[type, ...]] = (bool, float, int, str)


class Primitive:
    """Casts the first column of a row to a builtin scalar type."""

    __slots__ = ("type",)

    def __init__(self, type_: type) -> None:
        self.type = type_

    @classmethod
    def create(cls, type_: Any) -> "Optional[Primitive]":
        """Create a caster for ``type_``.

        Returns:
            A caster, or ``None`` when ``type_`` is not a supported scalar type.
        """
        if type_ in PRIMITIVE_TYPES:
            return cls(type_)
        return None

    def cast_result(self, row: "Mapping[str, Any]") -> Any:
        value = next(iter(row.values()), None)
        if value is None:
            return None
        return self.type(value)

    def __repr__(self) -> str:
        return f"Primitive({self.type.__name__})"
