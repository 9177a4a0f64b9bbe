"""Value codecs.

A codec converts a field value between its native form on the record and the
form stored in the database. Either direction is optional: a marker that only
implements :class:`~sqldto.protocols.ToStorage` is applied when writing, one
that only implements :class:`~sqldto.protocols.FromStorage` when reading.
Markers from different declarations on the same field combine, so
``Annotated[Money, ToString(), IntoViaConstructor(Money)]`` stores
``str(money)`` and rebuilds ``Money(value)`` on the way back.

``None`` passes through every built-in codec unchanged.
"""

import datetime
import ipaddress
from collections.abc import Callable
from typing import Any, Final, Optional

from sqldto.utils.serializers import from_json, to_json

__all__ = (
    "DATETIME_FORMAT",
    "CastDateTime",
    "CastIp2Long",
    "Codec",
    "FromDateTime",
    "IntoDateTime",
    "IntoViaConstructor",
    "JsonValue",
    "ToString",
)

DATETIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


class FromDateTime:
    """Store a :class:`datetime.datetime` as ``YYYY-MM-DD HH:MM:SS`` text."""

    __slots__ = ()

    def to_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return value.strftime(DATETIME_FORMAT)


class IntoDateTime:
    """Read ``YYYY-MM-DD HH:MM:SS`` text into a :class:`datetime.datetime`."""

    __slots__ = ()

    def from_storage(self, value: Any) -> Any:
        if value is None or isinstance(value, datetime.datetime):
            return value
        return datetime.datetime.strptime(value, DATETIME_FORMAT)


class CastDateTime(FromDateTime, IntoDateTime):
    """Datetime in both directions."""

    __slots__ = ()


class CastIp2Long:
    """Pack a dotted-quad IPv4 address into an unsigned 32-bit integer and back.

    ``"221.32.3.143"`` is stored as ``3709862799``.
    """

    __slots__ = ()

    def to_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return int(ipaddress.IPv4Address(value))

    def from_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return str(ipaddress.IPv4Address(int(value)))


class JsonValue:
    """Store structured values as compact JSON text."""

    __slots__ = ()

    def to_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return to_json(value)

    def from_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return from_json(value)


class ToString:
    """Store the string conversion of the value. Write only."""

    __slots__ = ()

    def to_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return str(value)


class IntoViaConstructor:
    """Pass the stored value as the sole constructor argument of ``target``. Read only.

    Args:
        target: The type (or any callable) to construct.
    """

    __slots__ = ("target",)

    def __init__(self, target: "Callable[[Any], Any]") -> None:
        self.target = target

    def from_storage(self, value: Any) -> Any:
        if value is None:
            return None
        return self.target(value)

    def __repr__(self) -> str:
        return f"IntoViaConstructor({getattr(self.target, '__name__', self.target)!r})"


class Codec:
    """Ad-hoc codec built from plain callables.

    Only the directions that are given are exposed, so a ``Codec`` with just
    ``to_storage`` is write only.

    Args:
        to_storage: Conversion applied when writing.
        from_storage: Conversion applied when reading.
    """

    def __init__(
        self,
        to_storage: "Optional[Callable[[Any], Any]]" = None,
        from_storage: "Optional[Callable[[Any], Any]]" = None,
    ) -> None:
        if to_storage is None and from_storage is None:
            msg = "Codec requires at least one of to_storage or from_storage"
            raise ValueError(msg)
        if to_storage is not None:
            self.to_storage = to_storage
        if from_storage is not None:
            self.from_storage = from_storage
