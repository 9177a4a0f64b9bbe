from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Protocol, Union, runtime_checkable

from typing_extensions import TypeAlias, TypeVar

__all__ = (
    "DataclassProtocol",
    "ModelT",
    "Row",
    "StatementParameters",
    "T",
)


@runtime_checkable
class DataclassProtocol(Protocol):
    """Protocol for instance checking dataclasses."""

    __dataclass_fields__: "ClassVar[dict[str, Any]]"


Row: TypeAlias = dict[str, Any]
"""A fetched or dehydrated row: column name to raw storage value."""

StatementParameters: TypeAlias = Union[Sequence[Any], Mapping[str, Any]]
"""Positional or named parameters accepted by a prepared statement."""

T = TypeVar("T")
ModelT = TypeVar("ModelT")
"""Type variable for mapped record types.

:class:`~sqldto.typing.ModelT`
"""
