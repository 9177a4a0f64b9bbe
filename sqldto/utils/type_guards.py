"""Type guard functions for runtime type checking in sqldto."""

import dataclasses
import types
from typing import TYPE_CHECKING, Annotated, Any, ClassVar, Union, get_args, get_origin

import msgspec

from sqldto.typing import DataclassProtocol

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

__all__ = (
    "dataclass_field_default",
    "is_annotated",
    "is_classvar",
    "is_dataclass",
    "is_dataclass_instance",
    "is_msgspec_struct",
    "is_nullable",
    "is_record",
    "unwrap_optional",
)

_NONE_TYPE = type(None)


def is_dataclass_instance(obj: Any) -> "TypeGuard[DataclassProtocol]":
    """Check if an object is a dataclass instance.

    Args:
        obj: An object to check.

    Returns:
        True if the object is a dataclass instance.
    """
    return not isinstance(obj, type) and hasattr(type(obj), "__dataclass_fields__")


def is_dataclass(obj: Any) -> "TypeGuard[DataclassProtocol]":
    """Check if an object is a dataclass.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if isinstance(obj, type) and hasattr(obj, "__dataclass_fields__"):
        return True
    return is_dataclass_instance(obj)


def is_msgspec_struct(obj: Any) -> "TypeGuard[msgspec.Struct]":
    """Check if a value is a msgspec struct or struct type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if isinstance(obj, type):
        return issubclass(obj, msgspec.Struct)
    return isinstance(obj, msgspec.Struct)


def is_record(obj: Any) -> bool:
    """Check if a value is a record instance that can be written as a row.

    Mappings, sequences, strings and other scalars are not records.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if obj is None or isinstance(obj, type):
        return False
    if is_dataclass_instance(obj) or is_msgspec_struct(obj):
        return True
    return hasattr(obj, "__dict__") and not isinstance(obj, (types.ModuleType, types.FunctionType))


def is_annotated(annotation: Any) -> bool:
    return get_origin(annotation) is Annotated


def is_classvar(annotation: Any) -> bool:
    if is_annotated(annotation):
        annotation = get_args(annotation)[0]
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def is_nullable(annotation: Any) -> bool:
    """Check whether ``None`` is an accepted value for an annotation.

    Args:
        annotation: A resolved type annotation, without ``Annotated`` metadata.

    Returns:
        True for ``Any``, ``None``, ``Optional[X]`` and ``X | None``.
    """
    if annotation is Any or annotation is None or annotation is _NONE_TYPE:
        return True
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return _NONE_TYPE in get_args(annotation)
    return False


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``None`` from an optional annotation.

    Args:
        annotation: A resolved type annotation.

    Returns:
        The single non-``None`` member of an optional union, otherwise the
        annotation unchanged.
    """
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not _NONE_TYPE]
        if len(members) == 1:
            return members[0]
    return annotation


def dataclass_field_default(field: "dataclasses.Field[Any]") -> Any:
    """Return the default for a dataclass field, or ``dataclasses.MISSING``."""
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return dataclasses.MISSING
