from sqldto.mapping.codecs import (
    CastDateTime,
    CastIp2Long,
    Codec,
    FromDateTime,
    IntoDateTime,
    IntoViaConstructor,
    JsonValue,
    ToString,
)
from sqldto.mapping.mapper import assign_identity, dehydrate, get_identity_value, hydrate, is_unset_identity
from sqldto.mapping.markers import EntityOptions, FieldOptions, Identity, Ignore, entity
from sqldto.mapping.metadata import EntityMetadata, FieldDescriptor, MetadataCache, build_metadata
from sqldto.mapping.naming import LowerCase, NoTranslation, SnakeCase, SqlName
from sqldto.mapping.primitive import Primitive

__all__ = (
    "CastDateTime",
    "CastIp2Long",
    "Codec",
    "EntityMetadata",
    "EntityOptions",
    "FieldDescriptor",
    "FieldOptions",
    "FromDateTime",
    "Identity",
    "Ignore",
    "IntoDateTime",
    "IntoViaConstructor",
    "JsonValue",
    "LowerCase",
    "MetadataCache",
    "NoTranslation",
    "Primitive",
    "SnakeCase",
    "SqlName",
    "ToString",
    "assign_identity",
    "build_metadata",
    "dehydrate",
    "entity",
    "get_identity_value",
    "hydrate",
    "is_unset_identity",
)
