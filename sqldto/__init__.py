"""sqldto: map plain Python records onto SQL tables."""

from sqldto import builder, exceptions, mapping, typing, utils
from sqldto.__metadata__ import __version__
from sqldto.adapters.dbapi import DBAPIClient
from sqldto.config import ConnectionConfig, DatabaseURL
from sqldto.connection import Connection, PersistAction, decide_persist_action
from sqldto.core.cache import CacheStats, StatementCache
from sqldto.dialect import SqlMode
from sqldto.exceptions import (
    DtoError,
    ImproperConfigurationError,
    MappingError,
    MappingErrorCode,
    ValidationError,
)
from sqldto.mapping import (
    CastDateTime,
    CastIp2Long,
    Codec,
    FromDateTime,
    Identity,
    Ignore,
    IntoDateTime,
    IntoViaConstructor,
    JsonValue,
    LowerCase,
    NoTranslation,
    SnakeCase,
    SqlName,
    ToString,
    entity,
)
from sqldto.protocols import ClientProtocol, PreparedStatementProtocol
from sqldto.statement import Statement

__all__ = (
    "CacheStats",
    "CastDateTime",
    "CastIp2Long",
    "ClientProtocol",
    "Codec",
    "Connection",
    "ConnectionConfig",
    "DBAPIClient",
    "DatabaseURL",
    "DtoError",
    "FromDateTime",
    "Identity",
    "Ignore",
    "ImproperConfigurationError",
    "IntoDateTime",
    "IntoViaConstructor",
    "JsonValue",
    "LowerCase",
    "MappingError",
    "MappingErrorCode",
    "NoTranslation",
    "PersistAction",
    "PreparedStatementProtocol",
    "SnakeCase",
    "SqlMode",
    "SqlName",
    "Statement",
    "StatementCache",
    "ToString",
    "ValidationError",
    "__version__",
    "builder",
    "decide_persist_action",
    "entity",
    "exceptions",
    "mapping",
    "typing",
    "utils",
)
