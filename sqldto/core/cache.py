"""Prepared statement cache.

Prepared statements are keyed on the SQL text together with the target the
result rows are mapped onto. Entries live as long as the cache: there is no
eviction, so a process issuing an unbounded number of distinct ad-hoc SQL
strings grows this cache without limit.
"""

import threading
from typing import TYPE_CHECKING, Any, Callable, Final, Optional

from mypy_extensions import mypyc_attr

from sqldto.utils.logging import get_logger

if TYPE_CHECKING:
    from sqldto.statement import Statement

__all__ = (
    "CacheKey",
    "CacheStats",
    "StatementCache",
    "create_cache_key",
)

logger = get_logger("core.cache")

CACHE_STATS_SLOTS: Final = ("hits", "misses", "total_operations")


@mypyc_attr(allow_interpreted_subclasses=False)
class CacheKey:
    """Immutable cache key.

    Args:
        key_data: Tuple of hashable values that uniquely identify the cached item
    """

    __slots__ = ("_hash", "_key_data")

    def __init__(self, key_data: tuple[Any, ...]) -> None:
        self._key_data = key_data
        self._hash = hash(key_data)

    @property
    def key_data(self) -> tuple[Any, ...]:
        """Get the key data tuple."""
        return self._key_data

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if type(other) is not CacheKey:
            return False
        if self._hash != other._hash:
            return False
        return self._key_data == other._key_data

    def __repr__(self) -> str:
        return f"CacheKey({self._key_data!r})"


@mypyc_attr(allow_interpreted_subclasses=False)
class CacheStats:
    """Cache statistics tracking."""

    __slots__ = CACHE_STATS_SLOTS

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0
        self.total_operations = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate as percentage."""
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0

    def record_hit(self) -> None:
        self.hits += 1
        self.total_operations += 1

    def record_miss(self) -> None:
        self.misses += 1
        self.total_operations += 1

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.total_operations = 0

    def __repr__(self) -> str:
        return f"CacheStats(hit_rate={self.hit_rate:.1f}%, hits={self.hits}, misses={self.misses})"


def create_cache_key(sql: str, target: Any) -> CacheKey:
    """Build the key for a ``(sql, target)`` pair."""
    return CacheKey((sql, target))


@mypyc_attr(allow_interpreted_subclasses=False)
class StatementCache:
    """Unbounded, thread-safe cache of prepared statements."""

    __slots__ = ("_cache", "_lock", "_stats")

    def __init__(self) -> None:
        self._cache: "dict[CacheKey, Statement]" = {}
        self._lock = threading.RLock()
        self._stats = CacheStats()

    def get(self, sql: str, target: Any) -> "Optional[Statement]":
        """Look up a prepared statement.

        Args:
            sql: SQL text.
            target: Record type, scalar type or ``None`` the rows map onto.

        Returns:
            The cached statement, or ``None``.
        """
        key = create_cache_key(sql, target)
        with self._lock:
            statement = self._cache.get(key)
            if statement is None:
                self._stats.record_miss()
            else:
                self._stats.record_hit()
            return statement

    def get_or_create(self, sql: str, target: Any, factory: "Callable[[], Statement]") -> "Statement":
        """Return the cached statement for ``(sql, target)``, preparing it on first use.

        ``factory`` runs outside the lock. If two threads race on the same key
        both prepare, and the statement stored first is returned to both.

        Args:
            sql: SQL text.
            target: Record type, scalar type or ``None`` the rows map onto.
            factory: Prepares a new statement.

        Returns:
            The cached statement.
        """
        cached = self.get(sql, target)
        if cached is not None:
            return cached
        logger.debug("Preparing statement: %s", sql)
        created = factory()
        with self._lock:
            return self._cache.setdefault(create_cache_key(sql, target), created)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._stats.reset()

    def get_stats(self) -> CacheStats:
        return self._stats

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: "tuple[str, Any]") -> bool:
        return create_cache_key(*key) in self._cache
