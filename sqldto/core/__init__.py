from sqldto.core.cache import CacheKey, CacheStats, StatementCache

__all__ = ("CacheKey", "CacheStats", "StatementCache")
