from sqldto.adapters.dbapi import DBAPIClient, DBAPIPreparedStatement

__all__ = ("DBAPIClient", "DBAPIPreparedStatement")
