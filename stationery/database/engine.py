import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def is_sqlite_memory_url(url) -> bool:
    url = make_url(url)
    if url.get_backend_name() != "sqlite":
        return False
    if url.database in (None, "", ":memory:"):
        return True
    return url.query.get("mode") == "memory"


def build_engine(
    database_url: str,
    *,
    max_connections: int = 20,
    connect_timeout: int = 2,
    busy_timeout: int = 30,
) -> Engine:
    db_url = make_url(database_url)
    is_sqlite = db_url.get_backend_name() == "sqlite"
    is_sqlite_memory = is_sqlite_memory_url(db_url)

    connect_args: dict[str, object] = {}
    engine_kwargs: dict[str, object] = dict(pool_pre_ping=True)
    if is_sqlite:
        connect_args = {"check_same_thread": False, "timeout": busy_timeout}
        if is_sqlite_memory:
            engine_kwargs.update(poolclass=StaticPool)
    else:
        connect_args = {"connect_timeout": connect_timeout}
        engine_kwargs.update(pool_size=max_connections, max_overflow=0)

    engine = create_engine(database_url, connect_args=connect_args, **engine_kwargs)

    if is_sqlite:
        busy_timeout_ms = busy_timeout * 1000

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, _connection_record):
            # Transactions are opened explicitly in _begin_immediate.
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms}")
                if not is_sqlite_memory:
                    try:
                        cursor.execute("PRAGMA journal_mode=WAL")
                        cursor.execute("PRAGMA synchronous=NORMAL")
                    except sqlite3.DatabaseError:
                        logger.warning("Unable to enable WAL journal mode for %s", db_url.database)
            finally:
                cursor.close()

        @event.listens_for(engine, "begin")
        def _begin(conn):
            # Writers take the lock up front so a stock check and the matching
            # decrement cannot interleave with another writer.
            mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
            conn.exec_driver_sql(f"BEGIN {mode}")

    return engine


__all__ = ["build_engine", "is_sqlite_memory_url"]
