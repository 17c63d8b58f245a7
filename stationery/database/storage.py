"""Explicitly constructed storage client.

A ``Storage`` owns one engine and one session factory. Repositories and the
sale coordinator borrow sessions from it through :meth:`Storage.unit_of_work`,
which is the only place transactions are committed or rolled back.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from stationery.config import Settings
from stationery.core.errors import NotReadyError, StorageError
from stationery.database.base import Base
from stationery.database.engine import build_engine

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("products", "sales")


@dataclass(frozen=True)
class InitResult:
    ok: bool
    tables: tuple[str, ...] = ()
    error: Optional[str] = None


@dataclass
class Storage:
    database_url: str
    max_connections: int = 20
    connect_timeout: int = 2
    busy_timeout: int = 30
    _init_result: Optional[InitResult] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.engine = build_engine(
            self.database_url,
            max_connections=self.max_connections,
            connect_timeout=self.connect_timeout,
            busy_timeout=self.busy_timeout,
        )
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine.execution_options(sqlite_begin="IMMEDIATE"),
        )
        self._read_session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Storage":
        return cls(
            settings.DATABASE_URL,
            max_connections=settings.DB_MAX_CONNECTIONS,
            connect_timeout=settings.DB_CONNECT_TIMEOUT_SECONDS,
            busy_timeout=settings.DB_BUSY_TIMEOUT_SECONDS,
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    @property
    def init_result(self) -> Optional[InitResult]:
        return self._init_result

    @property
    def ready(self) -> bool:
        return self._init_result is not None and self._init_result.ok

    def initialize(self) -> InitResult:
        from stationery.models import import_all_models

        import_all_models()
        try:
            Base.metadata.create_all(bind=self.engine)
            existing = set(inspect(self.engine).get_table_names())
        except SQLAlchemyError as exc:
            logger.exception("Database initialization failed")
            self._init_result = InitResult(ok=False, error=str(exc))
            return self._init_result

        tables = tuple(name for name in REQUIRED_TABLES if name in existing)
        missing = [name for name in REQUIRED_TABLES if name not in existing]
        if missing:
            self._init_result = InitResult(
                ok=False,
                tables=tables,
                error="Missing tables: {}".format(", ".join(missing)),
            )
            logger.error("Database initialization incomplete: %s", self._init_result.error)
        else:
            self._init_result = InitResult(ok=True, tables=tables)
            logger.info("Database tables verified: %s", ", ".join(tables))
        return self._init_result

    @contextmanager
    def unit_of_work(self, db: Optional[Session] = None, *, read_only: bool = False) -> Iterator[Session]:
        """Yield a session whose writes commit or roll back together.

        When ``db`` is given the caller already owns a unit of work and the
        session is yielded untouched; the outer scope commits.

        Write units take the SQLite write lock when their transaction begins.
        ``read_only`` units begin a deferred transaction instead, so in WAL
        mode they read alongside an open writer.
        """
        if db is not None:
            yield db
            return
        if not self.ready:
            detail = self._init_result.error if self._init_result else None
            raise NotReadyError(
                "Database not initialized yet. Please wait a moment and try again."
                if detail is None
                else f"Database initialization failed: {detail}"
            )

        factory = self._read_session_factory if read_only else self._session_factory
        session = factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Storage fault, unit of work rolled back")
            raise StorageError("Storage failure, the operation was rolled back") from exc
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    def reset_sequences(self, db: Session) -> None:
        if self.dialect == "sqlite":
            has_sequence_table = db.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'")
            ).first()
            if has_sequence_table:
                db.execute(
                    text("DELETE FROM sqlite_sequence WHERE name IN ('products', 'sales')")
                )
        elif self.dialect == "postgresql":
            db.execute(text("ALTER SEQUENCE products_id_seq RESTART WITH 1"))
            db.execute(text("ALTER SEQUENCE sales_id_seq RESTART WITH 1"))
        else:
            logger.warning("Identifier sequence reset is not supported for %s", self.dialect)

    def dispose(self) -> None:
        self.engine.dispose()


__all__ = ["InitResult", "REQUIRED_TABLES", "Storage"]
