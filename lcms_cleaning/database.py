import logging
from typing import Any, Callable, List, NamedTuple, Optional, TypeVar

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import CursorResult, Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()

T = TypeVar("T")


class QueryResult(NamedTuple):
    rows: List[dict]
    rowcount: int


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, pool_size: int = 5, max_overflow: int = 10,
                     echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for `database_url`."""
    logger.info("Creating SQLAlchemy engine...")
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_size=pool_size,
            max_overflow=max_overflow,
            echo=echo
        )
    logger.info("SQLAlchemy engine created successfully")
    return engine


class Gateway:
    """Runs statements and transactions against the relational store.

    One session is acquired per call and always closed again. Statements
    issued by a transaction body must go through the session it is handed
    so that nothing commits unless the whole body succeeds.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @classmethod
    def from_url(cls, database_url: str, **kwargs) -> "Gateway":
        return cls(create_db_engine(database_url, **kwargs))

    def execute(self, statement, db: Optional[Session] = None) -> QueryResult:
        """Execute a single statement.

        With `db` the statement joins that session's open transaction and
        nothing is committed here; otherwise it runs in its own session and
        commits straight away.
        """
        if db is not None:
            return self._collect(db.execute(statement))

        db = self.SessionLocal()
        try:
            result = self._collect(db.execute(statement))
            db.commit()
            return result
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def execute_transaction(self, body: Callable[[Session], T]) -> T:
        """Run `body(db)` in one transaction, committing only if it returns normally."""
        db = self.SessionLocal()
        try:
            result = body(db)
            db.commit()
            return result
        except Exception as e:
            logger.warning(f"Rolling back transaction: {str(e)}")
            db.rollback()
            raise
        finally:
            db.close()

    def check_connection(self) -> bool:
        """Test the database connection."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection test failed: {str(e)}")
            return False

    def create_all(self):
        from . import models  # noqa: F401  registers the tables on Base
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created successfully")

    def drop_all(self):
        from . import models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connections disposed")

    @staticmethod
    def _collect(result: Any) -> QueryResult:
        # ORM selects come back as a ChunkedIteratorResult; only DML has a bare CursorResult
        if isinstance(result, CursorResult) and not result.returns_rows:
            return QueryResult(rows=[], rowcount=result.rowcount)
        rows = [dict(row) for row in result.mappings()]
        return QueryResult(rows=rows, rowcount=len(rows))

