import os
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from core.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


def _casefold(value):
    return value.casefold() if value is not None else None


def _on_connect(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()
    # SQLite's lower() only folds ASCII
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


class Database:
    """Owns the engine and session factory for one SQLite file.

    Opened once at startup with init_db() and closed at shutdown.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @property
    def path(self) -> str:
        return self.engine.url.database

    @contextmanager
    def session(self):
        """
        Context manager for database sessions.
        Automatically closes session when done.

        Usage:
            with store.session() as db:
                records = load_waiting(db)
        """
        db: Session = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def close(self):
        self.engine.dispose()


def make_engine(db_path: str) -> Engine:
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _on_connect)
    return engine


def init_db(db_path: str) -> Database:
    """Open (or create) the store at db_path and make sure the table exists.

    Raises StorageUnavailable if the file cannot be opened or the schema
    cannot be created.
    """
    # Register models on Base.metadata before create_all
    import models.patient_record  # noqa: F401

    folder = os.path.dirname(os.path.abspath(db_path))
    try:
        os.makedirs(folder, exist_ok=True)
    except OSError as e:
        logger.error("Cannot create folder for DB %s: %s", db_path, e)
        raise StorageUnavailable(f"Cannot open DB at {db_path}: {e}") from e

    engine = make_engine(db_path)
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error("Cannot open DB %s: %s", db_path, e)
        engine.dispose()
        raise StorageUnavailable(f"Cannot open DB at {db_path}: {e}") from e

    logger.info("Opened patient store at %s", db_path)
    return Database(engine)
