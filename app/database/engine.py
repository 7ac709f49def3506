import importlib
import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from app.config import get_settings
from app.database.base import Base

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 30

MODEL_MODULES = (
    "app.models.product",
    "app.models.sale",
)


def _is_memory_sqlite(url) -> bool:
    return url.database in (None, "", ":memory:") or url.query.get("mode") == "memory"


def create_app_engine(database_url: str) -> Engine:
    """Engine for the ledger database.

    SQLite connections may be shared across FastAPI's worker threads; an
    in-memory database keeps a single connection so every session sees the
    same tables.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, pool_pre_ping=True)

    in_memory = _is_memory_sqlite(url)
    kwargs = {}
    if in_memory:
        kwargs["poolclass"] = StaticPool
    sqlite_engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SECONDS},
        **kwargs,
    )

    @event.listens_for(sqlite_engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA busy_timeout={}".format(SQLITE_BUSY_TIMEOUT_SECONDS * 1000))
            if not in_memory:
                try:
                    cursor.execute("PRAGMA journal_mode=WAL")
                except sqlite3.DatabaseError:
                    logger.warning("SQLite WAL mode unavailable; using default journal.")
        finally:
            cursor.close()

    return sqlite_engine


engine = create_app_engine(get_settings().DATABASE_URL)


def import_models() -> None:
    for module_name in MODEL_MODULES:
        importlib.import_module(module_name)


def init_db(bind=None) -> None:
    """Create the products and sales tables if they do not exist yet."""
    import_models()
    Base.metadata.create_all(bind=bind if bind is not None else engine)
    logger.info("Database schema ready.")


__all__ = ["create_app_engine", "engine", "import_models", "init_db"]
