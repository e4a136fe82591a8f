#database file:
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .core.settings import settings

logger = logging.getLogger(__name__)


def make_engine(url: str) -> Engine:
    """Build an engine; SQLite connections get foreign keys switched on."""
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_engine(url, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL)
SessionFlashFit = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionFlashFit()
    try:
        yield db
    finally:
        db.close()


def init_database(bind: Engine) -> None:
    """Create the schema and seed the canonical data once."""
    from . import models  # noqa: F401  registers the tables on Base.metadata
    from .services.seed import seed_all

    Base.metadata.create_all(bind=bind)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=bind)
    db = factory()
    try:
        seed_all(db)
    finally:
        db.close()
    logger.info("Database ready (%s)", bind.url.get_backend_name())
