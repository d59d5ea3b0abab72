from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool
from sqlalchemy.schema import CreateTable

from cltodo.core.config import Settings, get_settings
from cltodo.utils.logger import get_logger

logger = get_logger(__name__)

# Create a base class for our models
Base = declarative_base()


# SQLite tables are created STRICT so rows that do not match the
# declared column types are rejected by the engine itself.
@compiles(CreateTable, "sqlite")
def _create_strict_table(element, compiler, **kw):
    return compiler.visit_create_table(element, **kw).rstrip() + " STRICT\n\n"


def sqlite_url(path: Path) -> str:
    return f"sqlite:///{path}"


def create_db_engine(database_url: str, settings: Settings | None = None) -> Engine:
    # Create the SQLAlchemy engine with a small bounded pool
    settings = settings or get_settings()
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=QueuePool,
        pool_size=settings.POOL_SIZE,
        max_overflow=0,
        echo=settings.DEBUG,
    )


# init db
def init_db(engine: Engine) -> None:
    # important: ensures models are registered before creating tables
    from cltodo import models  # noqa: F401

    # create-if-absent only, existing tables are never dropped or altered
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.debug("Database tables initialized on %s", engine.url)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    # Create sessionmaker factory
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
