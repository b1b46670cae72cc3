import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import create_engine, Session, SQLModel

from ..core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


# Helper function to ensure URL format is correct
def normalize_db_url(url: str) -> str:
    # Sync drivers only; async variants in .env are mapped back
    url = url.replace("postgres://", "postgresql://")
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


def build_engine(database_url: str, echo: bool = False) -> Engine:
    url = normalize_db_url(database_url)

    # --- CONFIGURATION FOR SQLITE ---
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False}
        )

    # --- CONFIGURATION FOR POSTGRESQL ---
    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


def check_connection(engine: Engine) -> None:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise StoreUnavailableError(f"Database connection failed: {exc}") from exc


def open_engine(database_url: Optional[str], echo: bool = False) -> Engine:
    """Create the process-wide engine and make sure the store answers.

    Raises ``StoreUnavailableError`` when no URL is configured or the
    connectivity probe fails.
    """
    if not database_url:
        raise StoreUnavailableError("DATABASE_URL is missing")

    try:
        engine = build_engine(database_url, echo=echo)
    except (SQLAlchemyError, ValueError) as exc:
        raise StoreUnavailableError(f"Invalid DATABASE_URL: {exc}") from exc

    check_connection(engine)
    logger.info("Database connected (%s)", engine.dialect.name)
    return engine


# Create database tables on startup
def init_db(engine: Engine) -> None:
    # Registers User and Task on SQLModel.metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


# Dependency: one session per request over the shared engine
def get_session(request: Request) -> Iterator[Session]:
    with Session(request.app.state.engine) as session:
        yield session
