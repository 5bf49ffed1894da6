"""
Relational database connection management following FastAPI best practices
"""

from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import config
from app.core.errors import ErrorResponse
from app.core.logger import logger
from app.core.telemetry import instrument_engine
from app.db.base import Base


class Database:
    """Database connection manager"""

    engine: Optional[AsyncEngine] = None
    session_factory: Optional[async_sessionmaker] = None


db = Database()


async def connect_to_database(database_url: str = None):
    """Create the engine and session factory, creating tables when configured"""
    url = database_url or config.database_url
    logger.info("Connecting to database...")

    try:
        db.engine = create_async_engine(url, echo=config.database_echo, pool_pre_ping=True)
        db.session_factory = async_sessionmaker(db.engine, expire_on_commit=False)
        instrument_engine(db.engine)

        async with db.engine.begin() as conn:
            if config.database_create_tables:
                await conn.run_sync(Base.metadata.create_all)
            else:
                await conn.execute(text("SELECT 1"))

        logger.info(
            f"Successfully connected to database '{db.engine.url.database}'",
            metadata={
                "event": "database_connected",
                "dialect": db.engine.dialect.name,
                "database": db.engine.url.database,
                "host": db.engine.url.host,
            }
        )
    except SQLAlchemyError as e:
        logger.error(
            f"Could not connect to database: {e}",
            metadata={"event": "database_connection_error", "error": str(e)}
        )
        raise ErrorResponse(f"Could not connect to database: {e}", status_code=503)


async def close_database_connection():
    """Dispose of the engine and its pooled connections"""
    logger.info("Closing connection to database...")
    if db.engine is not None:
        await db.engine.dispose()
    db.engine = None
    db.session_factory = None


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request"""
    if db.session_factory is None:
        await connect_to_database()
    async with db.session_factory() as session:
        yield session


async def ping_database() -> None:
    """Round-trip a trivial statement; raises if the database is unreachable"""
    if db.engine is None:
        await connect_to_database()
    async with db.engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
