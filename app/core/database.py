# app/core/database.py

import ssl
from typing import AsyncGenerator

from loguru import logger
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine
)
from sqlalchemy.pool import NullPool
from sqlalchemy import event, text

from app.core.config import settings


# ----------------------------------------------------
# Normalise URL (plain postgres URLs -> asyncpg driver)
# ----------------------------------------------------
def get_database_url() -> str:
    url = settings.DATABASE_URL
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


# ----------------------------------------------------
# SSL for hosted Postgres poolers
# ----------------------------------------------------
def make_ssl():
    ctx = ssl.create_default_context()
    if not settings.DB_SSL_VERIFY:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


def make_connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}

    if settings.ENV == "prod":
        return {
            "ssl": make_ssl(),
            "statement_cache_size": 0,           # disable prepared statements
            "prepared_statement_name_func": None # prevent SQLAlchemy from naming statements
        }
    return {}


DATABASE_URL = get_database_url()

logger.info(f"Configuring database engine ({DATABASE_URL.split(':', 1)[0]})")


# ----------------------------------------------------
# Engine (NO POOLING -> external pooler / SQLite file)
# ----------------------------------------------------
engine = create_async_engine(
    DATABASE_URL,
    echo=settings.DB_ECHO,
    future=True,
    connect_args=make_connect_args(DATABASE_URL),
    pool_pre_ping=True,
    poolclass=NullPool,
)


# SQLite leaves foreign keys off unless asked, per connection
if DATABASE_URL.startswith("sqlite"):
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ----------------------------------------------------
# Sessions
# ----------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


# ----------------------------------------------------
# Create tables
# ----------------------------------------------------
async def init_db():
    # make sure every table is registered on the metadata
    from app.models import audit, event, event_registration, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


# ----------------------------------------------------
# Test Connection
# ----------------------------------------------------
async def test_connection():
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.debug("DB connection OK")
