from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(), override=False)

import os
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL not set in .env")

SQL_ECHO = os.getenv("SQL_ECHO", "0").lower() in ("1", "true", "yes")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for `url`.

    SQLite (aiosqlite) is used for local development and tests; an in-memory
    database must share one connection or every session sees an empty schema.
    """
    kwargs = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if make_url(url).database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    return create_async_engine(url, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


# Async engine
engine = build_engine(DATABASE_URL, echo=SQL_ECHO)

# Async session factory
AsyncSessionLocal = build_session_factory(engine)

Base = declarative_base()
