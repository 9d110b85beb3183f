"""
Shared fixtures.

Environment is set before any ``portfolio`` import: the DB session module
refuses to load without DATABASE_URL and logging writes under LOG_DIR.
Each test gets its own in-memory SQLite database.
"""
import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="portfolio_logs_"))

from datetime import datetime
from decimal import Decimal

import httpx
import pytest_asyncio

from portfolio.api.deps import get_db
from portfolio.app import app
from portfolio.db.models import Order, Transaction
from portfolio.db.session import Base, build_engine, build_session_factory


@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


def make_transaction(reference, created_at, with_order=True, **overrides):
    """
    Build a Transaction (and its Order) ready to be added to a session.
    """
    fields = dict(
        reference=reference,
        amount=Decimal("5000.00"),
        currency="NGN",
        status="success",
        service_id="web-app",
        service_name="Web Application Development",
        customer_email="client@example.com",
        metadata_json={"channel": "card"},
        created_at=created_at,
        updated_at=created_at,
    )
    fields.update(overrides)
    tx = Transaction(**fields)
    if with_order:
        tx.order = Order(
            status="paid",
            customer_email=fields["customer_email"],
            service_id=fields["service_id"],
            service_name=fields["service_name"],
            created_at=created_at,
            updated_at=created_at,
        )
    return tx


@pytest_asyncio.fixture
async def seeded_transactions(db):
    txs = [
        make_transaction("TX2", datetime(2024, 1, 1, 9, 30)),
        make_transaction("TX1", datetime(2024, 1, 2, 14, 0)),
        make_transaction("TX3", datetime(2023, 12, 31, 23, 59), with_order=False),
    ]
    db.add_all(txs)
    await db.commit()
    return txs
