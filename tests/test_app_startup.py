from unittest.mock import patch

from portfolio import app as app_module
from portfolio.db import crud
from portfolio.site_settings import DEFAULT_SETTING_ROWS


async def test_startup_seeds_default_settings(session_factory, db):
    with patch.object(app_module, "AsyncSessionLocal", session_factory):
        await app_module.on_startup()

    rows = await crud.list_site_settings(db)
    assert sorted(r.key for r in rows) == sorted(row["key"] for row in DEFAULT_SETTING_ROWS)


async def test_startup_survives_missing_tables(engine, session_factory):
    from portfolio.db.session import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    with patch.object(app_module, "AsyncSessionLocal", session_factory), \
         patch.object(app_module, "logger") as mock_logger:
        await app_module.on_startup()

    mock_logger.exception.assert_called_once()
