from datetime import datetime

from conftest import make_transaction
from portfolio.db import crud
from portfolio.db.models import SiteSetting
from portfolio.site_settings import DEFAULT_SETTING_ROWS


async def test_list_transactions_empty_store(db):
    txs = await crud.list_transactions(db)
    assert txs == []


async def test_list_transactions_newest_first(db, seeded_transactions):
    txs = await crud.list_transactions(db)
    assert [t.reference for t in txs] == ["TX1", "TX2", "TX3"]


async def test_list_transactions_loads_order(db, seeded_transactions):
    txs = await crud.list_transactions(db)
    by_ref = {t.reference: t for t in txs}
    assert by_ref["TX1"].order is not None
    assert by_ref["TX1"].order.transaction_id == by_ref["TX1"].id
    assert by_ref["TX3"].order is None


async def test_list_transactions_same_timestamp_newest_id_first(db):
    ts = datetime(2024, 3, 1, 12, 0)
    db.add(make_transaction("FIRST", ts))
    await db.commit()
    db.add(make_transaction("SECOND", ts))
    await db.commit()

    txs = await crud.list_transactions(db)
    assert [t.reference for t in txs] == ["SECOND", "FIRST"]


async def test_get_transaction_by_reference(db, seeded_transactions):
    tx = await crud.get_transaction_by_reference(db, "TX2")
    assert tx is not None
    assert tx.reference == "TX2"
    assert tx.order.service_name == "Web Application Development"


async def test_get_transaction_by_reference_unknown(db, seeded_transactions):
    assert await crud.get_transaction_by_reference(db, "does-not-exist") is None
    assert await crud.get_transaction_by_reference(db, "") is None
    assert await crud.get_transaction_by_reference(db, "tx1") is None


async def test_upsert_site_setting_inserts_then_overwrites(db):
    await crud.upsert_site_setting(db, "site_name", "First", category="general")
    await db.commit()
    await crud.upsert_site_setting(db, "site_name", "Second", category="general")
    await db.commit()

    rows = await crud.list_site_settings(db)
    assert [(r.key, r.value) for r in rows] == [("site_name", "Second")]


async def test_seed_default_settings_keeps_existing_rows(db):
    db.add(SiteSetting(key="site_name", value="Edited by admin", category="general"))
    await db.commit()

    inserted = await crud.seed_default_settings(db)
    assert inserted == len(DEFAULT_SETTING_ROWS) - 1

    setting = await crud.get_site_setting(db, "site_name")
    assert setting.value == "Edited by admin"

    # Second run is a no-op
    assert await crud.seed_default_settings(db) == 0
