# portfolio/db/crud.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..site_settings import DEFAULT_SETTING_ROWS
from .models import SiteSetting, Transaction


async def list_transactions(db: AsyncSession) -> List[Transaction]:
    """
    All transactions, newest first, each with its order loaded.
    """
    q = (
        select(Transaction)
        .options(selectinload(Transaction.order))
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    res = await db.execute(q)
    return list(res.scalars().all())


async def get_transaction_by_reference(db: AsyncSession, reference: str) -> Optional[Transaction]:
    q = (
        select(Transaction)
        .options(selectinload(Transaction.order))
        .where(Transaction.reference == reference)
    )
    res = await db.execute(q)
    return res.scalars().first()


async def list_site_settings(db: AsyncSession) -> List[SiteSetting]:
    q = select(SiteSetting).order_by(SiteSetting.key)
    res = await db.execute(q)
    return list(res.scalars().all())


async def get_site_setting(db: AsyncSession, key: str) -> Optional[SiteSetting]:
    q = select(SiteSetting).where(SiteSetting.key == key)
    res = await db.execute(q)
    return res.scalars().first()


async def upsert_site_setting(
    db: AsyncSession,
    key: str,
    value: Optional[str],
    category: str = "general",
    description: Optional[str] = None,
) -> SiteSetting:
    """
    Insert or overwrite a single setting row. The caller commits.
    """
    setting = await get_site_setting(db, key)
    if setting is None:
        setting = SiteSetting(key=key, value=value, category=category, description=description)
        db.add(setting)
    else:
        setting.value = value
        setting.category = category
        if description is not None:
            setting.description = description
    await db.flush()
    return setting


async def seed_default_settings(db: AsyncSession) -> int:
    """
    Write the default setting rows whose keys are not stored yet.

    Existing rows are left alone so admin edits survive restarts.
    Returns the number of rows inserted.
    """
    existing = {s.key for s in await list_site_settings(db)}
    inserted = 0
    for row in DEFAULT_SETTING_ROWS:
        if row["key"] in existing:
            continue
        db.add(SiteSetting(**row))
        inserted += 1
    if inserted:
        await db.commit()
    return inserted
