from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..db import crud
from ..logging_config import get_logger
from ..site_settings import SiteSettings, settings_from_rows, settings_to_rows
from .deps import get_db
from .schemas import ErrorOut

logger = get_logger("portfolio.api.settings")

router = APIRouter(prefix="/admin", tags=["settings"])


async def _load_settings(db) -> SiteSettings:
    rows = await crud.list_site_settings(db)
    return settings_from_rows((s.key, s.value, s.category) for s in rows)


@router.get("/settings", response_model=SiteSettings, responses={500: {"model": ErrorOut}})
async def get_settings(db=Depends(get_db)):
    """
    Current site settings; keys never stored take their seeded defaults.
    """
    try:
        settings = await _load_settings(db)
    except Exception as e:
        logger.exception("Failed to fetch settings: %s", e)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch settings"})
    return settings.to_payload()


@router.put("/settings", response_model=SiteSettings, responses={500: {"model": ErrorOut}})
async def update_settings(payload: SiteSettings, db=Depends(get_db)):
    """
    Overwrite the site settings with the admin dashboard's form values.
    """
    rows = settings_to_rows(payload)
    logger.info("Updating %d site settings", len(rows))
    try:
        for row in rows:
            await crud.upsert_site_setting(db, **row)
        await db.commit()
        settings = await _load_settings(db)
    except Exception as e:
        await db.rollback()
        logger.exception("Failed to update settings: %s", e)
        return JSONResponse(status_code=500, content={"error": "Failed to update settings"})
    return settings.to_payload()
