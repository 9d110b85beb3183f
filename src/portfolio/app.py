"""
portfolio/app.py

FastAPI application entrypoint for the portfolio backend.

This module wires together:
- Logging configuration (file-based under logs/)
- CORS and basic request logging middleware
- Routers under portfolio/api/ (site settings, payment transactions)
"""

import os
import time

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request

# Load environment variables early
load_dotenv(find_dotenv(), override=False)

from .api.settings import router as settings_router
from .api.transactions import router as transactions_router
from .db import crud
from .db.session import AsyncSessionLocal, Base, engine
from .logging_config import get_logger, setup_logging

# Configure logging before creating the app
setup_logging()
logger = get_logger("portfolio")

app = FastAPI(title="Portfolio Site API", version="1.0.0")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Lightweight request logger for API traffic.
    """
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        logger.info(
            "HTTP %s %s from %s -> %s in %.1fms",
            request.method,
            request.url.path,
            request.client.host if request.client else "?",
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
    return response


@app.get("/api/health")
async def health():
    """
    Simple health check endpoint.
    """
    return {"status": "healthy"}


# Log effective DB URL once at import time (credentials stripped)
logger.info(
    "Effective DATABASE_URL: %s",
    engine.url.render_as_string(hide_password=True),
)

# Include domain routers
app.include_router(settings_router, prefix="/api")
app.include_router(transactions_router, prefix="/api")


@app.on_event("startup")
async def on_startup():
    logger.info("Portfolio backend starting up")
    if os.getenv("DB_CREATE_ALL", "0").lower() in ("1", "true", "yes"):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured (DB_CREATE_ALL)")
    try:
        async with AsyncSessionLocal() as db:
            inserted = await crud.seed_default_settings(db)
        logger.info("Default site settings seeded: %d new rows", inserted)
    except Exception:
        # Missing tables on a fresh deploy; migrations create them later
        logger.exception("Skipping default settings initialization")


@app.on_event("shutdown")
async def on_shutdown():
    try:
        await engine.dispose()
    except Exception:
        logger.exception("Error disposing engine on shutdown")
    logger.info("Portfolio backend shutting down")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "5000")), log_level="info")
