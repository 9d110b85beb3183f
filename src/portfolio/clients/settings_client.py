"""
Settings Client
Reads the site settings from the backend for the public site.

Environment:
  SETTINGS_BASE_URL  (default: http://localhost:5000)  -- backend serving /api/admin/settings

``SettingsClient.get_settings`` never raises: any failure (transport error,
non-2xx status, undecodable or schema-invalid body) is handed to the error
reporter and the default SiteSettings record is returned instead.

``SettingsResolver`` puts a ``QueryCache`` in front of the client and decides
when to refetch: on a timer tick every ``refresh_interval`` seconds, and on
focus once the cached entry is stale.
"""

import asyncio
import os
from typing import Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError

from ..logging_config import get_logger
from ..site_settings import SiteSettings, default_site_settings
from .query_cache import QueryCache

logger = get_logger("portfolio.clients.settings")

DEFAULT_BASE = os.getenv("SETTINGS_BASE_URL", "http://localhost:5000").rstrip("/")
SETTINGS_PATH = "/api/admin/settings"

STALE_AFTER_SECONDS = 1.0
REFRESH_INTERVAL_SECONDS = 30.0

ErrorReporter = Callable[[Exception], None]


class SettingsFetchError(Exception):
    """
    Raised when the settings endpoint can't produce a valid SiteSettings record.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def log_error(exc: Exception) -> None:
    logger.error("Failed to fetch site settings: %s", exc, exc_info=exc)


class SettingsClient:
    """
    HTTP client for the settings endpoint.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        report_error: ErrorReporter = log_error,
        timeout: float = 10.0,
    ):
        self.base_url = (base_url if base_url is not None else DEFAULT_BASE).rstrip("/")
        self.path = SETTINGS_PATH
        self.url = f"{self.base_url}{self.path}"
        self.report_error = report_error
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self):
        if not self._owns_client:
            return
        try:
            await self._client.aclose()
        except Exception:
            logger.exception("Error closing httpx client")

    async def fetch_settings(self) -> SiteSettings:
        """
        GET the settings and validate them; raises SettingsFetchError on any failure.
        """
        try:
            resp = await self._client.get(self.url)
        except Exception as e:
            raise SettingsFetchError(f"GET {self.url} failed: {e!r}") from e

        if not resp.is_success:
            raise SettingsFetchError(
                f"GET {self.url} returned HTTP {resp.status_code}", status_code=resp.status_code
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise SettingsFetchError(f"GET {self.url} returned a non-JSON body") from e

        try:
            return SiteSettings.model_validate(payload)
        except ValidationError as e:
            raise SettingsFetchError(
                f"GET {self.url} returned malformed settings ({e.error_count()} errors)"
            ) from e

    async def get_settings(self) -> SiteSettings:
        try:
            settings = await self.fetch_settings()
        except SettingsFetchError as exc:
            self.report_error(exc)
            return default_site_settings()
        logger.info("Fetched site settings for %s", settings.site_name)
        return settings


class SettingsResolver:
    """
    Cached access to the site settings.

    Exposes:
      - get(): cached settings, fetched first when missing or stale
      - refresh(): fetch now (joins a fetch already in flight)
      - tick(): timer input, refetches once ``refresh_interval`` has elapsed
      - focus(): view-focus input, refetches when the entry is stale
      - run_forever(): drives tick() from an asyncio loop
    """

    def __init__(
        self,
        client: SettingsClient,
        cache: Optional[QueryCache] = None,
        refresh_interval: float = REFRESH_INTERVAL_SECONDS,
    ):
        self.client = client
        self.cache = cache if cache is not None else QueryCache(stale_after=STALE_AFTER_SECONDS)
        self.refresh_interval = refresh_interval

    @property
    def key(self) -> str:
        return self.client.path

    def current(self) -> Optional[SiteSettings]:
        entry = self.cache.get(self.key)
        return entry.data if entry is not None else None

    async def get(self) -> SiteSettings:
        if not self.cache.is_stale(self.key):
            return self.cache.get(self.key).data
        return await self.refresh()

    async def refresh(self) -> SiteSettings:
        return await self.cache.fetch(self.key, self.client.get_settings)

    async def tick(self) -> bool:
        """
        Returns True when a refetch was issued.
        """
        age = self.cache.age(self.key)
        if age is not None and age < self.refresh_interval:
            return False
        await self.refresh()
        return True

    async def focus(self) -> bool:
        """
        Returns True when a refetch was issued.
        """
        if not self.cache.is_stale(self.key):
            return False
        await self.refresh()
        return True

    async def run_forever(self, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        logger.info("Settings refresh loop started interval=%.1fs", self.refresh_interval)
        try:
            while True:
                await self.tick()
                await sleep(self.refresh_interval)
        finally:
            logger.info("Settings refresh loop stopped")
