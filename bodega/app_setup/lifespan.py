"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Initialise FastAPILimiter (Redis asyncio, ou fakeredis en tests).
- Construit le registre des événements webhook (Redis synchrone ou mémoire).
Options lues dans Settings:
  - disable_rate_limit (DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1): pas de rate limiting
  - use_fake_redis (USE_FAKE_REDIS_FOR_TESTS=1): fakeredis
  - redis_url (REDIS_URL): serveur Redis réel
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from bodega.infra.redis_client import get_async_redis, get_sync_redis
from bodega.webhooks.ledger import build_ledger


async def _init_rate_limiter(app: FastAPI, logger: logging.Logger) -> None:
    settings = app.state.settings
    if settings.disable_rate_limit:
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return
    try:
        r = get_async_redis(settings)
        if r is None:
            app.state.rate_limit_enabled = False
            logger.info("Rate limiting disabled: no REDIS_URL")
            return
        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        app.state.rate_limit_enabled = False
        logger.warning(f"Rate limiting disabled due to init error: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Prépare rate limiting et registre webhook.
    - En cas d'échec de Redis pour le rate limiting, il est désactivé proprement.
    - Le registre webhook retombe en mémoire sans REDIS_URL.
    """
    logger = logging.getLogger("uvicorn.error")
    settings = app.state.settings

    await _init_rate_limiter(app, logger)
    app.state.event_ledger = build_ledger(get_sync_redis(settings), settings.event_ttl_seconds)
    logger.info("Bodega started env=%s", settings.environment)

    yield

    if app.state.rate_limit_enabled:
        await FastAPILimiter.close()
