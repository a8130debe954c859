"""
Clients Redis partagés.

- get_async_redis: client asyncio pour fastapi-limiter (rate limiting)
- get_sync_redis: client synchrone pour le registre des événements webhook
Avec use_fake_redis (tests), fakeredis remplace un serveur réel.
"""
from typing import Optional

import redis
import redis.asyncio as aioredis

from bodega.config import Settings

try:
    import fakeredis  # tests only
    from fakeredis.aioredis import FakeRedis as FakeAsyncRedis
except ImportError:
    fakeredis = None
    FakeAsyncRedis = None


def _require_fake():
    if fakeredis is None:
        raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 mais fakeredis n'est pas installé.")


def get_async_redis(settings: Settings) -> Optional[aioredis.Redis]:
    if settings.use_fake_redis:
        _require_fake()
        return FakeAsyncRedis(decode_responses=True)
    if not settings.redis_url:
        return None
    return aioredis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)


def get_sync_redis(settings: Settings) -> Optional[redis.Redis]:
    if settings.use_fake_redis:
        _require_fake()
        return fakeredis.FakeRedis(decode_responses=True)
    if not settings.redis_url:
        return None
    return redis.Redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
