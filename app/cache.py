# app/cache.py
from typing import AsyncGenerator

import redis.asyncio as redis_async
from fastapi import Depends

from .config import Settings, get_settings


def create_redis_client(settings: Settings) -> redis_async.Redis:
    """Create a Redis client instance."""
    return redis_async.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


async def get_redis(settings: Settings = Depends(get_settings)) -> AsyncGenerator[redis_async.Redis, None]:
    # a fresh client per request, closed once the response is produced
    client = create_redis_client(settings)
    try:
        yield client
    finally:
        await client.aclose()
