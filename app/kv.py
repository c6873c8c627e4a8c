# app/kv.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from redis.asyncio import Redis

from .cache import get_redis
from .params import first_value

router = APIRouter(prefix="/redis", tags=["redis"])


@router.get("/get/{key}", response_class=PlainTextResponse)
async def redis_get(key: str, client: Redis = Depends(get_redis)):
    value = await client.get(key)
    if value is None:
        return "key not found."
    return f"{key} : {value}"


@router.post("/set", response_class=PlainTextResponse)
async def redis_set(request: Request, client: Redis = Depends(get_redis)):
    form = await request.form()
    key, value = first_value(form, "key"), first_value(form, "value")
    # no expiry
    await client.set(key, value)
    return "set value"
