# config/cache.py
from typing import Awaitable, Callable, Optional
from fastapi import Request
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis, from_url
from config.settings import settings

# Redis backs the request rate limiter only; the pipeline keeps no state.
_client: Optional[Redis] = None


async def init_rate_limiter(identifier: Callable[[Request], Awaitable[str]]) -> Redis:
    """
    Connect once and hand the client to fastapi-limiter.
    Fails fast when Redis is unreachable.
    """
    global _client
    if _client is None:
        _client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_keepalive=True,
            health_check_interval=30,
        )
        await _client.ping()
        await FastAPILimiter.init(_client, identifier=identifier)
    return _client


async def close_rate_limiter() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
