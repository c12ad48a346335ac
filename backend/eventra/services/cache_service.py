"""
Redis caching service for event listings.

CACHING STRATEGY
================

What we cache:
  - Event listing responses (JSON-serialized, camelCase as sent on the wire)
  - Cache key pattern: "events:list:category={category}&status={status}&upcoming={upcoming}"

Invalidation strategy:
  - Any event create/update/delete, booking or registration change deletes
    every "events:list:*" key (seat counts and statuses appear in listings)
  - TTL-based expiry as safety net (REDIS_CACHE_TTL, default 5 minutes)

Single events are never cached: their seat counts must be current.

Redis is optional. When it is disabled or unreachable every function here
degrades to a no-op and the caller reads from the database.
"""

import json
from typing import Optional

import redis.asyncio as redis

from eventra.core.config import get_settings
from eventra.core.logging import get_logger
from eventra.core.metrics import record_cache_operation

logger = get_logger(__name__)
settings = get_settings()

EVENT_LIST_PREFIX = "events:list:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except redis.RedisError as e:
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def make_event_list_key(category: Optional[str], status: Optional[str], upcoming: bool) -> str:
    return f"{EVENT_LIST_PREFIX}category={category or '*'}&status={status or '*'}&upcoming={upcoming}"


async def get_cached_events(category: Optional[str], status: Optional[str], upcoming: bool) -> Optional[list]:
    """Retrieve a cached event list response."""
    client = await get_redis()
    if not client:
        return None

    key = make_event_list_key(category, status, upcoming)
    try:
        data = await client.get(key)
        if data is not None:
            record_cache_operation("get", "hit")
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        record_cache_operation("get", "miss")
        logger.debug("cache_miss", key=key)
    except redis.RedisError as e:
        record_cache_operation("get", "error")
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_events(
    category: Optional[str],
    status: Optional[str],
    upcoming: bool,
    data: list,
) -> None:
    """Cache an event list response with TTL."""
    client = await get_redis()
    if not client:
        return

    key = make_event_list_key(category, status, upcoming)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        record_cache_operation("set", "ok")
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except redis.RedisError as e:
        record_cache_operation("set", "error")
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_event_cache() -> None:
    """
    Invalidate all cached event listings.
    Uses SCAN to find and delete all keys matching the prefix.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{EVENT_LIST_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        record_cache_operation("invalidate", "ok")
        logger.info("cache_invalidated", keys_deleted=deleted)
    except redis.RedisError as e:
        record_cache_operation("invalidate", "error")
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except redis.RedisError as e:
        return {"status": "error", "error": str(e)}
