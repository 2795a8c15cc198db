"""
Redis utilities: a small JSON cache and the cross-instance refresh lock.
"""
import json
import logging
import uuid
from typing import Any, Dict, Optional, Union

import redis.asyncio as redis

logger = logging.getLogger(__name__)

# Release only if the lock still holds our token
_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""

# Push the expiry out only if the lock still holds our token
_EXTEND_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("expire", KEYS[1], ARGV[2])
end
return 0
"""


class RedisClient:
    """Redis client wrapper with connection pooling and error handling."""

    def __init__(self, url: str, **options):
        """Initialize the Redis client.

        Args:
            url: Redis connection URL
            **options: Extra connection options (password, timeouts)
        """
        self._redis = redis.Redis.from_url(url, decode_responses=True, **options)
        self._url = url

    async def ping(self) -> bool:
        return bool(await self._redis.ping())

    async def close(self):
        """Close the Redis connection pool."""
        await self._redis.aclose()

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Get a JSON value from Redis.

        Args:
            key: Cache key

        Returns:
            The cached value or None if not found or unreadable
        """
        try:
            value = await self._redis.get(key)
            return json.loads(value) if value else None
        except (redis.RedisError, ValueError) as e:
            logger.warning(f"Redis get operation failed for {key}: {str(e)}")
            return None

    async def set(self, key: str, value: Union[Dict[str, Any], Any], expire: int = 300) -> bool:
        """Set a JSON value in Redis.

        Args:
            key: Cache key
            value: Value to cache (dict or Pydantic model)
            expire: Expiration time in seconds

        Returns:
            True if successful, False otherwise
        """
        try:
            if hasattr(value, "model_dump"):
                value = value.model_dump(mode="json", by_alias=True)
            return bool(await self._redis.set(key, json.dumps(value), ex=expire))
        except (redis.RedisError, TypeError) as e:
            logger.warning(f"Redis set operation failed for {key}: {str(e)}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete a key from Redis.

        Returns:
            True if the key was deleted, False otherwise
        """
        try:
            return await self._redis.delete(key) > 0
        except redis.RedisError as e:
            logger.warning(f"Redis delete operation failed for {key}: {str(e)}")
            return False

    async def acquire_lock(self, name: str, ttl: int) -> Optional[str]:
        """Take a named lock if nobody holds it.

        Returns:
            The owner token to release the lock with, or None if it is held elsewhere
        """
        token = uuid.uuid4().hex
        acquired = await self._redis.set(name, token, nx=True, ex=ttl)
        return token if acquired else None

    async def extend_lock(self, name: str, token: str, ttl: int) -> bool:
        """Reset the expiry of a lock we hold.

        Returns:
            False if the lock expired or is now held by someone else
        """
        try:
            return bool(await self._redis.eval(_EXTEND_SCRIPT, 1, name, token, ttl))
        except redis.RedisError as e:
            logger.warning(f"Failed to extend lock {name}: {str(e)}")
            return False

    async def release_lock(self, name: str, token: str) -> bool:
        try:
            return bool(await self._redis.eval(_RELEASE_SCRIPT, 1, name, token))
        except redis.RedisError as e:
            logger.warning(f"Failed to release lock {name}: {str(e)}")
            return False


async def init_redis(url: str, **options) -> RedisClient:
    """Create the Redis client and check the connection."""
    client = RedisClient(url, **options)
    await client.ping()
    return client


async def close_redis(client: Optional[RedisClient]):
    """Close the Redis connection."""
    if client is not None:
        await client.close()
