"""Redis client for the session cache.

``build_redis`` is a lifespan dependency: it pings the configured
server once and yields the client, or ``None`` when nothing answers
within ``redis_connect_timeout``.  ``build_session_cache`` picks the
in-process backend on ``None``, so a missing Redis never stops startup.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis
from redis.exceptions import RedisError

from bearingbot.configs.config import ThirdPartyConfig, get_third_party_config

logger = logging.getLogger(__name__)


def create_redis(config: ThirdPartyConfig) -> Redis:
    return Redis.from_url(
        config.redis_uri,
        decode_responses=True,
        socket_connect_timeout=config.redis_connect_timeout,
    )


async def build_redis(
    config: Annotated[ThirdPartyConfig, Depends(get_third_party_config)],
) -> AsyncGenerator[Redis | None, None]:
    client = create_redis(config)
    try:
        await client.ping()
    except (RedisError, OSError):
        logger.warning(
            "Redis at %s unavailable, using the in-process session cache.",
            config.redis_uri,
        )
        await client.aclose()
        yield None
        return

    logger.info("Connected to Redis session cache.")
    try:
        yield client
    finally:
        await client.aclose()
