"""
File: profile_api/core/redis.py
Description: Redis 客户端管理 (Async)

本模块负责：
1. 创建全局 Redis 客户端 (redis-py asyncio，内部维护连接池)
2. 提供依赖注入所需的 Redis 客户端生成器 (测试中可 override 为 FakeRedis)
3. 在应用关闭时释放连接

Redis 在本服务中仅用于限流计数器 (见 core/rate_limit.py)。
使用 decode_responses=True，读取到的计数值为 str。

Created: 2026-10-19
"""

from collections.abc import AsyncGenerator

from redis.asyncio import Redis, from_url

from profile_api.core.config import settings

redis_client: Redis = from_url(
    settings.REDIS_URL,
    encoding="utf-8",
    decode_responses=True,
)


async def get_redis() -> AsyncGenerator[Redis, None]:
    """
    获取 Redis 客户端依赖。

    用法:
    async def endpoint(redis: Annotated[Redis, Depends(get_redis)]): ...
    """
    yield redis_client


async def close_redis() -> None:
    """关闭 Redis 连接池 (lifespan shutdown 阶段调用)"""
    await redis_client.aclose()
