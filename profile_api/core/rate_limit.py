"""
File: profile_api/core/rate_limit.py
Description: 基于 Redis 的固定窗口限流器

本模块负责：
1. check: 对 (subject, action) 组合键计数，超过 max_count 时抛出 RateLimitExceeded
2. headers: 基于同一计数器状态计算 {limit, remaining, reset}，不修改计数

计数器键: rate_limit:{action}:{subject}:{window}:{slot}，slot = floor(now / window)
准入判定只依赖 INCR 的返回值 (单条原子命令)，并发请求不可能同时越过阈值。
被拒绝的请求会归还其自增 (DECR)，因此计数器只统计被准入的调用。

Created: 2026-10-19
"""

import math
import time
from dataclasses import dataclass

from redis.asyncio import Redis
from redis.exceptions import RedisError

from profile_api.core.error_code import SystemErrorCode
from profile_api.core.exceptions import AppException, StorageFault
from profile_api.core.logging import logger


@dataclass(frozen=True, slots=True)
class RateLimitStatus:
    """限流元数据 (reset 为窗口结束的 Unix 秒)"""

    limit: int
    remaining: int
    reset: int

    def as_headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset),
        }


class RateLimitExceeded(AppException):
    """调用频率超限 (429)，响应头携带剩余额度与重试时间"""

    def __init__(self, status: RateLimitStatus, retry_after: int):
        self.status = status
        self.retry_after = retry_after
        super().__init__(
            SystemErrorCode.RATE_LIMITED,
            headers={**status.as_headers(), "Retry-After": str(retry_after)},
        )


class RateLimiter:
    """
    固定窗口限流器。
    计数器状态全部存放在 Redis，进程内无共享可变状态。
    """

    KEY_PREFIX = "rate_limit"

    def __init__(self, redis: Redis):
        self.redis = redis

    def _locate(
        self, subject_key: str, action: str, window_seconds: int, now: float | None
    ) -> tuple[str, int, int]:
        """返回 (计数器键, 窗口长度, 窗口结束时间)"""
        now = time.time() if now is None else now
        window = max(1, int(window_seconds))
        slot = int(math.floor(now / window))
        key = f"{self.KEY_PREFIX}:{action}:{subject_key}:{window}:{slot}"
        return key, window, (slot + 1) * window

    async def check(
        self,
        subject_key: str,
        action: str,
        max_count: int,
        window_seconds: int,
        *,
        now: float | None = None,
    ) -> RateLimitStatus:
        """
        记录一次调用并判定是否准入。

        Raises:
            RateLimitExceeded: 当前窗口内已被准入的调用数达到 max_count
            StorageFault: Redis 不可用
        """
        key, window, reset = self._locate(subject_key, action, window_seconds, now)
        current = time.time() if now is None else now
        retry_after = max(1, math.ceil(reset - current))

        if max_count <= 0:
            raise RateLimitExceeded(RateLimitStatus(max_count, 0, reset), retry_after)

        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, window)
                count, _ = await pipe.execute()

            count = int(count)
            if count > max_count:
                # 归还本次自增，计数器只反映被准入的调用
                async with self.redis.pipeline(transaction=True) as pipe:
                    pipe.decr(key)
                    pipe.expire(key, window)
                    await pipe.execute()
        except RedisError as exc:
            raise StorageFault(
                SystemErrorCode.RATE_LIMIT_STORE_ERROR, detail=str(exc)
            ) from exc

        if count > max_count:
            logger.bind(subject=subject_key, action=action, limit=max_count).debug(
                "Rate limit rejected call"
            )
            raise RateLimitExceeded(
                RateLimitStatus(limit=max_count, remaining=0, reset=reset), retry_after
            )

        return RateLimitStatus(limit=max_count, remaining=max_count - count, reset=reset)

    async def headers(
        self,
        subject_key: str,
        action: str,
        max_count: int,
        window_seconds: int,
        *,
        now: float | None = None,
    ) -> RateLimitStatus:
        """
        读取当前窗口的限流元数据 (只读，不计数)。
        """
        key, _, reset = self._locate(subject_key, action, window_seconds, now)

        try:
            raw = await self.redis.get(key)
        except RedisError as exc:
            raise StorageFault(
                SystemErrorCode.RATE_LIMIT_STORE_ERROR, detail=str(exc)
            ) from exc

        used = int(raw) if raw else 0
        return RateLimitStatus(
            limit=max_count, remaining=max(0, max_count - used), reset=reset
        )
