"""
File: profile_api/api/deps.py
Description: 全局依赖注入定义 (DB Session + Redis + 身份识别)

本模块负责：
1. 数据库会话管理 (get_db / DBSession)
2. 会话令牌提取 (Authorization: Bearer 优先，其次会话 Cookie)
3. 身份识别 (get_current_identity / CurrentIdentity)
   - 只校验会话子系统签发的令牌，不访问数据库
   - 请求中不接受任何用户 ID 参数，身份只来自会话
4. 限流器注入 (get_rate_limiter / RateLimiterDep)

Created: 2026-10-19
"""

from collections.abc import AsyncGenerator
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from jose import JWTError
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from profile_api.core.config import settings
from profile_api.core.exceptions import UnauthorizedException
from profile_api.core.rate_limit import RateLimiter
from profile_api.core.redis import get_redis
from profile_api.core.security import decode_access_token
from profile_api.db.session import AsyncSessionLocal

# ------------------------------------------------------------------------------
# 1. Database Dependencies
# ------------------------------------------------------------------------------


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    获取异步数据库会话依赖。
    使用 async with 确保请求结束时自动关闭 session。
    """
    async with AsyncSessionLocal() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db)]


# ------------------------------------------------------------------------------
# 2. Identity Dependencies (会话身份识别)
# ------------------------------------------------------------------------------


def get_session_token(request: Request) -> str:
    """
    提取会话令牌。
    格式要求: Authorization: Bearer <token>，或会话 Cookie
    """
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, param = authorization.partition(" ")
        if scheme.lower() != "bearer" or not param:
            raise UnauthorizedException(detail="Invalid Authentication Scheme")
        return param

    cookie_token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie_token:
        return cookie_token

    raise UnauthorizedException(detail="Missing session credentials")


async def get_current_identity(
    token: Annotated[str, Depends(get_session_token)],
) -> UUID:
    """
    校验会话令牌并返回当前用户 ID。
    """
    try:
        subject = decode_access_token(token)
        return UUID(subject)
    except JWTError:
        # 使用 from None 截断异常链，避免暴露 jose 异常细节
        raise UnauthorizedException(detail="Invalid Token or Expired") from None
    except ValueError:
        raise UnauthorizedException(detail="Invalid Token: malformed sub") from None


# 用法: async def endpoint(user_id: CurrentIdentity): ...
CurrentIdentity = Annotated[UUID, Depends(get_current_identity)]


# ------------------------------------------------------------------------------
# 3. Rate Limiter Dependencies
# ------------------------------------------------------------------------------


async def get_rate_limiter(redis: Annotated[Redis, Depends(get_redis)]) -> RateLimiter:
    """构造限流器 (计数器存放于 Redis)"""
    return RateLimiter(redis)


RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]
