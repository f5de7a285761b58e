"""
File: profile_api/domains/profile/dependencies.py
Description: 完整档案领域依赖注入 (DI)

依赖链：
DBSession → ProfileRepository ─┐
SecureFileUrlGenerator ────────┴→ ProfileService → ProfileServiceDep

CurrentIdentity + RateLimiter → enforce_profile_rate_limit → ProfileRateLimitDep

Created: 2026-10-19
"""

from typing import Annotated

from fastapi import Depends, Request

from profile_api.api.deps import CurrentIdentity, DBSession, RateLimiterDep
from profile_api.core.file_urls import FileUrlSigner, SecureFileUrlGenerator
from profile_api.core.rate_limit import RateLimitStatus
from profile_api.domains.profile.constants import (
    RATE_LIMIT_ACTION,
    RATE_LIMIT_MAX_CALLS,
    RATE_LIMIT_WINDOW_SECONDS,
)
from profile_api.domains.profile.repository import ProfileRepository
from profile_api.domains.profile.service import ProfileService


async def get_profile_repository(session: DBSession) -> ProfileRepository:
    """获取完整档案仓储实例"""
    return ProfileRepository(session=session)


ProfileRepoDep = Annotated[ProfileRepository, Depends(get_profile_repository)]


def get_file_url_signer() -> FileUrlSigner:
    """获取文件签名协作方 (测试中可 override)"""
    return SecureFileUrlGenerator()


FileUrlSignerDep = Annotated[FileUrlSigner, Depends(get_file_url_signer)]


async def get_profile_service(
    repo: ProfileRepoDep, file_urls: FileUrlSignerDep
) -> ProfileService:
    """获取完整档案服务实例"""
    return ProfileService(repo=repo, file_urls=file_urls)


ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]


async def enforce_profile_rate_limit(
    request: Request,
    user_id: CurrentIdentity,
    limiter: RateLimiterDep,
) -> RateLimitStatus:
    """
    完整档案接口限流：每个用户 60 秒内最多 15 次。
    同一请求内重复解析该依赖时复用首次结果，不会重复计数。
    """
    cached: RateLimitStatus | None = getattr(request.state, "profile_rate_limit", None)
    if cached is not None:
        return cached

    status = await limiter.check(
        str(user_id),
        RATE_LIMIT_ACTION,
        RATE_LIMIT_MAX_CALLS,
        RATE_LIMIT_WINDOW_SECONDS,
    )
    request.state.profile_rate_limit = status
    return status


ProfileRateLimitDep = Annotated[RateLimitStatus, Depends(enforce_profile_rate_limit)]
