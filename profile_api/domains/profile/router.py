"""
File: profile_api/domains/profile/router.py
Description: 完整档案 HTTP 路由层

GET /users/me/full-profile
固定处理顺序：
1. 会话身份识别 (CurrentIdentity，无数据访问)
2. 限流 (每用户 15 次 / 60 秒)
3. 只读事务内聚合查询 + 重组 + 文件签名 (ProfileService.fetch)
4. 写入限流元数据响应头，返回统一成功信封

不提供 /{user_id} 形式的接口：档案只属于会话中的用户，杜绝越权访问 (IDOR)。

Created: 2026-10-19
"""

from fastapi import APIRouter, Response

from profile_api.api.deps import CurrentIdentity, RateLimiterDep
from profile_api.core.response import ResponseModel
from profile_api.domains.profile.constants import (
    RATE_LIMIT_ACTION,
    RATE_LIMIT_MAX_CALLS,
    RATE_LIMIT_WINDOW_SECONDS,
)
from profile_api.domains.profile.dependencies import (
    ProfileRateLimitDep,
    ProfileServiceDep,
)
from profile_api.domains.profile.schemas import FullProfile

router = APIRouter()


@router.get(
    "/me/full-profile",
    response_model=ResponseModel[FullProfile],
    summary="获取我的完整档案",
    description=(
        "聚合账号、申请、教育、工作经历、职业团体、测评成绩与上传文件 (签名链接)。"
        "需携带有效会话。每用户每分钟最多 15 次。"
    ),
)
async def read_full_profile(
    response: Response,
    user_id: CurrentIdentity,
    _rate_limit: ProfileRateLimitDep,
    limiter: RateLimiterDep,
    service: ProfileServiceDep,
) -> ResponseModel[FullProfile]:
    """
    完整档案接口 (Secured)
    """
    profile = await service.fetch(user_id)

    # 使用处理完成时的计数器状态
    status = await limiter.headers(
        str(user_id),
        RATE_LIMIT_ACTION,
        RATE_LIMIT_MAX_CALLS,
        RATE_LIMIT_WINDOW_SECONDS,
    )
    response.headers.update(status.as_headers())

    return ResponseModel.ok(data=profile)
