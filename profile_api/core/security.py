"""
File: profile_api/core/security.py
Description: 安全工具模块 (JWT)

本模块负责：
1. 会话令牌签发 (create_access_token)：供会话子系统与测试使用
2. 会话令牌校验 (decode_access_token)：解析 sub 得到用户身份
3. 文件访问令牌签发/校验 (create_file_token / verify_file_token)：
   为存储引用生成限时访问凭证，由存储服务侧校验

Created: 2026-10-19
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from profile_api.core.config import settings

ACCESS_TOKEN_TYPE = "access"
FILE_TOKEN_TYPE = "file"

# ------------------------------------------------------------------------------
# 1. 会话令牌 (Access Token)
# ------------------------------------------------------------------------------


def create_access_token(
    subject: str | Any, expires_delta: timedelta | None = None
) -> str:
    """
    生成 JWT Access Token。

    Args:
        subject: 主体标识 (user_id)
        expires_delta: 自定义过期时间差 (默认 ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        str: 编码后的 JWT 字符串
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    secret_key = settings.SECRET_KEY
    if secret_key is None:
        raise ValueError("SECRET_KEY configuration is missing.")

    to_encode = {
        "exp": datetime.now(UTC) + expires_delta,
        "sub": str(subject),
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(to_encode, secret_key, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    校验会话令牌并返回 sub。

    Raises:
        JWTError: 签名错误、过期、类型不符或缺少 sub
    """
    payload = jwt.decode(
        token,
        settings.SECRET_KEY,  # type: ignore[arg-type]
        algorithms=[settings.ALGORITHM],
    )
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise JWTError("Unexpected token type")

    subject = payload.get("sub")
    if not subject:
        raise JWTError("Missing subject")
    return str(subject)


# ------------------------------------------------------------------------------
# 2. 文件访问令牌 (File Token)
# ------------------------------------------------------------------------------


def create_file_token(reference: str, expires_at: int) -> str:
    """
    为存储引用签发访问令牌。

    相同的 (reference, expires_at) 总是得到相同的令牌，
    因此调用方对 expires_at 做时间分桶即可获得稳定的链接。
    """
    to_encode = {"ref": reference, "exp": expires_at, "type": FILE_TOKEN_TYPE}
    return jwt.encode(to_encode, settings.file_signing_key, algorithm=settings.ALGORITHM)


def verify_file_token(token: str, reference: str) -> bool:
    """
    存储服务侧校验：令牌有效、未过期且与所请求的引用一致。
    """
    try:
        payload = jwt.decode(
            token, settings.file_signing_key, algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return False

    return payload.get("type") == FILE_TOKEN_TYPE and payload.get("ref") == reference
