"""
File: profile_api/core/error_code.py
Description: 全局错误码基类与系统级错误定义

定义结构 Tuple(http_status, code, label):
1. http_status: HTTP 响应状态码 (4xx/5xx)
2. code: 字符串业务码 (格式: domain.reason)，仅用于日志检索
3. label: 返回给客户端的简短错误标签 (错误信封中的 error 字段)

Created: 2026-10-19
"""

from enum import Enum

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class BaseErrorCode(Enum):
    """
    错误码枚举基类
    所有业务领域的错误码 Enum 必须继承此类。

    Value Tuple Definition:
    (http_status, code, msg)
    """

    @property
    def http_status(self) -> int:
        """获取映射的 HTTP 状态码"""
        return self.value[0]

    @property
    def code(self) -> str:
        """获取业务错误标识 (domain.reason)"""
        return self.value[1]

    @property
    def msg(self) -> str:
        """获取默认错误标签"""
        return self.value[2]


class SystemErrorCode(BaseErrorCode):
    """
    系统通用错误定义 (System Domain)
    包含: 参数校验、认证、限流、存储故障
    """

    # HTTP 400
    INVALID_PARAMS = (HTTP_400_BAD_REQUEST, "system.invalid_params", "Invalid parameters")
    # 未归类的异常统一按 400 返回
    BAD_REQUEST = (HTTP_400_BAD_REQUEST, "system.bad_request", "Request failed")

    # HTTP 401
    UNAUTHORIZED = (HTTP_401_UNAUTHORIZED, "system.unauthorized", "Unauthorized")

    # HTTP 429
    RATE_LIMITED = (
        HTTP_429_TOO_MANY_REQUESTS,
        "system.rate_limited",
        "Rate limit exceeded",
    )

    # HTTP 500: 存储故障 (需要监控报警)
    DB_ERROR = (HTTP_500_INTERNAL_SERVER_ERROR, "system.db_error", "Database error")
    FILE_STORAGE_ERROR = (
        HTTP_500_INTERNAL_SERVER_ERROR,
        "system.file_storage_error",
        "Storage error",
    )
    RATE_LIMIT_STORE_ERROR = (
        HTTP_500_INTERNAL_SERVER_ERROR,
        "system.rate_limit_store_error",
        "Rate limit store error",
    )
