"""
File: profile_api/core/exceptions.py
Description: 业务异常类与全局异常处理器

本模块负责：
1. 业务异常基类（AppException）接受 BaseErrorCode 枚举
2. 常用异常子类：UnauthorizedException / StorageFault
3. 全局异常处理器将异常映射为：HTTP 状态码 + 错误信封 (ErrorResponse)
4. 调试模式下在信封中附带 message 详情，否则一律屏蔽

Created: 2026-10-19
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from profile_api.core.config import settings
from profile_api.core.error_code import BaseErrorCode, SystemErrorCode
from profile_api.core.logging import logger
from profile_api.core.response import ErrorResponse

# ------------------------------------------------------------------------------
# 1. 自定义业务异常类
# ------------------------------------------------------------------------------


class AppException(Exception):
    """
    应用基础异常类。

    用法示例:
        raise AppException(ProfileErrorCode.USER_NOT_FOUND)
        raise AppException(SystemErrorCode.DB_ERROR, detail=str(exc))

    参数:
    - message: 覆盖默认的错误标签
    - detail: 内部详情，仅调试模式下返回给客户端
    - headers: 需要附加到错误响应上的响应头 (如限流元数据)
    """

    def __init__(
        self,
        error: BaseErrorCode,
        message: str = "",
        data: Any = None,
        detail: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.error = error
        self.http_status = error.http_status
        self.code = error.code
        self.message = message or error.msg
        self.data = data
        self.detail = detail
        self.headers = headers
        super().__init__(self.message)


class UnauthorizedException(AppException):
    """会话缺失或令牌无效 (401)"""

    def __init__(self, detail: str | None = None):
        super().__init__(SystemErrorCode.UNAUTHORIZED, detail=detail)


class StorageFault(AppException):
    """
    存储层故障 (500)。
    覆盖数据库读取、事务提交/回滚、限流计数器、文件签名等所有数据访问失败。
    """

    def __init__(
        self,
        error: BaseErrorCode = SystemErrorCode.DB_ERROR,
        detail: str | None = None,
    ):
        super().__init__(error, detail=detail)


# ------------------------------------------------------------------------------
# 2. 辅助函数
# ------------------------------------------------------------------------------


def _get_request_id(request: Request) -> str:
    """尝试从 request.state 获取 request_id，如果不存在则返回 'unknown'"""
    return str(getattr(request.state, "request_id", "unknown"))


def _render(
    status_code: int,
    error: str,
    message: str | None,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    """渲染错误信封 (message 是否输出由调试开关决定)"""
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse.build(error, message, debug=settings.is_debug),
        headers=headers,
    )


# ------------------------------------------------------------------------------
# 3. 全局异常处理器 (Handlers)
# ------------------------------------------------------------------------------


async def app_exception_handler(request: Request, exc: AppException) -> ORJSONResponse:
    """
    处理自定义业务异常 (AppException)
    存储故障按 ERROR 级别记录，其余业务异常按 WARNING 记录
    """
    log = logger.bind(
        request_id=_get_request_id(request),
        code=exc.code,
        http_status=exc.http_status,
        detail=exc.detail,
    )
    if isinstance(exc, StorageFault):
        log.error("Storage fault occurred")
    else:
        log.warning("Business exception occurred")

    return _render(exc.http_status, exc.message, exc.detail, exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """
    处理 Pydantic 校验异常 (FastAPI 默认抛出 422)
    映射目标: HTTP 400 / Invalid parameters
    """
    errors = exc.errors()
    first_error = errors[0] if errors else {}

    # loc 示例: ('header', 'authorization')
    loc = first_error.get("loc", [])
    field_name = str(loc[-1]) if loc else "unknown"
    readable_message = f"{field_name}: {first_error.get('msg', 'Invalid parameter')}"

    logger.bind(
        request_id=_get_request_id(request),
        detail=readable_message,
    ).warning("Request validation failed")

    return _render(
        SystemErrorCode.INVALID_PARAMS.http_status,
        SystemErrorCode.INVALID_PARAMS.msg,
        readable_message,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> ORJSONResponse:
    """
    处理框架层面的 HTTP 异常 (如 404 路由不存在, 405 Method Not Allowed)
    """
    logger.bind(
        request_id=_get_request_id(request),
        status_code=exc.status_code,
        detail=str(exc.detail),
    ).warning("Framework HTTP exception occurred")

    return _render(exc.status_code, str(exc.detail), None, exc.headers)


async def general_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    处理所有未捕获的异常。
    未归类的故障统一返回 400 + 通用标签，详情仅在调试模式输出。
    """
    logger.opt(exception=exc).bind(request_id=_get_request_id(request)).error(
        "Unhandled exception occurred"
    )

    return _render(
        SystemErrorCode.BAD_REQUEST.http_status,
        SystemErrorCode.BAD_REQUEST.msg,
        str(exc) or exc.__class__.__name__,
    )


# ------------------------------------------------------------------------------
# 4. 异常处理器注册函数
# ------------------------------------------------------------------------------


def register_exception_handlers(app: FastAPI) -> None:
    """
    统一注册所有异常处理器。
    应在 main.py 中调用。
    """
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore
    app.add_exception_handler(Exception, general_exception_handler)
