"""
File: profile_api/core/middleware.py
Description: 中间件配置与实现

本模块负责：
1. RequestLogMiddleware：
   - 生成 UUID v7 request_id 并写入 request.state
   - 绑定 Loguru 上下文，使路由/服务/仓储日志自动携带 request_id
   - 记录访问日志 (Access Log) 与耗时
   - 回写 X-Request-ID 响应头 (包括未捕获异常的兜底 400 响应)
2. register_middlewares：统一注册 CORS 与日志中间件

Created: 2026-10-19
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from uuid6 import uuid7

from profile_api.core.config import settings
from profile_api.core.exceptions import general_exception_handler
from profile_api.core.logging import logger

# 跳过访问日志的路径（健康检查等高频低价值请求）
SKIP_LOG_PATHS: set[str] = {"/health", "/health/", "/favicon.ico"}

# 限流元数据需要暴露给浏览器端读取
EXPOSED_HEADERS: list[str] = [
    "X-Request-ID",
    "X-RateLimit-Limit",
    "X-RateLimit-Remaining",
    "X-RateLimit-Reset",
    "Retry-After",
]


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    全局请求日志中间件
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = str(uuid7())
        request.state.request_id = request_id

        skip_log = request.url.path in SKIP_LOG_PATHS

        with logger.contextualize(request_id=request_id):
            start_time = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as exc:
                # 在中间件内渲染兜底错误信封，保证响应携带 X-Request-ID (异常只记录一次)
                response = await general_exception_handler(request, exc)

            response.headers["X-Request-ID"] = request_id

            if not skip_log:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.bind(
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                    client_ip=request.client.host if request.client else "unknown",
                ).info("Request finished")

            return response


def register_middlewares(app: FastAPI) -> None:
    """
    统一注册所有中间件。
    Starlette 中间件为"洋葱模型"：后注册的先处理请求。
    """
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
            expose_headers=EXPOSED_HEADERS,
        )

    # 最后注册，最先拦截请求
    app.add_middleware(RequestLogMiddleware)
