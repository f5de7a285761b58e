"""
File: profile_api/main.py
Description: FastAPI 应用入口与工厂函数

本模块负责：
1. 创建 FastAPI 应用实例 (默认响应类 ORJSONResponse)
2. 管理应用生命周期 (lifespan): 初始化日志、关闭数据库与 Redis 连接
3. 组装全局组件：中间件、异常处理器、路由
4. 提供健康检查接口 (/health)

Created: 2026-10-19
"""

import asyncio
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

# asyncpg 在 Windows 下必须使用 SelectorEventLoop，需在任何事件循环启动前设置
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from profile_api.api_router import api_router
from profile_api.core.config import settings
from profile_api.core.exceptions import register_exception_handlers
from profile_api.core.logging import setup_logging
from profile_api.core.middleware import register_middlewares
from profile_api.core.redis import close_redis
from profile_api.core.response import ResponseModel
from profile_api.db.session import close_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    应用生命周期管理器。
    """
    setup_logging()

    yield

    await close_redis()
    await close_engine()


def create_app() -> FastAPI:
    """应用工厂函数"""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
        # 生产环境关闭交互式文档
        docs_url=None if settings.is_production else f"{settings.API_V1_STR}/docs",
        redoc_url=None,
    )

    # 1. 中间件 (CORS, RequestID, Access Log)
    register_middlewares(app)

    # 2. 异常处理器 (统一错误信封)
    register_exception_handlers(app)

    # 3. API 路由
    app.include_router(api_router, prefix=settings.API_V1_STR)

    # 4. 健康检查
    @app.get(
        "/health",
        tags=["health"],
        summary="健康检查",
        response_model=ResponseModel[dict[str, str]],
    )
    async def health_check():
        """
        健康检查接口 (K8s Liveness/Readiness Probe)。
        """
        return ResponseModel.ok(data={"status": "ok"})

    return app


# 暴露给 Uvicorn 运行的应用实例
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
