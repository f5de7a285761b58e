"""
File: profile_api/db/session.py
Description: 数据库引擎与会话工厂 (Async SQLAlchemy + asyncpg)

build_engine / build_session_factory 同时服务于应用进程与测试库：
- 应用进程：连接池参数来自 Settings，模块级单例 engine / AsyncSessionLocal
- 测试库：传入独立 URL 与 poolclass=NullPool，每个用例独立建连

JSON 表达式 (json_agg 等) 的编解码统一使用 orjson。

Created: 2026-10-19
"""

from typing import Any

import orjson
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from profile_api.core.config import settings


def _dumps_json(obj: Any) -> str:
    return orjson.dumps(obj).decode("utf-8")


def build_engine(url: str | None = None, **overrides: Any) -> AsyncEngine:
    """
    创建 AsyncEngine。

    指定 poolclass 时 (如 NullPool) 不再传递 QueuePool 专属的池参数。
    """
    options: dict[str, Any] = {
        "echo": settings.is_debug,
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
        "json_serializer": _dumps_json,
        "json_deserializer": orjson.loads,
    }
    if "poolclass" not in overrides:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    options.update(overrides)

    return create_async_engine(url or str(settings.SQLALCHEMY_DATABASE_URI), **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # 档案读取在 session.begin() 内完成，提交后不再访问 ORM 属性
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


engine: AsyncEngine = build_engine()
AsyncSessionLocal = build_session_factory(engine)


async def close_engine() -> None:
    """释放连接池 (lifespan shutdown 阶段调用)"""
    await engine.dispose()
