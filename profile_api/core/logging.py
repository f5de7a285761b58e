"""
File: profile_api/core/logging.py
Description: 全局日志配置模块 (Loguru)

本模块负责：
1. 拦截 Python 标准库 logging (Uvicorn / SQLAlchemy)，统一转发到 Loguru
2. 控制台输出：开发环境彩色文本，生产环境 JSON
3. 可选文件输出：按配置轮转、保留、压缩
4. 文本格式中附带 request_id / user_id 上下文 (由中间件与路由绑定)

Created: 2026-10-19
"""

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from profile_api.core.config import settings

# 需要交由 Loguru 接管的第三方 logger 前缀
INTERCEPTED_PREFIXES: tuple[str, ...] = ("uvicorn.", "fastapi.", "sqlalchemy.")


class InterceptHandler(logging.Handler):
    """
    标准库 logging → Loguru 的桥接 Handler。
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # 跳过 logging 模块自身的栈帧，保证行号指向真正的调用者
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def format_record(record: dict[str, Any]) -> str:
    """
    文本日志格式。
    存在 request_id / user_id 上下文时追加到行尾。
    """
    format_string = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )

    extra = record["extra"]
    if extra.get("request_id"):
        format_string += " | <magenta>req_id={extra[request_id]}</magenta>"
    if extra.get("user_id"):
        format_string += " | <blue>user_id={extra[user_id]}</blue>"

    format_string += "\n{exception}"
    return format_string


def _sink_config(**overrides: Any) -> dict[str, Any]:
    """Loguru sink 通用参数 (JSON 与文本二选一)"""
    config: dict[str, Any] = {
        "level": settings.LOG_LEVEL,
        "enqueue": True,
        "backtrace": True,
        "diagnose": settings.LOG_DIAGNOSE,
    }
    if settings.LOG_JSON_FORMAT:
        config["serialize"] = True
    else:
        config["format"] = format_record
    config.update(overrides)
    return config


def setup_logging() -> None:
    """
    初始化日志配置。
    应在应用 lifespan 启动阶段调用。
    """
    # 1. 接管标准库日志
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.LOG_LEVEL)

    for name in list(logging.root.manager.loggerDict.keys()):
        if name.startswith(INTERCEPTED_PREFIXES):
            logging.getLogger(name).handlers = []
            logging.getLogger(name).propagate = True

    # 2. 重建 Loguru sinks
    logger.remove()

    console_overrides = {} if settings.LOG_JSON_FORMAT else {"colorize": True}
    logger.add(sys.stdout, **_sink_config(**console_overrides))

    if settings.LOG_FILE_ENABLED:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_dir / "profile_api_{time:YYYY-MM-DD_HH}.log"),
            **_sink_config(
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                compression=settings.LOG_COMPRESSION,
            ),
        )

    logger.info("Logging configured successfully")
