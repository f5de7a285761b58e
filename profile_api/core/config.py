"""
File: profile_api/core/config.py
Description: 全局应用配置管理（使用 pydantic-settings）

所有配置值通过 .env 文件或环境变量加载。
本模块负责：
1. 校验环境变量类型
2. 组装数据库 DSN（确保使用 postgresql+asyncpg 协议）
3. 定义 Redis 连接、会话令牌校验参数
4. 定义文件签名 URL 参数（存储服务地址、签名密钥、有效期）
5. 运行时强制校验必填项，确保应用在配置缺失时快速失败

Created: 2026-10-19
"""

from typing import Literal

from pydantic import AnyHttpUrl, model_validator
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """全局配置对象（唯一真实来源）"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=True,
    )

    # --------------------------------------------------------------------------
    # 1. General (通用)
    # --------------------------------------------------------------------------
    PROJECT_NAME: str = "Applicant Full Profile API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "dev", "prod"] = "local"
    # 调试模式：错误信封中附带 message 详情 (生产环境强制关闭)
    DEBUG: bool = False

    # 会话令牌签名密钥，同时作为文件签名的默认密钥
    SECRET_KEY: str | None = None

    BACKEND_CORS_ORIGINS: list[AnyHttpUrl] = []

    # --------------------------------------------------------------------------
    # 2. Database (PostgreSQL)
    # --------------------------------------------------------------------------
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None

    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_PRE_PING: bool = True
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # 完整 DSN 覆盖（可选）
    SQLALCHEMY_DATABASE_URI: str | None = None

    # 完整档案查询的语句超时 (毫秒)，仅作用于该只读事务 (SET LOCAL 语义)
    PROFILE_STATEMENT_TIMEOUT_MS: int = 5000

    # --------------------------------------------------------------------------
    # 3. Logging (Loguru)
    # --------------------------------------------------------------------------
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_JSON_FORMAT: bool = False
    LOG_FILE_ENABLED: bool = False
    LOG_DIR: str = "logs"
    LOG_ROTATION: str = "1 hour"
    LOG_RETENTION: str = "7 days"
    LOG_COMPRESSION: str = "zip"
    LOG_DIAGNOSE: bool = True  # 生产环境建议 False，避免变量值进入日志

    # --------------------------------------------------------------------------
    # 4. Redis (限流计数器)
    # --------------------------------------------------------------------------
    REDIS_URL: str = "redis://localhost:6379/0"

    # --------------------------------------------------------------------------
    # 5. Session & Authentication (JWT)
    # --------------------------------------------------------------------------
    # 令牌由会话子系统签发，本服务只做校验
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    # 未携带 Authorization 头时，从该 Cookie 读取会话令牌
    SESSION_COOKIE_NAME: str = "session_token"

    # --------------------------------------------------------------------------
    # 6. Secure File URLs (存储服务签名链接)
    # --------------------------------------------------------------------------
    FILE_BASE_URL: str = "http://localhost:8001/files"
    # 为空时回退到 SECRET_KEY
    FILE_SIGNING_KEY: str | None = None
    # 签名链接的时间桶长度 (秒)，链接在桶内保持不变，有效期至少一个完整桶
    FILE_URL_EXPIRE_SECONDS: int = 900

    # --------------------------------------------------------------------------
    # Properties (便捷属性)
    # --------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """是否为生产环境"""
        return self.ENVIRONMENT == "prod"

    @property
    def is_debug(self) -> bool:
        """是否启用调试模式（仅在非生产环境有效）"""
        return self.DEBUG and not self.is_production

    @property
    def file_signing_key(self) -> str:
        """文件签名密钥 (未单独配置时复用 SECRET_KEY)"""
        return self.FILE_SIGNING_KEY or str(self.SECRET_KEY)

    # --------------------------------------------------------------------------
    # Validators
    # --------------------------------------------------------------------------
    @model_validator(mode="after")
    def _validate_and_build_db_uri(self) -> "Settings":
        """验证必填项并构建数据库连接串。"""
        # 1. 校验 SECRET_KEY
        if not self.SECRET_KEY:
            raise ValueError("SECRET_KEY 必须在 .env 中设置")

        if self.ENVIRONMENT == "prod" and len(self.SECRET_KEY) < 32:
            raise ValueError("生产环境 SECRET_KEY 长度必须 >= 32 字符")

        if self.FILE_URL_EXPIRE_SECONDS <= 0:
            raise ValueError("FILE_URL_EXPIRE_SECONDS 必须为正整数")

        # 2. 如果 env 直接提供了 DSN，则优先使用
        if self.SQLALCHEMY_DATABASE_URI:
            return self

        # 3. 否则检查 POSTGRES_* 字段是否齐全
        required_pg_fields = [
            "POSTGRES_SERVER",
            "POSTGRES_USER",
            "POSTGRES_PASSWORD",
            "POSTGRES_DB",
        ]
        missing_fields = [f for f in required_pg_fields if not getattr(self, f)]

        if missing_fields:
            raise ValueError(
                f"缺少数据库环境变量，无法构建 DSN: {', '.join(missing_fields)}"
            )

        # 4. 自动组装 DSN
        self.SQLALCHEMY_DATABASE_URI = str(
            MultiHostUrl.build(
                scheme="postgresql+asyncpg",
                username=self.POSTGRES_USER,  # type: ignore[arg-type]
                password=self.POSTGRES_PASSWORD,  # type: ignore[arg-type]
                host=self.POSTGRES_SERVER,  # type: ignore[arg-type]
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,  # type: ignore[arg-type]
            )
        )

        return self


# 单例配置对象
settings = Settings()
