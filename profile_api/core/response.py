"""
File: profile_api/core/response.py
Description: 统一响应信封（Unified Response Envelope）模型

成功信封: {"success": true, "data": ..., "meta": {"generated_at", "schema_version"}}
失败信封: {"success": false, "error": <标签>, "message": <详情, 仅调试模式>}

schema_version 标记嵌套数据结构的版本，供客户端做前向兼容判断。

Created: 2026-10-19
"""

import time
from typing import Any, Generic, TypeVar, cast

from pydantic import BaseModel, Field

T = TypeVar("T")

SCHEMA_VERSION = "1.1"


class ResponseMeta(BaseModel):
    """响应元信息"""

    generated_at: int = Field(
        default_factory=lambda: int(time.time()),
        description="响应生成时间 (Unix 秒)",
    )
    schema_version: str = Field(default=SCHEMA_VERSION, description="数据结构版本")


class ResponseModel(BaseModel, Generic[T]):
    """
    统一成功响应信封
    """

    success: bool = Field(default=True, description="是否成功")
    data: T | None = Field(default=None, description="业务数据")
    meta: ResponseMeta = Field(default_factory=ResponseMeta, description="元信息")

    @classmethod
    def ok(cls, data: T | None = None) -> "ResponseModel[T]":
        """
        构造成功响应
        """
        # 强制将 Pydantic 模型转换为 JSON 安全的字典 (Decimal/UUID/date 等)
        if hasattr(data, "model_dump"):
            data = cast(Any, data).model_dump(mode="json")

        return cls(success=True, data=data)


class ErrorResponse(BaseModel):
    """
    统一失败响应信封
    """

    success: bool = Field(default=False, description="是否成功")
    error: str = Field(..., description="简短错误标签")
    message: str | None = Field(default=None, description="错误详情 (仅调试模式)")

    @classmethod
    def build(
        cls, error: str, message: str | None = None, *, debug: bool = False
    ) -> dict[str, Any]:
        """
        构造失败响应体。
        非调试模式下不输出 message 键，避免泄露存储层细节。
        """
        envelope = cls(error=error, message=message)
        if debug:
            return envelope.model_dump()
        return envelope.model_dump(exclude={"message"})
