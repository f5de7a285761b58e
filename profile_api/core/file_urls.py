"""
File: profile_api/core/file_urls.py
Description: 存储引用 → 限时访问链接

SecureFileUrlGenerator.sign 将数据库中保存的不透明文件引用转换为
{FILE_BASE_URL}/{引用}?token=<JWT> 形式的签名链接。

过期时间按 FILE_URL_EXPIRE_SECONDS 分桶对齐：
- 同一时间桶内对同一引用签名，得到完全相同的链接
- 链接有效期至少为一个完整的时间桶

Created: 2026-10-19
"""

import math
import time
from typing import Protocol
from urllib.parse import quote, urlencode

from jose import JWTError

from profile_api.core.config import settings
from profile_api.core.error_code import SystemErrorCode
from profile_api.core.exceptions import StorageFault
from profile_api.core.security import create_file_token


class FileUrlSigner(Protocol):
    """文件签名协作方的契约 (便于在测试中替换)"""

    def sign(self, reference: str) -> str: ...


class SecureFileUrlGenerator:
    """
    基于 JWT 的文件签名链接生成器。
    """

    def __init__(
        self,
        base_url: str | None = None,
        expire_seconds: int | None = None,
    ):
        self.base_url = (base_url or settings.FILE_BASE_URL).rstrip("/")
        self.expire_seconds = expire_seconds or settings.FILE_URL_EXPIRE_SECONDS

    def expires_at(self, now: float | None = None) -> int:
        """计算对齐后的过期时间 (下一个桶的结束时刻)"""
        now = time.time() if now is None else now
        bucket = int(math.floor(now / self.expire_seconds))
        return (bucket + 2) * self.expire_seconds

    def sign(self, reference: str, *, now: float | None = None) -> str:
        """
        生成签名链接。

        Raises:
            StorageFault: 引用为空或签名失败
        """
        if not reference:
            raise StorageFault(
                SystemErrorCode.FILE_STORAGE_ERROR, detail="Empty file reference"
            )

        try:
            token = create_file_token(reference, self.expires_at(now))
        except (JWTError, ValueError) as exc:
            raise StorageFault(
                SystemErrorCode.FILE_STORAGE_ERROR, detail=str(exc)
            ) from exc

        path = quote(reference.lstrip("/"), safe="/")
        return f"{self.base_url}/{path}?{urlencode({'token': token})}"
