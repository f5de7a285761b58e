"""
File: profile_api/db/models/user_file.py
Description: 上传文件引用表 (1:1 User)

仅存储存储服务中的对象引用 (Key)，不存储文件内容。
对外输出前必须转换为签名链接，禁止直接返回引用。

Created: 2026-10-19
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from profile_api.db.models.base import UserOwnedMixin, UUIDModel


class UserFile(UUIDModel, UserOwnedMixin):
    """
    上传文件 (files 分组)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "user_files"

    passport_file_path: Mapped[str | None] = mapped_column(
        String(255), comment="证件照引用"
    )
    birth_certificate_file_path: Mapped[str | None] = mapped_column(
        String(255), comment="出生证明引用"
    )
    sec_file_path: Mapped[str | None] = mapped_column(
        String(255), comment="中学毕业证书引用"
    )
    high_certificate_file_path: Mapped[str | None] = mapped_column(
        String(255), comment="高等教育证书引用"
    )
    nysc_file_path: Mapped[str | None] = mapped_column(
        String(255), comment="国民服务证书引用"
    )
    pmc_file_path: Mapped[str | None] = mapped_column(
        String(255), comment="职业团体证书引用"
    )
