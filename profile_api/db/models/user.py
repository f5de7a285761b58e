"""
File: profile_api/db/models/user.py
Description: 用户核心账号模型

账号由会话子系统创建与维护，本服务只读。
完整档案的 basic 分组来自本表 (id, email, created_at, last_login)。

Created: 2026-10-19
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from profile_api.db.models.base import SoftDeleteMixin, UUIDModel


class User(UUIDModel, SoftDeleteMixin):
    """
    用户模型 (账号域)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "users"

    __table_args__ = (
        CheckConstraint("length(trim(email)) > 0", name="ck_users_email_not_empty"),
    )

    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, comment="用户邮箱 (登录凭证)"
    )

    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="最近登录时间 (UTC)"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=text("true"),
        nullable=False,
        comment="是否激活 (停用账号按不存在处理)",
    )
