"""
File: profile_api/db/models/user_work_detail.py
Description: 工作经历表 (1:N User)

一对多关系，不参与主查询的 JOIN，
由关联子查询聚合为 JSON 数组，避免单值分组被重复展开。

Created: 2026-10-19
"""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from profile_api.db.models.base import UUIDModel


class UserWorkDetail(UUIDModel):
    """
    工作经历 (work_history 分组中的一项)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "user_work_details"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id"),
        index=True,
        nullable=False,
        comment="关联用户ID",
    )

    organization_name: Mapped[str | None] = mapped_column(
        String(255), comment="单位名称"
    )
    rank: Mapped[str | None] = mapped_column(String(100), comment="职级")
    responsibilities: Mapped[str | None] = mapped_column(Text, comment="工作职责")
    start_date: Mapped[date | None] = mapped_column(Date, comment="开始日期")
    end_date: Mapped[date | None] = mapped_column(Date, comment="结束日期 (NULL=至今)")
