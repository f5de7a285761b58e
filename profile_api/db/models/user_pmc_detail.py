"""
File: profile_api/db/models/user_pmc_detail.py
Description: 职业团体会员信息表 (PMC: Professional Membership Certificate，1:1 User)

Created: 2026-10-19
"""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from profile_api.db.models.base import UserOwnedMixin, UUIDModel


class UserPmcDetail(UUIDModel, UserOwnedMixin):
    """
    职业团体会员 (pmc_details 分组)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "user_pmc_details"

    body_name: Mapped[str | None] = mapped_column(String(255), comment="职业团体名称")
    membership_id: Mapped[str | None] = mapped_column(String(100), comment="会员编号")
    membership_type: Mapped[str | None] = mapped_column(String(100), comment="会员类型")
    membership_responsibilities: Mapped[str | None] = mapped_column(
        Text, comment="会员职责"
    )
    certificate_date: Mapped[date | None] = mapped_column(Date, comment="证书日期")
