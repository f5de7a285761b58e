"""
File: profile_api/db/models/user_application.py
Description: 报名申请表 (个人/户籍信息，1:1 User)

Created: 2026-10-19
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from profile_api.db.models.base import UserOwnedMixin, UUIDModel


class UserApplication(UUIDModel, UserOwnedMixin):
    """
    报名申请 (application 分组)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "user_applications"

    position: Mapped[str | None] = mapped_column(String(100), comment="申请岗位")
    firstname: Mapped[str | None] = mapped_column(String(100), comment="名")
    lastname: Mapped[str | None] = mapped_column(String(100), comment="姓")
    middlename: Mapped[str | None] = mapped_column(String(100), comment="中间名")
    gender: Mapped[str | None] = mapped_column(String(20), comment="性别")
    date_of_birth: Mapped[date | None] = mapped_column(Date, comment="出生日期")
    marital_status: Mapped[str | None] = mapped_column(String(30), comment="婚姻状况")
    phone_number: Mapped[str | None] = mapped_column(String(30), comment="联系电话")
    # NIN: National Identification Number
    nin: Mapped[str | None] = mapped_column(String(20), comment="国民身份号")
    emergency_number: Mapped[str | None] = mapped_column(
        String(30), comment="紧急联系电话"
    )
    address: Mapped[str | None] = mapped_column(String(255), comment="住址")
    # LGA: Local Government Area
    lga: Mapped[str | None] = mapped_column(String(100), comment="地方政府辖区")
    state_of_origin: Mapped[str | None] = mapped_column(String(100), comment="籍贯州")
    status: Mapped[str | None] = mapped_column(String(30), comment="申请状态标签")
