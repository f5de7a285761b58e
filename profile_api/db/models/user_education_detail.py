"""
File: profile_api/db/models/user_education_detail.py
Description: 教育经历表 (中小学/学历证书/国民服务，1:1 User)

Created: 2026-10-19
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from profile_api.db.models.base import UserOwnedMixin, UUIDModel


class UserEducationDetail(UUIDModel, UserOwnedMixin):
    """
    教育经历 (education 分组)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "user_education_details"

    # 小学
    primary_school_name: Mapped[str | None] = mapped_column(String(255))
    primary_graduation_year: Mapped[str | None] = mapped_column(String(10))

    # 中学
    secondary_school_name: Mapped[str | None] = mapped_column(String(255))
    secondary_graduation_year: Mapped[str | None] = mapped_column(String(10))

    # 高等教育
    certificate_type: Mapped[str | None] = mapped_column(String(100))
    class_of_degree: Mapped[str | None] = mapped_column(String(100))
    institution: Mapped[str | None] = mapped_column(String(255))
    course: Mapped[str | None] = mapped_column(String(255))
    high_graduation_year: Mapped[str | None] = mapped_column(String(10))

    # NYSC: National Youth Service Corps
    nysc_certificate_number: Mapped[str | None] = mapped_column(String(100))
    year_of_service: Mapped[str | None] = mapped_column(String(20))
