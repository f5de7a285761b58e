"""
File: profile_api/db/models/quiz_score.py
Description: 测评成绩表 (1:1 User)

Created: 2026-10-19
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from profile_api.db.models.base import UserOwnedMixin, UUIDModel


class QuizScore(UUIDModel, UserOwnedMixin):
    """
    测评成绩 (quiz_scores 分组)
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return "quiz_scores"

    score_percentage: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2), comment="得分百分比"
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), comment="完成时间 (UTC)"
    )
