"""
File: profile_api/db/models/__init__.py
Description: ORM 模型注册表

导入全部模型，确保 Base.metadata 中包含所有表定义
(测试建表、迁移工具自动发现均依赖于此)。

Created: 2026-10-19
"""

from profile_api.db.models.base import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    UserOwnedMixin,
    UUIDBase,
    UUIDModel,
)
from profile_api.db.models.quiz_score import QuizScore
from profile_api.db.models.user import User
from profile_api.db.models.user_application import UserApplication
from profile_api.db.models.user_education_detail import UserEducationDetail
from profile_api.db.models.user_file import UserFile
from profile_api.db.models.user_pmc_detail import UserPmcDetail
from profile_api.db.models.user_work_detail import UserWorkDetail

__all__ = [
    # 基类
    "Base",
    "UUIDBase",
    "UUIDModel",
    "TimestampMixin",
    "SoftDeleteMixin",
    "UserOwnedMixin",
    # 业务模型
    "User",
    "UserApplication",
    "UserEducationDetail",
    "UserWorkDetail",
    "UserPmcDetail",
    "QuizScore",
    "UserFile",
]
