"""
File: profile_api/domains/profile/repository.py
Description: 完整档案仓储层 (Repository)

本模块负责完整档案的数据库读取：
1. build_profile_statement: 构造主查询
   - users LEFT JOIN 申请 / 教育 / 职业团体 / 测评 / 文件 (各表 user_id 唯一，至多一行)
   - 工作经历使用关联子查询 json_agg(json_build_object(...)) 聚合为 JSON 数组
     一对多关系不进入 JOIN，避免单值分组按工作经历条数重复
2. configure_snapshot: 设置只读 + REPEATABLE READ 隔离级别 + 事务级语句超时
3. get_profile_row: 执行主查询，返回扁平行 (列标签见 constants)

注意：事务的开启/提交/回滚由 Service 层负责，本层只执行语句。

Created: 2026-10-19
"""

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from sqlalchemy import RowMapping, Select, func, literal_column, select
from sqlalchemy.dialects.postgresql import aggregate_order_by
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import Label

from profile_api.core.config import settings
from profile_api.db.models import (
    QuizScore,
    User,
    UserApplication,
    UserEducationDetail,
    UserFile,
    UserPmcDetail,
    UserWorkDetail,
)
from profile_api.domains.profile.constants import (
    APPLICATION_FIELDS,
    BASIC_FIELDS,
    EDUCATION_FIELDS,
    FILE_SLOTS,
    PMC_FIELDS,
    QUIZ_FIELDS,
    WORK_ENTRY_FIELDS,
    WORK_HISTORY_FIELD,
)


def _labelled(model: type, fields: Iterable[str]) -> list[Label[Any]]:
    """按字段名取列，并以字段名作为结果列标签"""
    return [getattr(model, name).label(name) for name in fields]


def build_work_history_subquery() -> Label[Any]:
    """
    工作经历关联子查询：每个用户聚合为一个 JSON 数组 (无记录时为 NULL)。
    数组按 start_date、id 排序，保证同一数据多次读取结果一致。
    """
    entry = func.json_build_object(
        *(
            part
            for name in WORK_ENTRY_FIELDS
            for part in (literal_column(f"'{name}'"), getattr(UserWorkDetail, name))
        )
    )

    return (
        select(
            func.json_agg(
                aggregate_order_by(
                    entry,
                    UserWorkDetail.start_date.asc().nulls_last(),
                    UserWorkDetail.id.asc(),
                )
            )
        )
        .where(UserWorkDetail.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
        .label(WORK_HISTORY_FIELD)
    )


def build_profile_statement(user_id: UUID) -> Select:
    """
    构造完整档案主查询 (单行)。
    """
    return (
        select(
            *_labelled(User, BASIC_FIELDS),
            *_labelled(UserApplication, APPLICATION_FIELDS),
            *_labelled(UserEducationDetail, EDUCATION_FIELDS),
            build_work_history_subquery(),
            *_labelled(UserPmcDetail, PMC_FIELDS),
            *_labelled(QuizScore, QUIZ_FIELDS),
            *_labelled(UserFile, FILE_SLOTS.keys()),
        )
        .select_from(User)
        .outerjoin(UserApplication, UserApplication.user_id == User.id)
        .outerjoin(UserEducationDetail, UserEducationDetail.user_id == User.id)
        .outerjoin(UserPmcDetail, UserPmcDetail.user_id == User.id)
        .outerjoin(QuizScore, QuizScore.user_id == User.id)
        .outerjoin(UserFile, UserFile.user_id == User.id)
        .where(
            User.id == user_id,
            User.is_deleted.is_(False),
            User.is_active.is_(True),
        )
    )


class ProfileRepository:
    """
    完整档案仓储类 (只读)。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def configure_snapshot(self) -> None:
        """
        在事务的第一条语句之前调用：
        - REPEATABLE READ + READ ONLY：事务内所有读取基于同一快照
        - statement_timeout 仅对当前事务生效 (set_config 第三个参数 is_local=true)
        """
        await self.session.connection(
            execution_options={
                "isolation_level": "REPEATABLE READ",
                "postgresql_readonly": True,
            }
        )
        await self.session.execute(
            select(
                func.set_config(
                    "statement_timeout",
                    str(settings.PROFILE_STATEMENT_TIMEOUT_MS),
                    True,
                )
            )
        )

    async def get_profile_row(self, user_id: UUID) -> RowMapping | None:
        """
        查询扁平档案行。用户不存在、已软删除或已停用时返回 None。
        """
        result = await self.session.execute(build_profile_statement(user_id))
        return result.mappings().one_or_none()
