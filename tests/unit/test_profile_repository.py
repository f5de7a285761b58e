"""
File: tests/unit/test_profile_repository.py
Description: 完整档案主查询结构测试 (编译为 PostgreSQL SQL，不连接数据库)

验证：
1. 单值分组全部为 LEFT OUTER JOIN
2. 工作经历为关联子查询 json_agg，且不参与 JOIN
3. 工作经历排序稳定 (start_date, id)
4. 只查询当前用户且排除软删除账号

Created: 2026-10-19
"""

import uuid

import pytest
from sqlalchemy.dialects import postgresql

from profile_api.domains.profile.repository import build_profile_statement


@pytest.fixture
def compiled_sql() -> str:
    statement = build_profile_statement(uuid.uuid4())
    return str(statement.compile(dialect=postgresql.dialect()))


def test_single_valued_groups_are_left_joined(compiled_sql: str) -> None:
    for table in (
        "user_applications",
        "user_education_details",
        "user_pmc_details",
        "quiz_scores",
        "user_files",
    ):
        assert f"LEFT OUTER JOIN {table} ON {table}.user_id = users.id" in compiled_sql


def test_work_history_is_correlated_subquery(compiled_sql: str) -> None:
    assert "JOIN user_work_details" not in compiled_sql
    assert "json_agg(json_build_object(" in compiled_sql
    assert "FROM user_work_details" in compiled_sql
    assert "WHERE user_work_details.user_id = users.id" in compiled_sql
    assert ") AS work_history" in compiled_sql


def test_work_history_order_is_deterministic(compiled_sql: str) -> None:
    assert (
        "ORDER BY user_work_details.start_date ASC NULLS LAST, "
        "user_work_details.id ASC)" in compiled_sql
    )


def test_work_history_entry_keys(compiled_sql: str) -> None:
    for key in (
        "id",
        "organization_name",
        "rank",
        "responsibilities",
        "start_date",
        "end_date",
    ):
        assert f"'{key}', user_work_details.{key}" in compiled_sql


def test_filters_current_user_and_inactive_accounts(compiled_sql: str) -> None:
    assert "FROM users" in compiled_sql
    assert "WHERE users.id = " in compiled_sql
    assert "users.is_deleted IS false" in compiled_sql
    assert "users.is_active IS true" in compiled_sql


def test_flat_column_labels() -> None:
    statement = build_profile_statement(uuid.uuid4())
    labels = [column.name for column in statement.selected_columns]

    assert labels[:4] == ["id", "email", "created_at", "last_login"]
    assert "work_history" in labels
    assert "passport_file_path" in labels
    assert len(labels) == len(set(labels))
