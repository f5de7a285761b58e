"""
File: tests/unit/test_mapper.py
Description: 扁平行 → 完整档案 重组逻辑单元测试

本模块测试 mapper 的纯函数行为：
1. 关联记录缺失时分组输出全 null 对象 (而非省略)
2. work_history 的各种原始形态 (NULL / JSON 文本 / bytes / 已解码列表)
3. 文件槽位映射与空字符串处理
4. 非法数据抛出 ValueError

Created: 2026-10-19
"""

import uuid
from collections.abc import Callable
from datetime import date
from typing import Any

import orjson
import pytest

from profile_api.domains.profile.mapper import parse_work_history, reshape_profile_row

# ------------------------------------------------------------------------------
# reshape_profile_row
# ------------------------------------------------------------------------------


def test_reshape_full_row(make_profile_row: Callable[..., dict[str, Any]]) -> None:
    """测试：完整行被拆分进七个分组"""
    row = make_profile_row()

    profile = reshape_profile_row(row)

    assert profile.basic.id == row["id"]
    assert profile.basic.email == "ada.obi@example.com"
    assert profile.application.firstname == "Ada"
    assert profile.application.date_of_birth == date(1994, 5, 17)
    assert profile.education.institution == "University of Lagos"
    assert profile.pmc_details.membership_id == "NSA-4411"
    assert profile.quiz_scores.score_percentage == pytest.approx(87.5)

    assert [entry.rank for entry in profile.work_history] == ["Analyst", "Senior Analyst"]
    assert profile.work_history[1].end_date is None


def test_reshape_does_not_mutate_input(
    make_profile_row: Callable[..., dict[str, Any]],
) -> None:
    """测试：输入映射保持不变 (重组在工作副本上进行)"""
    row = make_profile_row()
    snapshot = dict(row)

    reshape_profile_row(row)

    assert row == snapshot


def test_reshape_bare_user_groups_are_null(bare_profile_row: dict[str, Any]) -> None:
    """
    测试：没有任何关联记录的用户
    验证：单值分组全部字段为 null，work_history 为 []，文件槽位为 null
    """
    profile = reshape_profile_row(bare_profile_row)
    data = profile.model_dump(mode="json")

    assert data["basic"]["email"] == "new.user@example.com"
    assert data["basic"]["last_login"] is None

    for group in ("application", "education", "pmc_details", "quiz_scores", "files"):
        assert data[group], f"{group} should be present"
        assert all(value is None for value in data[group].values()), group

    assert data["work_history"] == []


def test_reshape_file_slots(make_profile_row: Callable[..., dict[str, Any]]) -> None:
    """测试：存储列映射到响应槽位，空字符串视为缺失"""
    profile = reshape_profile_row(make_profile_row())

    assert profile.files.passport == "uploads/ada/passport.jpg"
    assert profile.files.birth_certificate == "uploads/ada/birth certificate.pdf"
    assert profile.files.nysc_certificate == "uploads/ada/nysc.pdf"
    assert profile.files.secondary_certificate is None
    assert profile.files.higher_certificate is None
    assert profile.files.pmc_certificate is None


def test_reshape_output_has_no_flat_keys(
    make_profile_row: Callable[..., dict[str, Any]],
) -> None:
    """测试：输出只有分组键，原始列名不会泄露到顶层"""
    data = reshape_profile_row(make_profile_row()).model_dump()

    assert set(data) == {
        "basic",
        "application",
        "education",
        "work_history",
        "pmc_details",
        "quiz_scores",
        "files",
    }
    assert "passport_file_path" not in data["files"]


def test_reshape_rejects_malformed_work_history(
    make_profile_row: Callable[..., dict[str, Any]],
) -> None:
    """测试：work_history 不是数组时抛出 ValueError"""
    with pytest.raises(ValueError):
        reshape_profile_row(make_profile_row(work_history='{"id": "x"}'))


# ------------------------------------------------------------------------------
# parse_work_history
# ------------------------------------------------------------------------------


@pytest.mark.parametrize("raw", [None, "", b"", "null", []])
def test_parse_work_history_empty(raw: Any) -> None:
    assert parse_work_history(raw) == []


def test_parse_work_history_accepts_all_shapes() -> None:
    """测试：JSON 文本、bytes 与已解码列表得到相同结果"""
    entries = [
        {
            "id": str(uuid.UUID(int=1)),
            "organization_name": "Census Office",
            "rank": None,
            "responsibilities": None,
            "start_date": "2020-02-01",
            "end_date": None,
        }
    ]
    encoded = orjson.dumps(entries)

    from_text = parse_work_history(encoded.decode())
    from_bytes = parse_work_history(encoded)
    from_list = parse_work_history(entries)

    assert from_text == from_bytes == from_list
    assert from_list[0].start_date == date(2020, 2, 1)


def test_parse_work_history_invalid_json() -> None:
    """orjson.JSONDecodeError 是 ValueError 的子类"""
    with pytest.raises(ValueError):
        parse_work_history("[{not json")


def test_parse_work_history_invalid_entry() -> None:
    """pydantic.ValidationError 是 ValueError 的子类"""
    with pytest.raises(ValueError):
        parse_work_history([{"organization_name": "missing id"}])


def test_parse_work_history_many_entries() -> None:
    """测试：大量工作经历逐条保留，数量与字段一致"""
    entries = [
        {
            "id": str(uuid.UUID(int=n + 1)),
            "organization_name": f"Org {n}",
            "rank": f"Rank {n}",
            "responsibilities": f"Duty {n}",
            "start_date": "2010-01-01",
            "end_date": "2011-01-01",
        }
        for n in range(250)
    ]

    parsed = parse_work_history(orjson.dumps(entries).decode())

    assert len(parsed) == 250
    assert [entry.model_dump(mode="json") for entry in parsed] == entries
