"""
File: profile_api/domains/profile/mapper.py
Description: 扁平查询行 → 分组档案结构 (纯函数)

reshape_profile_row 与数据访问完全解耦：
输入任意键值映射 (数据库行、测试字典均可)，输出 FullProfile。
- 按 constants 中的布局把扁平键拆分进各分组，已移动的键从工作副本中删除
- 缺失的键视为 null，因此关联行不存在时分组为全 null 对象
- work_history 兼容 None / JSON 字符串 / bytes / 已解码列表，空结果统一为 []
- 文件槽位保留原始引用，空字符串视为缺失；签名由服务层负责

Created: 2026-10-19
"""

from collections.abc import Iterable, Mapping
from typing import Any

import orjson

from profile_api.domains.profile.constants import (
    APPLICATION_FIELDS,
    BASIC_FIELDS,
    EDUCATION_FIELDS,
    FILE_SLOTS,
    PMC_FIELDS,
    QUIZ_FIELDS,
    WORK_HISTORY_FIELD,
)
from profile_api.domains.profile.schemas import (
    ApplicationInfo,
    BasicInfo,
    EducationInfo,
    FullProfile,
    PmcDetails,
    ProfileFiles,
    QuizScores,
    WorkHistoryEntry,
)


def _take(flat: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """从工作副本中取出 (并删除) 指定字段"""
    return {name: flat.pop(name, None) for name in fields}


def parse_work_history(raw: Any) -> list[WorkHistoryEntry]:
    """
    解析工作经历子查询结果。

    Raises:
        ValueError: 内容不是 JSON 数组或条目结构非法
    """
    if isinstance(raw, (str, bytes, bytearray)):
        raw = orjson.loads(raw) if raw else None

    if raw is None:
        return []

    if not isinstance(raw, list):
        raise ValueError(f"work_history must be a JSON array, got {type(raw).__name__}")

    return [WorkHistoryEntry.model_validate(item) for item in raw]


def reshape_profile_row(row: Mapping[str, Any]) -> FullProfile:
    """
    将扁平行重组为完整档案。
    """
    flat = dict(row)

    files = {slot: flat.pop(column, None) or None for column, slot in FILE_SLOTS.items()}

    return FullProfile(
        basic=BasicInfo.model_validate(_take(flat, BASIC_FIELDS)),
        application=ApplicationInfo.model_validate(_take(flat, APPLICATION_FIELDS)),
        education=EducationInfo.model_validate(_take(flat, EDUCATION_FIELDS)),
        work_history=parse_work_history(flat.pop(WORK_HISTORY_FIELD, None)),
        pmc_details=PmcDetails.model_validate(_take(flat, PMC_FIELDS)),
        quiz_scores=QuizScores.model_validate(_take(flat, QUIZ_FIELDS)),
        files=ProfileFiles.model_validate(files),
    )
