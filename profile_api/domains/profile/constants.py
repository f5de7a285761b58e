"""
File: profile_api/domains/profile/constants.py
Description: 完整档案领域常量定义 (错误码 + 限流策略 + 扁平行布局)
Namespace: profile.*

Created: 2026-10-19
"""

from starlette.status import HTTP_404_NOT_FOUND

from profile_api.core.error_code import BaseErrorCode

# ==============================================================================
# 1. 错误码定义 (Error Codes)
# ==============================================================================


class ProfileErrorCode(BaseErrorCode):
    """
    完整档案领域错误定义
    Tuple Structure: (HTTP_Status, Code_String, Label)
    """

    # users 表中不存在 (或已软删除) 当前身份
    USER_NOT_FOUND = (HTTP_404_NOT_FOUND, "profile.user_not_found", "User not found")


# ==============================================================================
# 2. 限流策略 (Rate Limit Policy)
# ==============================================================================

RATE_LIMIT_ACTION = "user_full_profile"
RATE_LIMIT_MAX_CALLS = 15
RATE_LIMIT_WINDOW_SECONDS = 60


# ==============================================================================
# 3. 扁平行布局 (Flat Row Layout)
# 查询结果的列标签 → 分组。仓储层按此生成列标签，映射层按此拆分。
# ==============================================================================

BASIC_FIELDS: tuple[str, ...] = ("id", "email", "created_at", "last_login")

APPLICATION_FIELDS: tuple[str, ...] = (
    "position",
    "firstname",
    "lastname",
    "middlename",
    "gender",
    "date_of_birth",
    "marital_status",
    "phone_number",
    "nin",
    "emergency_number",
    "address",
    "lga",
    "state_of_origin",
    "status",
)

EDUCATION_FIELDS: tuple[str, ...] = (
    "primary_school_name",
    "primary_graduation_year",
    "secondary_school_name",
    "secondary_graduation_year",
    "certificate_type",
    "class_of_degree",
    "institution",
    "course",
    "high_graduation_year",
    "nysc_certificate_number",
    "year_of_service",
)

PMC_FIELDS: tuple[str, ...] = (
    "body_name",
    "membership_id",
    "membership_type",
    "membership_responsibilities",
    "certificate_date",
)

QUIZ_FIELDS: tuple[str, ...] = ("score_percentage", "completed_at")

WORK_HISTORY_FIELD = "work_history"

WORK_ENTRY_FIELDS: tuple[str, ...] = (
    "id",
    "organization_name",
    "rank",
    "responsibilities",
    "start_date",
    "end_date",
)

# 存储列 → 响应中的文件槽位
FILE_SLOTS: dict[str, str] = {
    "passport_file_path": "passport",
    "birth_certificate_file_path": "birth_certificate",
    "sec_file_path": "secondary_certificate",
    "high_certificate_file_path": "higher_certificate",
    "nysc_file_path": "nysc_certificate",
    "pmc_file_path": "pmc_certificate",
}
