"""
File: profile_api/domains/profile/schemas.py
Description: 完整档案领域 Pydantic 模型 (Schema)

FullProfile 是对外输出的标准结构，由七个分组组成：
basic / application / education / work_history / pmc_details / quiz_scores / files

规范：
- 单值分组 (LEFT JOIN) 所有字段可空：关联行不存在时输出全 null 对象，而非省略
- work_history 永远是列表，无记录时为 []
- files 中只会出现签名链接或 null，不会出现原始存储引用

Created: 2026-10-19
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# ------------------------------------------------------------------------------
# 单值分组 (One-to-One Groups)
# ------------------------------------------------------------------------------


class BasicInfo(BaseModel):
    """账号基础信息 (必然存在)"""

    id: UUID = Field(..., description="用户 ID")
    email: str = Field(..., description="邮箱")
    created_at: datetime = Field(..., description="注册时间 (UTC)")
    last_login: datetime | None = Field(default=None, description="最近登录时间 (UTC)")


class ApplicationInfo(BaseModel):
    """报名申请信息"""

    position: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    middlename: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    marital_status: str | None = None
    phone_number: str | None = None
    nin: str | None = Field(default=None, description="国民身份号")
    emergency_number: str | None = None
    address: str | None = None
    lga: str | None = Field(default=None, description="地方政府辖区")
    state_of_origin: str | None = None
    status: str | None = Field(default=None, description="申请状态标签")


class EducationInfo(BaseModel):
    """教育经历"""

    primary_school_name: str | None = None
    primary_graduation_year: str | None = None
    secondary_school_name: str | None = None
    secondary_graduation_year: str | None = None
    certificate_type: str | None = None
    class_of_degree: str | None = None
    institution: str | None = None
    course: str | None = None
    high_graduation_year: str | None = None
    nysc_certificate_number: str | None = None
    year_of_service: str | None = None


class PmcDetails(BaseModel):
    """职业团体会员信息"""

    body_name: str | None = None
    membership_id: str | None = None
    membership_type: str | None = None
    membership_responsibilities: str | None = None
    certificate_date: date | None = None


class QuizScores(BaseModel):
    """测评成绩"""

    score_percentage: float | None = Field(default=None, description="得分百分比")
    completed_at: datetime | None = Field(default=None, description="完成时间 (UTC)")


# ------------------------------------------------------------------------------
# 多值分组 (One-to-Many Group)
# ------------------------------------------------------------------------------


class WorkHistoryEntry(BaseModel):
    """工作经历单项"""

    id: UUID
    organization_name: str | None = None
    rank: str | None = None
    responsibilities: str | None = None
    start_date: date | None = None
    end_date: date | None = None


# ------------------------------------------------------------------------------
# 文件分组
# ------------------------------------------------------------------------------


class ProfileFiles(BaseModel):
    """
    文件槽位。
    映射层产出时为原始存储引用，服务层签名后替换为链接。
    """

    passport: str | None = None
    birth_certificate: str | None = None
    secondary_certificate: str | None = None
    higher_certificate: str | None = None
    nysc_certificate: str | None = None
    pmc_certificate: str | None = None


# ------------------------------------------------------------------------------
# 聚合输出
# ------------------------------------------------------------------------------


class FullProfile(BaseModel):
    """
    完整档案 (响应 data 字段)
    """

    model_config = ConfigDict(frozen=True)

    basic: BasicInfo
    application: ApplicationInfo = Field(default_factory=ApplicationInfo)
    education: EducationInfo = Field(default_factory=EducationInfo)
    work_history: list[WorkHistoryEntry] = Field(default_factory=list)
    pmc_details: PmcDetails = Field(default_factory=PmcDetails)
    quiz_scores: QuizScores = Field(default_factory=QuizScores)
    files: ProfileFiles = Field(default_factory=ProfileFiles)
