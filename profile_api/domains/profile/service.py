"""
File: profile_api/domains/profile/service.py
Description: 完整档案领域服务 (业务逻辑层)

本模块封装完整档案的组装流程：
1. 在单个只读事务中执行主查询 (所有分组来自同一快照)
2. 事务正常结束时提交；任何数据访问故障回滚并转换为 StorageFault
3. 事务关闭后判断用户是否存在 (NotFound 不会触碰事务)
4. 扁平行重组为分组结构 (mapper.reshape_profile_row)
5. 文件槽位：存在引用 → 签名链接；缺失 → null

注意：
- 事务的开启与结束由本层负责，仓储层只执行语句。
- 只有真正进入 session.begin() 的事务才会回滚；begin 本身失败时没有需要回滚的事务。

Created: 2026-10-19
"""

from uuid import UUID

from sqlalchemy import RowMapping
from sqlalchemy.exc import SQLAlchemyError

from profile_api.core.exceptions import AppException, StorageFault
from profile_api.core.file_urls import FileUrlSigner
from profile_api.core.logging import logger
from profile_api.domains.profile.constants import ProfileErrorCode
from profile_api.domains.profile.mapper import reshape_profile_row
from profile_api.domains.profile.repository import ProfileRepository
from profile_api.domains.profile.schemas import FullProfile, ProfileFiles


class ProfileService:
    """
    完整档案服务 (聚合器)。

    职责：
    - 管理读事务的生命周期
    - 编排 查询 → 重组 → 文件签名
    """

    def __init__(self, repo: ProfileRepository, file_urls: FileUrlSigner):
        self.repo = repo
        self.file_urls = file_urls

    async def fetch(self, user_id: UUID) -> FullProfile:
        """
        获取当前用户的完整档案。

        Raises:
            AppException(ProfileErrorCode.USER_NOT_FOUND): users 表中无此用户
            StorageFault: 查询/提交失败、数据格式损坏或文件签名失败
        """
        row = await self._read_profile_row(user_id)

        if row is None:
            raise AppException(
                ProfileErrorCode.USER_NOT_FOUND,
                detail=f"User with id {user_id} not found, deleted or inactive",
            )

        try:
            profile = reshape_profile_row(row)
        except ValueError as exc:
            raise StorageFault(detail=f"Malformed profile row: {exc}") from exc

        profile = profile.model_copy(update={"files": self._sign_files(profile.files)})

        logger.bind(
            user_id=str(user_id),
            work_history=len(profile.work_history),
            files=sum(1 for url in profile.files.model_dump().values() if url),
        ).info("Full profile assembled")

        return profile

    async def _read_profile_row(self, user_id: UUID) -> RowMapping | None:
        """
        在单个只读事务中读取扁平行。
        离开 async with 块时：正常返回 → COMMIT，异常 → ROLLBACK。
        """
        session = self.repo.session
        try:
            async with session.begin():
                await self.repo.configure_snapshot()
                return await self.repo.get_profile_row(user_id)
        except (SQLAlchemyError, OSError) as exc:
            # 连接失败、语句超时、提交失败均归为存储故障
            raise StorageFault(detail=str(exc)) from exc

    def _sign_files(self, files: ProfileFiles) -> ProfileFiles:
        """将存储引用逐个替换为签名链接"""
        return ProfileFiles.model_validate(
            {
                slot: self.file_urls.sign(reference) if reference else None
                for slot, reference in files.model_dump().items()
            }
        )
