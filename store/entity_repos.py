"""实体仓库 —— 客户、服务套餐、推荐计划的数据访问层。

每个仓库继承 EntityCRUD 获得通用的增删改查能力，并添加领域特定的查询方法。
"""
from typing import Optional, List
from sqlalchemy.orm import Session
from loguru import logger

from .base_crud import EntityCRUD
from .connection import StoreConnection
from .models import Client, Package, ReferralProgram


class ClientRepository(EntityCRUD):
    """客户 仓库。

    推荐关系采用宽松策略：``add``/``update``/``delete`` 不会自动维护
    ``referred_by`` 与 ``referrals`` 的对称性，删除客户也不会清理他人
    列表中指向它的 id。需要双向一致时显式调用 ``link_referral``。
    """

    model = Client

    def __init__(self, conn: StoreConnection) -> None:
        super().__init__(conn)

    def get_active_clients(self,
                           session: Optional[Session] = None) -> List[Client]:
        """获取所有状态为 active 的客户。"""
        return self.get_all(
            Client, filters={"status": "active"}, session=session
        )

    def link_referral(self, referrer_id: int, referred_id: int) -> bool:
        """在同一事务中建立双向推荐关系。

        - 推荐人的 referrals 追加被推荐人 id（已存在则不重复）；
        - 被推荐人的 referred_by 指向推荐人；
        - 若被推荐人原先由其他客户推荐，从原推荐人的 referrals 中移除。

        Args:
            referrer_id: 推荐人客户 id。
            referred_id: 被推荐客户 id。

        Returns:
            是否写入；任一方不存在或两者相同时返回 False（空操作）。
        """
        if referrer_id == referred_id:
            return False

        with self._get_session() as session:
            referrer = self.get_by_id(Client, referrer_id, session=session)
            referred = self.get_by_id(Client, referred_id, session=session)
            if referrer is None or referred is None:
                logger.debug(
                    f"Referral {referrer_id} -> {referred_id} skipped, "
                    f"client not found"
                )
                return False

            previous_id = referred.referred_by
            if previous_id is not None and previous_id != referrer_id:
                previous = self.get_by_id(Client, previous_id, session=session)
                if previous is not None:
                    previous.referrals = [
                        rid for rid in (previous.referrals or [])
                        if rid != referred_id
                    ]

            referrals = list(referrer.referrals or [])
            if referred_id not in referrals:
                referrals.append(referred_id)
            referrer.referrals = referrals
            referred.referred_by = referrer_id

            session.commit()
            logger.info(f"Linked referral {referrer_id} -> {referred_id}")
            return True


class PackageRepository(EntityCRUD):
    """服务套餐 仓库。"""

    model = Package

    def __init__(self, conn: StoreConnection) -> None:
        super().__init__(conn)

    def get_active_packages(self,
                            session: Optional[Session] = None
                            ) -> List[Package]:
        """获取所有在售套餐。"""
        return self.get_all(
            Package, filters={"is_active": True}, session=session
        )


class ReferralProgramRepository(EntityCRUD):
    """推荐计划 仓库。"""

    model = ReferralProgram

    def __init__(self, conn: StoreConnection) -> None:
        super().__init__(conn)

    def get_active_programs(self,
                            session: Optional[Session] = None
                            ) -> List[ReferralProgram]:
        """获取所有启用中的推荐计划。"""
        return self.get_all(
            ReferralProgram, filters={"is_active": True}, session=session
        )
