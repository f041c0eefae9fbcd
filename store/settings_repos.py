"""单例配置仓库 —— 用户资料与各类设置的数据访问层。

每类配置只有一条记录（id 固定为 SINGLETON_ID）。读取总是返回完整记录，
更新为浅合并：嵌套对象（如 working_hours、watermark_settings）由调用方
整体传入，不做深合并。
"""
from typing import Any, List, Optional, Type, TypeVar
from loguru import logger

from .base_crud import BaseCRUD
from .connection import StoreConnection
from .models import (
    Base, UserProfile, BusinessSettings, NotificationSettings,
    SystemSettings, SINGLETON_ID
)

SingletonT = TypeVar("SingletonT", bound=Base)

SINGLETON_MODELS: List[Type[Base]] = [
    UserProfile, BusinessSettings, NotificationSettings, SystemSettings,
]


class SettingsRepository(BaseCRUD):
    """单例配置 仓库。"""

    def __init__(self, conn: StoreConnection) -> None:
        super().__init__(conn)

    def ensure_defaults(self) -> None:
        """为缺失的单例配置写入默认记录（幂等）。"""
        with self._get_session() as session:
            created = False
            for model in SINGLETON_MODELS:
                if self.get_by_id(model, SINGLETON_ID, session=session) is None:
                    session.add(model(id=SINGLETON_ID))
                    created = True
            if created:
                session.commit()
                logger.info("Default settings records created")

    def get(self, model: Type[SingletonT]) -> SingletonT:
        """获取完整的单例配置。"""
        record = self.get_by_id(model, SINGLETON_ID)
        if record is None:
            self.ensure_defaults()
            record = self.get_by_id(model, SINGLETON_ID)
        return record

    def update(self, model: Type[SingletonT],
               **updates: Any) -> Optional[SingletonT]:
        """浅合并更新单例配置。

        Args:
            model: 单例配置模型类。
            **updates: 需要覆盖的字段，嵌套对象整体替换。

        Returns:
            更新后的完整配置；没有可写字段时返回 None（空操作）。
        """
        self.get(model)
        return self.update_by_id(model, SINGLETON_ID, **updates)
