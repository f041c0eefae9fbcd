"""工作室存储 —— 统一门面（Facade）。

StudioStore 是 store 模块的统一入口，组合了所有子仓库，提供三类 API：

1. **快照读取**：``get_clients()``、``get_user_profile()`` 等，
   返回按插入顺序排列的完整记录，记录与存储脱离，修改它们不影响存储。

2. **写入 API**：每类实体的 ``add_*`` / ``update_*`` / ``delete_*``
   以及单例配置的 ``update_*``。生成 id、盖创建时间、浅合并更新，
   不存在的 id 为静默空操作。写入后通知订阅者。

3. **派生视图**：统计、推荐网络、搜索，每次读取时基于当前快照重新计算。

每个实例拥有独立的内存数据库，测试和会话之间互不影响。
所有读写通过同一把可重入锁串行化，后台任务（如提醒派发）可以安全写入。
"""
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List, Dict, Any, Callable

from loguru import logger

from business import stats, referrals, search
from config.settings import Settings, settings as default_settings
from .connection import StoreConnection
from .entity_repos import (
    ClientRepository, PackageRepository, ReferralProgramRepository
)
from .booking_repos import BookingRepository, GalleryRepository
from .settings_repos import SettingsRepository
from .models import (
    Client, Booking, Gallery, Package, ReferralProgram,
    UserProfile, BusinessSettings, NotificationSettings, SystemSettings
)


@dataclass
class StoreEvent:
    """存储变更事件。

    Attributes:
        collection: 变更的集合或配置名（clients / bookings / galleries /
            packages / referral_programs / user_profile / business_settings /
            notification_settings / system_settings）。
        action: add / update / delete。
        entity_id: 变更记录的 id，单例配置为 None。
    """
    collection: str
    action: str
    entity_id: Optional[int] = None


StoreListener = Callable[[StoreEvent], None]


class StudioStore:
    """工作室存储 —— 统一门面。

    Attributes:
        conn: 存储连接管理器。
        settings: 应用配置。
        clients: 客户仓库。
        bookings: 预约仓库。
        galleries: 相册仓库。
        packages: 套餐仓库。
        referral_programs: 推荐计划仓库。
        config_records: 单例配置仓库。

    Example::

        store = StudioStore()
        client_id = store.add_client({"name": "Emily Chen"})
        store.update_client(client_id, status="inactive")
        stats = store.get_client_stats()
    """

    def __init__(self, database_url: Optional[str] = None,
                 app_settings: Optional[Settings] = None) -> None:
        """初始化工作室存储。

        Args:
            database_url: 数据库连接URL。如果为None则使用settings配置。
            app_settings: 应用配置，默认使用全局 settings。
        """
        self.settings = app_settings or default_settings
        self.conn = StoreConnection(database_url or self.settings.database_url)
        self.conn.create_tables()

        self.clients = ClientRepository(self.conn)
        self.bookings = BookingRepository(self.conn)
        self.galleries = GalleryRepository(self.conn)
        self.packages = PackageRepository(self.conn)
        self.referral_programs = ReferralProgramRepository(self.conn)
        self.config_records = SettingsRepository(self.conn)
        self.config_records.ensure_defaults()

        self._lock = threading.RLock()
        self._listeners: List[StoreListener] = []

    # ================================================================
    # 基础设施方法
    # ================================================================

    @property
    def database_url(self) -> str:
        return self.conn.database_url

    @property
    def write_lock(self) -> threading.RLock:
        """串行化所有读写的可重入锁，批量操作可在外层持有。"""
        return self._lock

    def close(self) -> None:
        """关闭存储，内存数据随之释放。"""
        self.conn.close()

    # ================================================================
    # 订阅
    # ================================================================

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """订阅存储变更。

        Args:
            listener: 每次状态变更后以 StoreEvent 调用。空操作不触发。

        Returns:
            取消订阅的函数。
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, collection: str, action: str,
                entity_id: Optional[int] = None) -> None:
        event = StoreEvent(collection, action, entity_id)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Store listener failed on {event}: {e}")

    def _add(self, repo, collection: str, data: Dict[str, Any]) -> int:
        with self._lock:
            record_id = repo.add(data)
        self._notify(collection, "add", record_id)
        return record_id

    def _update(self, repo, collection: str, record_id: int,
                updates: Dict[str, Any]) -> None:
        with self._lock:
            updated = repo.update(record_id, **updates)
        if updated is not None:
            self._notify(collection, "update", record_id)

    def _delete(self, repo, collection: str, record_id: int) -> None:
        with self._lock:
            deleted = repo.delete(record_id)
        if deleted:
            self._notify(collection, "delete", record_id)

    def _update_config(self, model, collection: str,
                       updates: Dict[str, Any]) -> None:
        with self._lock:
            updated = self.config_records.update(model, **updates)
        if updated is not None:
            self._notify(collection, "update")

    # ================================================================
    # 快照读取
    # ================================================================

    def get_clients(self) -> List[Client]:
        with self._lock:
            return self.clients.list_all()

    def get_client(self, client_id: int) -> Optional[Client]:
        with self._lock:
            return self.clients.get(client_id)

    def get_bookings(self) -> List[Booking]:
        with self._lock:
            return self.bookings.list_all()

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        with self._lock:
            return self.bookings.get(booking_id)

    def get_galleries(self) -> List[Gallery]:
        with self._lock:
            return self.galleries.list_all()

    def get_gallery(self, gallery_id: int) -> Optional[Gallery]:
        with self._lock:
            return self.galleries.get(gallery_id)

    def get_packages(self) -> List[Package]:
        with self._lock:
            return self.packages.list_all()

    def get_package(self, package_id: int) -> Optional[Package]:
        with self._lock:
            return self.packages.get(package_id)

    def get_referral_programs(self) -> List[ReferralProgram]:
        with self._lock:
            return self.referral_programs.list_all()

    def get_referral_program(self, program_id: int
                             ) -> Optional[ReferralProgram]:
        with self._lock:
            return self.referral_programs.get(program_id)

    def get_user_profile(self) -> UserProfile:
        with self._lock:
            return self.config_records.get(UserProfile)

    def get_business_settings(self) -> BusinessSettings:
        with self._lock:
            return self.config_records.get(BusinessSettings)

    def get_notification_settings(self) -> NotificationSettings:
        with self._lock:
            return self.config_records.get(NotificationSettings)

    def get_system_settings(self) -> SystemSettings:
        with self._lock:
            return self.config_records.get(SystemSettings)

    # ================================================================
    # 写入 API
    # ================================================================

    def add_client(self, client_data: Dict[str, Any]) -> int:
        """新增客户，返回生成的 id。

        推荐关系不会自动回写到推荐人，需要时调用 ``link_referral``。
        """
        return self._add(self.clients, "clients", client_data)

    def update_client(self, client_id: int, **updates: Any) -> None:
        self._update(self.clients, "clients", client_id, updates)

    def delete_client(self, client_id: int) -> None:
        """删除客户，其预约和相册保留（client_id 变为悬空引用）。"""
        self._delete(self.clients, "clients", client_id)

    def add_booking(self, booking_data: Dict[str, Any]) -> int:
        return self._add(self.bookings, "bookings", booking_data)

    def update_booking(self, booking_id: int, **updates: Any) -> None:
        self._update(self.bookings, "bookings", booking_id, updates)

    def delete_booking(self, booking_id: int) -> None:
        self._delete(self.bookings, "bookings", booking_id)

    def add_gallery(self, gallery_data: Dict[str, Any]) -> int:
        return self._add(self.galleries, "galleries", gallery_data)

    def update_gallery(self, gallery_id: int, **updates: Any) -> None:
        self._update(self.galleries, "galleries", gallery_id, updates)

    def delete_gallery(self, gallery_id: int) -> None:
        self._delete(self.galleries, "galleries", gallery_id)

    def add_package(self, package_data: Dict[str, Any]) -> int:
        return self._add(self.packages, "packages", package_data)

    def update_package(self, package_id: int, **updates: Any) -> None:
        self._update(self.packages, "packages", package_id, updates)

    def delete_package(self, package_id: int) -> None:
        self._delete(self.packages, "packages", package_id)

    def add_referral_program(self, program_data: Dict[str, Any]) -> int:
        return self._add(
            self.referral_programs, "referral_programs", program_data
        )

    def update_referral_program(self, program_id: int,
                                **updates: Any) -> None:
        self._update(
            self.referral_programs, "referral_programs", program_id, updates
        )

    def delete_referral_program(self, program_id: int) -> None:
        self._delete(self.referral_programs, "referral_programs", program_id)

    def update_user_profile(self, **updates: Any) -> None:
        self._update_config(UserProfile, "user_profile", updates)

    def update_business_settings(self, **updates: Any) -> None:
        """浅合并经营设置，working_hours 需整体传入。"""
        self._update_config(BusinessSettings, "business_settings", updates)

    def update_notification_settings(self, **updates: Any) -> None:
        """浅合并通知设置，各嵌套对象需整体传入。"""
        self._update_config(
            NotificationSettings, "notification_settings", updates
        )

    def update_system_settings(self, **updates: Any) -> None:
        """浅合并系统设置，各嵌套对象需整体传入。"""
        self._update_config(SystemSettings, "system_settings", updates)

    def link_referral(self, referrer_id: int, referred_id: int) -> bool:
        """在同一事务中建立双向推荐关系，详见 ClientRepository.link_referral。"""
        with self._lock:
            linked = self.clients.link_referral(referrer_id, referred_id)
        if linked:
            self._notify("clients", "update", referred_id)
        return linked

    # ================================================================
    # 派生视图
    # ================================================================

    def get_upcoming_bookings(self, limit: Optional[int] = None,
                              now: Optional[datetime] = None
                              ) -> List[Booking]:
        if limit is None:
            limit = self.settings.upcoming_bookings_limit
        return stats.upcoming_bookings(self.get_bookings(), now=now, limit=limit)

    def get_recent_galleries(self, limit: Optional[int] = None
                             ) -> List[Gallery]:
        if limit is None:
            limit = self.settings.recent_galleries_limit
        return stats.recent_galleries(self.get_galleries(), limit=limit)

    def get_referral_network(self) -> List[referrals.ReferralNetworkEntry]:
        return referrals.build_referral_network(
            self.get_clients(), self.settings.referral_reward_unit
        )

    def get_top_referrers(self, limit: Optional[int] = None
                          ) -> List[referrals.ReferralNetworkEntry]:
        if limit is None:
            limit = self.settings.top_referrers_limit
        return referrals.top_referrers(self.get_referral_network(), limit)

    def get_referral_inconsistencies(self) -> List[referrals.ReferralIssue]:
        return referrals.find_referral_inconsistencies(self.get_clients())

    def search_clients(self, query: str) -> List[Client]:
        return search.search_clients(self.get_clients(), query)

    def search_bookings(self, query: str) -> List[Booking]:
        with self._lock:
            bookings, clients = self.get_bookings(), self.get_clients()
        return search.search_bookings(bookings, clients, query)

    def search_galleries(self, query: str) -> List[Gallery]:
        with self._lock:
            galleries, clients = self.get_galleries(), self.get_clients()
        return search.search_galleries(galleries, clients, query)

    def search_referral_clients(self, query: str) -> List[Client]:
        return search.search_referral_clients(self.get_clients(), query)

    # ================================================================
    # 便捷统计方法
    # ================================================================

    def get_dashboard_stats(self, now: Optional[datetime] = None
                            ) -> Dict[str, Any]:
        """仪表盘汇总：收入、预约、相册、活跃客户，及近期预约与相册。"""
        with self._lock:
            bookings = self.get_bookings()
            galleries = self.get_galleries()
            clients = self.get_clients()
        names = {c.id: c.name for c in clients}

        upcoming = stats.upcoming_bookings(
            bookings, now=now, limit=self.settings.upcoming_bookings_limit
        )
        recent = stats.recent_galleries(
            galleries, limit=self.settings.recent_galleries_limit
        )
        return {
            "total_revenue": stats.total_revenue(bookings),
            "total_bookings": len(bookings),
            "upcoming_count": stats.upcoming_booking_count(bookings, now=now),
            "total_galleries": len(galleries),
            "active_clients": stats.active_client_count(clients),
            "upcoming_bookings": [
                {
                    "id": b.id,
                    "title": b.title,
                    "date": b.date,
                    "client_name": names.get(b.client_id),
                    "status": b.status,
                }
                for b in upcoming
            ],
            "recent_galleries": [
                {
                    "id": g.id,
                    "title": g.title,
                    "client_name": names.get(g.client_id),
                    "image_count": len(g.images or []),
                    "created_at": g.created_at,
                }
                for g in recent
            ],
        }

    def get_booking_stats(self, now: Optional[datetime] = None
                          ) -> Dict[str, Any]:
        bookings = self.get_bookings()
        return {
            "total_bookings": len(bookings),
            "total_revenue": stats.total_revenue(bookings),
            "average_booking_value": stats.average_booking_value(bookings),
            "upcoming_count": stats.upcoming_booking_count(bookings, now=now),
        }

    def get_client_stats(self) -> Dict[str, Any]:
        clients = self.get_clients()
        return {
            "total_clients": len(clients),
            "active_clients": stats.active_client_count(clients),
            "total_spent": stats.total_client_spend(clients),
            "total_referrals": referrals.total_referral_count(clients),
        }

    def get_gallery_stats(self) -> Dict[str, Any]:
        galleries = self.get_galleries()
        return {
            "total_galleries": len(galleries),
            "public_galleries": stats.public_gallery_count(galleries),
            "total_images": stats.total_images(galleries),
            "total_downloads": stats.total_downloads(galleries),
        }

    def get_package_stats(self) -> Dict[str, Any]:
        packages = self.get_packages()
        return {
            "total_packages": len(packages),
            "active_packages": stats.active_package_count(packages),
            "average_price": stats.average_package_price(packages),
        }

    def get_referral_stats(self) -> Dict[str, Any]:
        """推荐统计：推荐总数、推荐人数、转化率、奖励合计与排行。"""
        clients = self.get_clients()
        network = referrals.build_referral_network(
            clients, self.settings.referral_reward_unit
        )
        top = referrals.top_referrers(
            network, self.settings.top_referrers_limit
        )
        return {
            "total_referrals": referrals.total_referral_count(clients),
            "referred_clients": referrals.referred_client_count(clients),
            "active_referrers": referrals.referrer_count(clients),
            "conversion_rate": referrals.conversion_rate(clients),
            "total_rewards": referrals.total_referral_rewards(network),
            "top_referrers": [
                {
                    "client_id": entry.referrer.id,
                    "name": entry.referrer.name,
                    "referral_count": entry.referral_count,
                    "resolved_count": entry.resolved_count,
                    "reward": entry.reward,
                }
                for entry in top
            ],
        }
