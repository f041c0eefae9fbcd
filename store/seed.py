"""初始数据加载。

将 StudioConfig 提供的演示数据写入一个（通常为空的）StudioStore。
配置中的记录通过 ``key`` 相互引用，这里按写入顺序把 key 解析为生成的 id，
保证推荐关系双向一致、预约和相册指向正确的客户与套餐。
"""
from typing import Dict, Any, Optional
from loguru import logger

from config.studio_config import StudioConfig, studio_config
from .manager import StudioStore
from .models import (
    UserProfile, BusinessSettings, NotificationSettings, SystemSettings
)


def _without(data: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in keys}


def seed_store(store: StudioStore,
               config: Optional[StudioConfig] = None) -> Dict[str, Dict[str, int]]:
    """写入初始数据。

    Args:
        store: 目标存储。
        config: 工作室配置，默认使用全局 studio_config。

    Returns:
        key 到生成 id 的映射：``{"clients": {...}, "packages": {...}}``。
    """
    config = config or studio_config
    logger.info("Seeding studio store...")

    with store.write_lock:
        # 客户：先写入，再统一回填推荐关系
        client_ids: Dict[str, int] = {}
        client_fixtures = config.get_clients()
        for fixture in client_fixtures:
            client_ids[fixture["key"]] = store.clients.import_record(
                _without(fixture, "key", "referred_by", "referrals")
            )
        for fixture in client_fixtures:
            referred_by = fixture.get("referred_by")
            store.clients.update(
                client_ids[fixture["key"]],
                referred_by=client_ids.get(referred_by) if referred_by else None,
                referrals=[
                    client_ids[key] for key in fixture.get("referrals", [])
                    if key in client_ids
                ],
            )

        package_ids: Dict[str, int] = {}
        for fixture in config.get_packages():
            package_ids[fixture["key"]] = store.packages.import_record(
                _without(fixture, "key")
            )

        for fixture in config.get_bookings():
            record = _without(fixture, "client_key", "package_key")
            record["client_id"] = client_ids.get(fixture.get("client_key"))
            record["package_id"] = package_ids.get(fixture.get("package_key"))
            store.bookings.import_record(record)

        for fixture in config.get_galleries():
            record = _without(fixture, "client_key")
            record["client_id"] = client_ids.get(fixture.get("client_key"))
            store.galleries.import_record(record)

        for fixture in config.get_referral_programs():
            store.referral_programs.import_record(fixture)

        store.config_records.update(UserProfile, **config.get_user_profile())
        store.config_records.update(
            BusinessSettings, **config.get_business_settings()
        )
        store.config_records.update(
            NotificationSettings, **config.get_notification_settings()
        )
        store.config_records.update(
            SystemSettings, **config.get_system_settings()
        )

    logger.info(
        f"Seeded {len(client_ids)} clients, {len(package_ids)} packages"
    )
    return {"clients": client_ids, "packages": package_ids}
