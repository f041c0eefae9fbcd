"""工作室存储模块。

提供客户、预约、相册、套餐、推荐计划及单例配置的存储与写入 API。
统一入口为 StudioStore；初始演示数据通过 seed_store 加载。
"""
from store.manager import StudioStore, StoreEvent
from store.seed import seed_store

__all__ = ["StudioStore", "StoreEvent", "seed_store"]
