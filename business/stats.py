"""经营统计 —— 基于存储快照的纯函数聚合。

所有函数只读取传入的记录序列，不修改任何状态，可重复调用。
可能除以零的平均值统一返回 0。取整与前端展示一致，采用四舍五入（half-up）。
"""
import math
from datetime import datetime
from typing import Optional, List, Sequence

from store.models import Booking, Client, Gallery, Package


def round_half_up(value: float) -> int:
    """四舍五入为整数（0.5 向上取整）。"""
    return int(math.floor(value + 0.5))


# ================================================================
# 预约
# ================================================================

def total_revenue(bookings: Sequence[Booking]) -> float:
    """全部预约价格之和，无预约时为 0。"""
    return sum((b.price or 0) for b in bookings)


def average_booking_value(bookings: Sequence[Booking]) -> int:
    """平均客单价（四舍五入取整），无预约时为 0。"""
    if not bookings:
        return 0
    return round_half_up(total_revenue(bookings) / len(bookings))


def upcoming_bookings(bookings: Sequence[Booking],
                      now: Optional[datetime] = None,
                      limit: Optional[int] = None) -> List[Booking]:
    """即将到来的预约。

    只保留时间严格晚于 now 的预约，按时间升序排列（时间相同保持原顺序）。

    Args:
        bookings: 预约快照。
        now: 参照时间，默认当前本地时间。
        limit: 最多返回条数，None 表示不截断。

    Returns:
        预约列表。
    """
    now = now or datetime.now()
    upcoming = sorted(
        (b for b in bookings if b.date is not None and b.date > now),
        key=lambda b: b.date
    )
    return upcoming if limit is None else upcoming[:limit]


def upcoming_booking_count(bookings: Sequence[Booking],
                           now: Optional[datetime] = None) -> int:
    return len(upcoming_bookings(bookings, now=now))


# ================================================================
# 相册
# ================================================================

def recent_galleries(galleries: Sequence[Gallery],
                     limit: Optional[int] = None) -> List[Gallery]:
    """按创建时间倒序的相册，时间相同保持原顺序。"""
    recent = sorted(
        galleries,
        key=lambda g: g.created_at or datetime.min,
        reverse=True
    )
    return recent if limit is None else recent[:limit]


def total_images(galleries: Sequence[Gallery]) -> int:
    return sum(len(g.images or []) for g in galleries)


def total_downloads(galleries: Sequence[Gallery]) -> int:
    """所有相册中所有图片的下载次数之和。"""
    return sum(
        image.get("download_count", 0) or 0
        for g in galleries
        for image in (g.images or [])
    )


def public_gallery_count(galleries: Sequence[Gallery]) -> int:
    return sum(1 for g in galleries if g.is_public)


# ================================================================
# 客户
# ================================================================

def active_client_count(clients: Sequence[Client]) -> int:
    return sum(1 for c in clients if c.status == "active")


def total_client_spend(clients: Sequence[Client]) -> float:
    """客户 total_spent 字段之和（不由预约推导）。"""
    return sum((c.total_spent or 0) for c in clients)


# ================================================================
# 套餐
# ================================================================

def active_package_count(packages: Sequence[Package]) -> int:
    return sum(1 for p in packages if p.is_active)


def average_package_price(packages: Sequence[Package]) -> int:
    """套餐平均价格（四舍五入取整），无套餐时为 0。"""
    if not packages:
        return 0
    return round_half_up(
        sum((p.price or 0) for p in packages) / len(packages)
    )
