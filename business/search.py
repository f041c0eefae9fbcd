"""搜索过滤 —— 大小写不敏感的子串匹配。

预约与相册按标题或关联客户姓名匹配（通过 client_id 关联查询，不是存储字段）；
client_id 悬空时关联姓名视为空串，不抛异常。空查询匹配全部记录。
"""
from typing import Dict, List, Optional, Sequence

from store.models import Booking, Client, Gallery


def _contains(value: Optional[str], needle: str) -> bool:
    return needle in (value or "").lower()


def _client_names(clients: Sequence[Client]) -> Dict[int, str]:
    return {c.id: c.name for c in clients}


def search_clients(clients: Sequence[Client], query: str) -> List[Client]:
    """按姓名或邮箱搜索客户。"""
    needle = query.lower()
    return [
        c for c in clients
        if _contains(c.name, needle) or _contains(c.email, needle)
    ]


def search_bookings(bookings: Sequence[Booking], clients: Sequence[Client],
                    query: str) -> List[Booking]:
    """按标题或关联客户姓名搜索预约。"""
    needle = query.lower()
    names = _client_names(clients)
    return [
        b for b in bookings
        if _contains(b.title, needle)
        or _contains(names.get(b.client_id), needle)
    ]


def search_galleries(galleries: Sequence[Gallery], clients: Sequence[Client],
                     query: str) -> List[Gallery]:
    """按标题或关联客户姓名搜索相册。"""
    needle = query.lower()
    names = _client_names(clients)
    return [
        g for g in galleries
        if _contains(g.title, needle)
        or _contains(names.get(g.client_id), needle)
    ]


def search_referral_clients(clients: Sequence[Client],
                            query: str) -> List[Client]:
    """搜索参与推荐的客户：姓名匹配，且推荐过他人或被他人推荐。"""
    needle = query.lower()
    return [
        c for c in clients
        if _contains(c.name, needle)
        and (c.referrals or c.referred_by is not None)
    ]
