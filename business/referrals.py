"""推荐网络 —— 客户推荐关系的派生视图。

推荐关系以软引用保存在客户记录上（referred_by / referrals），
存储层不保证双向一致。这里的视图对悬空 id 做容错：解析不到的客户直接忽略。

奖励金额按固定单价计算：``len(referrals) × reward_unit``，
使用客户记录中列出的推荐数量（包含已无法解析的 id），
不读取 ReferralProgram 的 reward_type / reward_value。
排行按可解析的被推荐客户数量。
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from config.settings import settings
from store.models import Client
from . import stats


@dataclass
class ReferralNetworkEntry:
    """推荐网络中的一位推荐人。

    Attributes:
        referrer: 推荐人。
        referrals: 可解析的被推荐客户（按推荐人列表顺序）。
        reward: 推荐奖励金额。
    """
    referrer: Client
    referrals: List[Client] = field(default_factory=list)
    reward: float = 0

    @property
    def referral_count(self) -> int:
        """推荐人列表中记录的推荐数量（含悬空 id），用于计算奖励。"""
        return len(self.referrer.referrals or [])

    @property
    def resolved_count(self) -> int:
        """可解析的被推荐客户数量，用于排行。"""
        return len(self.referrals)


@dataclass
class ReferralIssue:
    """一条推荐关系不一致记录。

    kind 取值：
    - dangling_referral: referrals 中的 id 找不到客户
    - dangling_referrer: referred_by 指向的客户不存在
    - missing_back_reference: referred_by 指向的推荐人 referrals 中没有本客户
    - missing_referred_by: 出现在他人 referrals 中，但 referred_by 不指向该推荐人
    """
    client_id: int
    kind: str
    other_id: int


def _index(clients: Sequence[Client]) -> Dict[int, Client]:
    return {c.id: c for c in clients}


def build_referral_network(clients: Sequence[Client],
                           reward_unit: Optional[float] = None
                           ) -> List[ReferralNetworkEntry]:
    """构建推荐网络。

    每位 referrals 非空的客户生成一条记录，按客户原顺序排列。

    Args:
        clients: 客户快照。
        reward_unit: 每位被推荐客户的奖励，默认取 settings.referral_reward_unit。

    Returns:
        推荐网络记录列表。
    """
    if reward_unit is None:
        reward_unit = settings.referral_reward_unit
    by_id = _index(clients)

    network = []
    for client in clients:
        referral_ids = client.referrals or []
        if not referral_ids:
            continue
        resolved = [by_id[rid] for rid in referral_ids if rid in by_id]
        network.append(ReferralNetworkEntry(
            referrer=client,
            referrals=resolved,
            reward=len(referral_ids) * reward_unit,
        ))
    return network


def top_referrers(network: Sequence[ReferralNetworkEntry],
                  limit: Optional[int] = None
                  ) -> List[ReferralNetworkEntry]:
    """按可解析的被推荐客户数量降序排列推荐人，数量相同保持原顺序。"""
    ranked = sorted(network, key=lambda e: e.resolved_count, reverse=True)
    return ranked if limit is None else ranked[:limit]


def total_referral_rewards(network: Sequence[ReferralNetworkEntry]) -> float:
    return sum(e.reward for e in network)


def total_referral_count(clients: Sequence[Client]) -> int:
    """所有客户 referrals 列表长度之和。"""
    return sum(len(c.referrals or []) for c in clients)


def referred_client_count(clients: Sequence[Client]) -> int:
    return sum(1 for c in clients if c.referred_by is not None)


def referrer_count(clients: Sequence[Client]) -> int:
    """referrals 非空的客户数。"""
    return sum(1 for c in clients if c.referrals)


def conversion_rate(clients: Sequence[Client]) -> int:
    """被推荐客户占全部客户的百分比（四舍五入取整），无客户时为 0。"""
    if not clients:
        return 0
    return stats.round_half_up(
        referred_client_count(clients) / len(clients) * 100
    )


def find_referral_inconsistencies(clients: Sequence[Client]
                                  ) -> List[ReferralIssue]:
    """检查推荐关系的双向一致性与悬空引用。

    只报告，不修复。

    Returns:
        不一致记录列表，按客户原顺序排列。
    """
    by_id = _index(clients)
    issues = []
    for client in clients:
        for rid in client.referrals or []:
            referred = by_id.get(rid)
            if referred is None:
                issues.append(ReferralIssue(client.id, "dangling_referral", rid))
            elif referred.referred_by != client.id:
                issues.append(ReferralIssue(rid, "missing_referred_by", client.id))

        if client.referred_by is not None:
            referrer = by_id.get(client.referred_by)
            if referrer is None:
                issues.append(ReferralIssue(
                    client.id, "dangling_referrer", client.referred_by
                ))
            elif client.id not in (referrer.referrals or []):
                issues.append(ReferralIssue(
                    client.id, "missing_back_reference", referrer.id
                ))
    return issues
