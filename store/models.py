"""SQLAlchemy ORM 模型定义。

本模块定义了工作室存储的所有表模型，包括：
- 客户、预约、相册、服务套餐、推荐计划等实体集合
- 用户资料、经营设置、通知设置、系统设置等单例配置

嵌套的从属数据（预约提醒、相册图片、套餐特性、推荐列表、各类嵌套设置）
以 JSON 形式存放在所属记录上，随所属记录整体读写。

实体之间的 id 引用（client_id、package_id、referred_by、referrals）均为
软引用：不建外键，写入时不校验存在性，删除时不级联。
"""
from typing import Dict, Any, List, Optional
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, Float, JSON
)
from sqlalchemy.orm import declarative_base
from datetime import datetime

# SQLAlchemy declarative base，所有模型都继承自此类
Base = declarative_base()

# 允许使用旧式类型注解
Base.__allow_unmapped__ = True

# SQLite AUTOINCREMENT：id 严格递增，删除后不复用
_MONOTONIC_IDS = {"sqlite_autoincrement": True}

# 单例配置记录固定使用的主键
SINGLETON_ID = 1


class Client(Base):
    """客户表模型。

    Attributes:
        id: 主键，严格递增整数。
        name: 客户姓名。
        email: 邮箱。
        phone: 电话。
        avatar: 头像 URL，可选。
        status: 状态，可选值：active / inactive，默认 active。
        total_spent: 累计消费，独立字段，不由预约金额推导。
        referred_by: 推荐人客户 id（软引用），可选。
        referrals: 被推荐客户 id 列表（软引用）。
        created_at: 创建时间。
    """
    __tablename__ = "clients"
    __table_args__ = _MONOTONIC_IDS

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(100), nullable=False, default="")
    email: str = Column(String(200), default="")
    phone: str = Column(String(50), default="")
    avatar: Optional[str] = Column(Text)
    status: str = Column(String(20), default="active")  # active / inactive
    total_spent: float = Column(Float, default=0)
    referred_by: Optional[int] = Column(Integer)
    referrals: List[int] = Column(JSON, default=list)
    created_at: datetime = Column(DateTime, default=datetime.now)


class Booking(Base):
    """预约表模型。

    reminders 中的每一项结构为::

        {"id": str, "type": "email" | "sms", "message": str,
         "scheduled_date": ISO-8601 str, "sent": bool}

    Attributes:
        id: 主键，严格递增整数。
        client_id: 客户 id（软引用）。
        type: 拍摄类型：wedding / portrait / event / commercial。
        title: 标题。
        date: 拍摄时间。
        duration: 时长（小时）。
        location: 地点。
        status: 状态：pending / confirmed / completed / cancelled。
        package_id: 套餐 id（软引用），可选。
        price: 价格。
        deposit: 定金。
        notes: 备注，可选。
        reminders: 提醒列表。
    """
    __tablename__ = "bookings"
    __table_args__ = _MONOTONIC_IDS

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    client_id: Optional[int] = Column(Integer)
    type: str = Column(String(20), default="portrait")
    title: str = Column(String(200), default="")
    date: Optional[datetime] = Column(DateTime)
    duration: float = Column(Float, default=0)
    location: str = Column(String(200), default="")
    status: str = Column(String(20), default="pending")
    package_id: Optional[int] = Column(Integer)
    price: float = Column(Float, default=0)
    deposit: float = Column(Float, default=0)
    notes: Optional[str] = Column(Text)
    reminders: List[Dict[str, Any]] = Column(JSON, default=list)


class Gallery(Base):
    """相册表模型。

    images 中的每一项结构为::

        {"id": str, "url": str, "thumbnail": str, "title": str | None,
         "selected": bool, "download_count": int}

    Attributes:
        id: 主键，严格递增整数。
        client_id: 客户 id（软引用）。
        title: 标题。
        description: 描述，可选。
        cover_image: 封面图 URL。
        images: 图片列表。
        is_public: 是否公开。
        password: 访问密码，可选。
        download_enabled: 是否允许下载。
        created_at: 创建时间。
    """
    __tablename__ = "galleries"
    __table_args__ = _MONOTONIC_IDS

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    client_id: Optional[int] = Column(Integer)
    title: str = Column(String(200), default="")
    description: Optional[str] = Column(Text)
    cover_image: str = Column(Text, default="")
    images: List[Dict[str, Any]] = Column(JSON, default=list)
    is_public: bool = Column(Boolean, default=False)
    password: Optional[str] = Column(String(100))
    download_enabled: bool = Column(Boolean, default=True)
    created_at: datetime = Column(DateTime, default=datetime.now)


class Package(Base):
    """服务套餐表模型。"""
    __tablename__ = "packages"
    __table_args__ = _MONOTONIC_IDS

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(100), default="")
    description: str = Column(Text, default="")
    price: float = Column(Float, default=0)
    duration: float = Column(Float, default=0)  # 小时
    features: List[str] = Column(JSON, default=list)
    is_active: bool = Column(Boolean, default=True)


class ReferralProgram(Base):
    """推荐计划表模型。

    与实际推荐关系不关联，奖励计算不读取此处配置。
    """
    __tablename__ = "referral_programs"
    __table_args__ = _MONOTONIC_IDS

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(100), default="")
    reward_type: str = Column(String(20), default="percentage")  # percentage / fixed
    reward_value: float = Column(Float, default=0)
    is_active: bool = Column(Boolean, default=True)


# ================================================================
# 单例配置
# ================================================================

class UserProfile(Base):
    """用户资料（单例）。"""
    __tablename__ = "user_profile"

    id: int = Column(Integer, primary_key=True, default=SINGLETON_ID)
    name: str = Column(String(100), default="")
    email: str = Column(String(200), default="")
    avatar: Optional[str] = Column(Text)
    business_name: str = Column(String(200), default="")
    phone: str = Column(String(50), default="")
    website: Optional[str] = Column(String(200))
    bio: Optional[str] = Column(Text)
    location: str = Column(String(200), default="")


class BusinessSettings(Base):
    """经营设置（单例）。

    working_hours 为整体替换的嵌套对象：``{"start", "end", "days"}``。
    """
    __tablename__ = "business_settings"

    id: int = Column(Integer, primary_key=True, default=SINGLETON_ID)
    business_name: str = Column(String(200), default="")
    address: str = Column(Text, default="")
    phone: str = Column(String(50), default="")
    email: str = Column(String(200), default="")
    website: str = Column(String(200), default="")
    logo: Optional[str] = Column(Text)
    currency: str = Column(String(10), default="USD")
    timezone: str = Column(String(50), default="UTC")
    date_format: str = Column(String(20), default="MM/DD/YYYY")
    language: str = Column(String(10), default="en")
    tax_rate: float = Column(Float, default=0)
    invoice_prefix: str = Column(String(20), default="INV-")
    working_hours: Dict[str, Any] = Column(
        JSON,
        default=lambda: {
            "start": "09:00",
            "end": "18:00",
            "days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        }
    )


class NotificationSettings(Base):
    """通知设置（单例）。

    四个字段均为整体替换的嵌套对象。
    """
    __tablename__ = "notification_settings"

    id: int = Column(Integer, primary_key=True, default=SINGLETON_ID)
    email_notifications: Dict[str, bool] = Column(
        JSON,
        default=lambda: {
            "new_booking": True,
            "booking_reminder": True,
            "payment_received": True,
            "gallery_viewed": False,
            "client_registered": True,
        }
    )
    sms_notifications: Dict[str, bool] = Column(
        JSON,
        default=lambda: {"booking_reminder": False, "payment_due": False}
    )
    push_notifications: Dict[str, bool] = Column(
        JSON,
        default=lambda: {
            "enabled": False, "booking": False,
            "payment": False, "gallery": False,
        }
    )
    reminder_settings: Dict[str, Any] = Column(
        JSON,
        default=lambda: {
            "default_reminder_time": 24,  # 提前小时数
            "auto_reminders": False,
            "reminder_frequency": "once",  # once / daily / weekly
        }
    )


class SystemSettings(Base):
    """系统设置（单例）。

    default_gallery_settings 与 watermark_settings 为整体替换的嵌套对象。
    """
    __tablename__ = "system_settings"

    id: int = Column(Integer, primary_key=True, default=SINGLETON_ID)
    theme: str = Column(String(10), default="system")  # light / dark / system
    auto_backup: bool = Column(Boolean, default=False)
    backup_frequency: str = Column(String(10), default="weekly")
    data_retention: int = Column(Integer, default=12)  # 月
    two_factor_auth: bool = Column(Boolean, default=False)
    session_timeout: int = Column(Integer, default=60)  # 分钟
    default_gallery_settings: Dict[str, bool] = Column(
        JSON,
        default=lambda: {
            "is_public": False,
            "download_enabled": True,
            "password_protected": False,
        }
    )
    watermark_settings: Dict[str, Any] = Column(
        JSON,
        default=lambda: {
            "enabled": False,
            "text": "",
            "position": "bottom-right",
            "opacity": 50,
        }
    )
