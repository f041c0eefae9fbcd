"""
工作室配置接口 - 支持可替换的初始数据

新项目可以实现自己的工作室配置，替换默认的演示数据。
记录之间通过 ``key`` 相互引用（如 ``client_key``、``referred_by``），
由 ``store.seed.seed_store`` 在写入时解析为真实 id。
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Dict, Any


class StudioConfig(ABC):
    """工作室配置抽象基类"""

    @abstractmethod
    def get_clients(self) -> List[Dict[str, Any]]:
        """获取初始客户列表"""
        pass

    @abstractmethod
    def get_packages(self) -> List[Dict[str, Any]]:
        """获取服务套餐列表"""
        pass

    @abstractmethod
    def get_bookings(self) -> List[Dict[str, Any]]:
        """获取初始预约列表"""
        pass

    @abstractmethod
    def get_galleries(self) -> List[Dict[str, Any]]:
        """获取初始相册列表"""
        pass

    @abstractmethod
    def get_referral_programs(self) -> List[Dict[str, Any]]:
        """获取推荐计划列表"""
        pass

    @abstractmethod
    def get_user_profile(self) -> Dict[str, Any]:
        """获取用户资料"""
        pass

    @abstractmethod
    def get_business_settings(self) -> Dict[str, Any]:
        """获取经营设置"""
        pass

    @abstractmethod
    def get_notification_settings(self) -> Dict[str, Any]:
        """获取通知设置"""
        pass

    @abstractmethod
    def get_system_settings(self) -> Dict[str, Any]:
        """获取系统设置"""
        pass


class PhotographyStudioConfig(StudioConfig):
    """摄影工作室演示配置"""

    def get_clients(self) -> List[Dict[str, Any]]:
        return [
            {
                "key": "sarah",
                "name": "Sarah & James Wilson",
                "email": "sarah.wilson@email.com",
                "phone": "+1 (555) 123-4567",
                "avatar": "https://images.unsplash.com/photo-1494790108755-2616b612b5e5?w=150&h=150&fit=crop",
                "status": "active",
                "total_spent": 2500,
                "referrals": ["emily"],
                "created_at": datetime(2024, 1, 15),
            },
            {
                "key": "emily",
                "name": "Emily Chen",
                "email": "emily.chen@email.com",
                "phone": "+1 (555) 987-6543",
                "avatar": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=150&h=150&fit=crop",
                "status": "active",
                "total_spent": 1800,
                "referred_by": "sarah",
                "referrals": [],
                "created_at": datetime(2024, 2, 10),
            },
            {
                "key": "michael",
                "name": "Michael Rodriguez",
                "email": "michael.r@email.com",
                "phone": "+1 (555) 456-7890",
                "status": "active",
                "total_spent": 3200,
                "referrals": [],
                "created_at": datetime(2024, 1, 20),
            },
        ]

    def get_packages(self) -> List[Dict[str, Any]]:
        return [
            {
                "key": "wedding",
                "name": "Wedding Premium",
                "description": "Complete wedding photography package",
                "price": 2500,
                "duration": 8,
                "features": ["8 hours coverage", "500+ edited photos", "Online gallery", "USB drive"],
                "is_active": True,
            },
            {
                "key": "portrait",
                "name": "Portrait Session",
                "description": "Professional portrait photography",
                "price": 450,
                "duration": 2,
                "features": ["2 hours session", "50+ edited photos", "Online gallery", "5 prints"],
                "is_active": True,
            },
            {
                "key": "event",
                "name": "Event Coverage",
                "description": "Corporate and private events",
                "price": 800,
                "duration": 4,
                "features": ["4 hours coverage", "200+ edited photos", "Online gallery"],
                "is_active": True,
            },
        ]

    def get_bookings(self) -> List[Dict[str, Any]]:
        return [
            {
                "client_key": "sarah",
                "package_key": "wedding",
                "type": "wedding",
                "title": "Sarah & James Wedding",
                "date": datetime(2024, 6, 15),
                "duration": 8,
                "location": "Grand Oak Venue, Downtown",
                "status": "confirmed",
                "price": 2500,
                "deposit": 500,
                "notes": "Outdoor ceremony, indoor reception",
                "reminders": [],
            },
            {
                "client_key": "emily",
                "package_key": "portrait",
                "type": "portrait",
                "title": "Emily Portrait Session",
                "date": datetime(2024, 3, 20),
                "duration": 2,
                "location": "Studio A",
                "status": "completed",
                "price": 450,
                "deposit": 150,
                "reminders": [],
            },
        ]

    def get_galleries(self) -> List[Dict[str, Any]]:
        return [
            {
                "client_key": "emily",
                "title": "Emily Portrait Session",
                "description": "Professional headshots and lifestyle portraits",
                "cover_image": "https://images.unsplash.com/photo-1494790108755-2616b612b5e5?w=400&h=300&fit=crop",
                "images": [
                    {
                        "url": "https://images.unsplash.com/photo-1494790108755-2616b612b5e5?w=800&h=1200&fit=crop",
                        "thumbnail": "https://images.unsplash.com/photo-1494790108755-2616b612b5e5?w=300&h=200&fit=crop",
                        "title": "Portrait 1",
                        "selected": True,
                        "download_count": 3,
                    },
                    {
                        "url": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=800&h=1200&fit=crop",
                        "thumbnail": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=300&h=200&fit=crop",
                        "title": "Portrait 2",
                        "selected": False,
                        "download_count": 1,
                    },
                ],
                "is_public": False,
                "password": "emily2024",
                "download_enabled": True,
                "created_at": datetime(2024, 3, 21),
            },
        ]

    def get_referral_programs(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": "Friend Referral",
                "reward_type": "percentage",
                "reward_value": 10,
                "is_active": True,
            },
        ]

    def get_user_profile(self) -> Dict[str, Any]:
        return {
            "name": "John Doe",
            "email": "john@photography.com",
            "avatar": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&h=150&fit=crop",
            "business_name": "John Doe Photography",
            "phone": "+1 (555) 123-4567",
            "website": "www.johndoephotography.com",
            "bio": "Professional photographer specializing in weddings and portraits",
            "location": "Los Angeles, CA",
        }

    def get_business_settings(self) -> Dict[str, Any]:
        return {
            "business_name": "John Doe Photography",
            "address": "123 Photography St, Los Angeles, CA 90210",
            "phone": "+1 (555) 123-4567",
            "email": "john@photography.com",
            "website": "www.johndoephotography.com",
            "currency": "USD",
            "timezone": "America/Los_Angeles",
            "date_format": "MM/DD/YYYY",
            "language": "en",
            "tax_rate": 8.25,
            "invoice_prefix": "INV-",
            "working_hours": {
                "start": "09:00",
                "end": "18:00",
                "days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
            },
        }

    def get_notification_settings(self) -> Dict[str, Any]:
        return {
            "email_notifications": {
                "new_booking": True,
                "booking_reminder": True,
                "payment_received": True,
                "gallery_viewed": False,
                "client_registered": True,
            },
            "sms_notifications": {
                "booking_reminder": True,
                "payment_due": True,
            },
            "push_notifications": {
                "enabled": True,
                "booking": True,
                "payment": True,
                "gallery": False,
            },
            "reminder_settings": {
                "default_reminder_time": 24,
                "auto_reminders": True,
                "reminder_frequency": "daily",
            },
        }

    def get_system_settings(self) -> Dict[str, Any]:
        return {
            "theme": "light",
            "auto_backup": True,
            "backup_frequency": "daily",
            "data_retention": 12,
            "two_factor_auth": False,
            "session_timeout": 60,
            "default_gallery_settings": {
                "is_public": False,
                "download_enabled": True,
                "password_protected": True,
            },
            "watermark_settings": {
                "enabled": False,
                "text": "John Doe Photography",
                "position": "bottom-right",
                "opacity": 50,
            },
        }


# 全局工作室配置实例（可以在启动时替换）
studio_config: StudioConfig = PhotographyStudioConfig()
