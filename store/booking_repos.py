"""业务记录仓库 —— 预约与相册的数据访问层。

预约的提醒列表、相册的图片列表作为所属记录的一部分整体写入：
更新时传入新列表即整体替换旧列表。写入前统一规范化：
- 缺少 id 的提醒/图片自动生成 id；
- 日期统一转换（预约时间存为 datetime，提醒时间存为 ISO-8601 字符串）。
"""
import uuid
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from sqlalchemy.orm import Session

from .base_crud import EntityCRUD
from .connection import StoreConnection
from .models import Booking, Gallery


def _new_item_id() -> str:
    return uuid.uuid4().hex


class BookingRepository(EntityCRUD):
    """预约 仓库。

    client_id 与 package_id 为软引用，写入时不校验。
    """

    model = Booking

    def __init__(self, conn: StoreConnection) -> None:
        super().__init__(conn)

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        prepared = dict(data)
        if prepared.get("date") is not None:
            prepared["date"] = self.parse_datetime(
                prepared["date"], "Booking date"
            )
        if "reminders" in prepared:
            prepared["reminders"] = [
                self._normalize_reminder(r)
                for r in (prepared["reminders"] or [])
            ]
        return prepared

    @classmethod
    def _normalize_reminder(cls, reminder: Dict[str, Any]) -> Dict[str, Any]:
        normalized = {
            "id": reminder.get("id") or _new_item_id(),
            "type": reminder.get("type", "email"),
            "message": reminder.get("message", ""),
            "scheduled_date": None,
            "sent": bool(reminder.get("sent", False)),
        }
        if reminder.get("scheduled_date") is not None:
            normalized["scheduled_date"] = cls.parse_datetime(
                reminder["scheduled_date"], "Reminder scheduled_date"
            ).isoformat()
        return normalized

    @staticmethod
    def parse_datetime(value: Any, field_name: str = "Date") -> datetime:
        """解析日期时间值。

        带时区偏移的值统一换算为本地时间并去掉时区信息，
        与存储和比较时使用的本地 naive 时间一致。

        Args:
            value: datetime、date 或 ISO-8601 字符串（如 ``2024-06-15``、
                ``2024-06-15T14:00:00``、``2024-06-15T14:00:00+00:00``）。
            field_name: 字段名称（用于错误提示）。

        Returns:
            本地 naive datetime；date 转换为当天零点。

        Raises:
            ValueError: 格式无效或缺失。
        """
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value)
            except ValueError:
                raise ValueError(
                    f"Invalid {field_name} format: {value}, "
                    f"expected ISO-8601"
                )
        else:
            raise ValueError(f"{field_name} is required")

        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed

    def get_by_client(self, client_id: int,
                      session: Optional[Session] = None) -> List[Booking]:
        """获取某客户的全部预约（按插入顺序）。"""
        return self.get_all(
            Booking, filters={"client_id": client_id}, session=session
        )

    def get_by_status(self, status: str,
                      session: Optional[Session] = None) -> List[Booking]:
        """按状态查询预约。"""
        return self.get_all(
            Booking, filters={"status": status}, session=session
        )


class GalleryRepository(EntityCRUD):
    """相册 仓库。

    client_id 为软引用，写入时不校验。
    """

    model = Gallery

    def __init__(self, conn: StoreConnection) -> None:
        super().__init__(conn)

    def _prepare(self, data: Dict[str, Any]) -> Dict[str, Any]:
        prepared = dict(data)
        if "images" in prepared:
            prepared["images"] = [
                {
                    "id": image.get("id") or _new_item_id(),
                    "url": image.get("url", ""),
                    "thumbnail": image.get("thumbnail", ""),
                    "title": image.get("title"),
                    "selected": bool(image.get("selected", False)),
                    "download_count": int(image.get("download_count", 0)),
                }
                for image in (prepared["images"] or [])
            ]
        return prepared

    def get_by_client(self, client_id: int,
                      session: Optional[Session] = None) -> List[Gallery]:
        """获取某客户的全部相册（按插入顺序）。"""
        return self.get_all(
            Gallery, filters={"client_id": client_id}, session=session
        )

    def get_public_galleries(self,
                             session: Optional[Session] = None
                             ) -> List[Gallery]:
        """获取所有公开相册。"""
        return self.get_all(
            Gallery, filters={"is_public": True}, session=session
        )
