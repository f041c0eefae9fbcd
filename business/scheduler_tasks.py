"""定时任务 - 预约提醒派发

提醒作为预约记录的一部分保存，这里找出到期未发送的提醒并标记为已发送。
实际的邮件/短信发送不在本系统范围内，派发结果写入日志。
"""
from datetime import datetime
from typing import Dict, Any, List, Optional, Sequence, Tuple
from loguru import logger

from config.settings import settings
from store.booking_repos import BookingRepository
from store.manager import StudioStore
from store.models import Booking, NotificationSettings
from .scheduler import Scheduler

REMINDER_JOB_ID = "reminder_dispatch"


def due_reminders(bookings: Sequence[Booking],
                  now: Optional[datetime] = None
                  ) -> List[Tuple[Booking, Dict[str, Any]]]:
    """找出到期未发送的提醒。

    Args:
        bookings: 预约快照。
        now: 参照时间，默认当前本地时间；计划时间不晚于 now 即为到期。

    Returns:
        (预约, 提醒) 列表，按预约顺序和提醒顺序排列。
    """
    now = now or datetime.now()
    due = []
    for booking in bookings:
        for reminder in booking.reminders or []:
            if reminder.get("sent") or not reminder.get("scheduled_date"):
                continue
            scheduled = BookingRepository.parse_datetime(
                reminder["scheduled_date"], "Reminder scheduled_date"
            )
            if scheduled <= now:
                due.append((booking, reminder))
    return due


def channel_enabled(reminder_type: str,
                    notification_settings: NotificationSettings) -> bool:
    """按通知设置判断提醒渠道是否启用。"""
    if reminder_type == "email":
        flags = notification_settings.email_notifications or {}
    elif reminder_type == "sms":
        flags = notification_settings.sms_notifications or {}
    else:
        return False
    return bool(flags.get("booking_reminder", False))


def dispatch_due_reminders(store: StudioStore,
                           now: Optional[datetime] = None) -> int:
    """派发到期提醒并标记为已发送。

    渠道在通知设置中被关闭的提醒保持未发送状态，等待下次检查。
    每个预约只写入一次（整体替换 reminders 列表），整个过程持有存储写锁。

    Args:
        store: 工作室存储。
        now: 参照时间，默认当前本地时间。

    Returns:
        本次标记为已发送的提醒数量。
    """
    with store.write_lock:
        notification_settings = store.get_notification_settings()
        dispatched: Dict[int, set] = {}

        for booking, reminder in due_reminders(store.get_bookings(), now):
            if not channel_enabled(reminder.get("type"),
                                   notification_settings):
                logger.debug(
                    f"Reminder {reminder['id']} skipped, "
                    f"{reminder.get('type')} reminders disabled"
                )
                continue
            logger.info(
                f"Reminder {reminder['id']} ({reminder.get('type')}) "
                f"for booking {booking.id}: {reminder.get('message', '')}"
            )
            dispatched.setdefault(booking.id, set()).add(reminder["id"])

        count = 0
        for booking_id, reminder_ids in dispatched.items():
            booking = store.get_booking(booking_id)
            if booking is None:
                continue
            reminders = [
                dict(r, sent=True) if r.get("id") in reminder_ids else r
                for r in booking.reminders or []
            ]
            store.update_booking(booking_id, reminders=reminders)
            count += len(reminder_ids)

    if count:
        logger.info(f"Dispatched {count} booking reminders")
    return count


def schedule_reminder_dispatch(scheduler: Scheduler, store: StudioStore,
                               minutes: Optional[int] = None) -> None:
    """注册周期性的提醒派发任务。

    Args:
        scheduler: 调度器。
        store: 工作室存储。
        minutes: 检查间隔，默认取 settings.reminder_check_minutes。
    """
    scheduler.add_interval_task(
        lambda: dispatch_due_reminders(store),
        minutes=minutes or settings.reminder_check_minutes,
        task_id=REMINDER_JOB_ID,
        task_name='预约提醒派发'
    )
