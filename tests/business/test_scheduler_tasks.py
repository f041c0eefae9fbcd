"""Booking reminder dispatch tests.

Covers:
- due reminders: unsent and scheduled at or before now
- dispatch marks reminders sent and is idempotent
- channels disabled in notification settings stay pending
- the interval job is registered on the scheduler
"""
from datetime import datetime, timezone

from business.scheduler import Scheduler
from business.scheduler_tasks import (
    REMINDER_JOB_ID, channel_enabled, dispatch_due_reminders, due_reminders,
    schedule_reminder_dispatch,
)


def _reminder(reminder_id, scheduled, reminder_type="email", sent=False):
    return {
        "id": reminder_id,
        "type": reminder_type,
        "message": f"Reminder {reminder_id}",
        "scheduled_date": scheduled,
        "sent": sent,
    }


class TestDueReminders:
    """Tests for due_reminders."""

    def test_selects_unsent_past_reminders(self, make_booking, now):
        booking = make_booking(1, reminders=[
            _reminder("past", "2024-04-30T09:00:00"),
            _reminder("exact", now.isoformat()),
            _reminder("future", "2024-05-02T09:00:00"),
            _reminder("done", "2024-04-01T09:00:00", sent=True),
            _reminder("unscheduled", None),
        ])

        due = due_reminders([booking], now=now)

        assert [r["id"] for _, r in due] == ["past", "exact"]
        assert all(b is booking for b, _ in due)


class TestChannelEnabled:
    """Tests for channel_enabled."""

    def test_follows_notification_settings(self, store):
        settings = store.get_notification_settings()

        assert channel_enabled("email", settings) is True
        assert channel_enabled("sms", settings) is False
        assert channel_enabled("pigeon", settings) is False


class TestDispatch:
    """Tests for dispatch_due_reminders."""

    def test_marks_due_reminders_sent(self, store, now):
        booking_id = store.add_booking({
            "title": "Wedding",
            "reminders": [
                _reminder("a", "2024-04-30T09:00:00"),
                _reminder("b", "2024-05-10T09:00:00"),
            ],
        })

        assert dispatch_due_reminders(store, now=now) == 1

        reminders = store.get_booking(booking_id).reminders
        assert [(r["id"], r["sent"]) for r in reminders] == \
            [("a", True), ("b", False)]

    def test_idempotent(self, store, now):
        store.add_booking({
            "reminders": [_reminder("a", "2024-04-30T09:00:00")],
        })

        assert dispatch_due_reminders(store, now=now) == 1
        assert dispatch_due_reminders(store, now=now) == 0

    def test_disabled_channel_stays_pending(self, store, now):
        booking_id = store.add_booking({
            "reminders": [
                _reminder("mail", "2024-04-30T09:00:00", "email"),
                _reminder("text", "2024-04-30T09:00:00", "sms"),
            ],
        })

        assert dispatch_due_reminders(store, now=now) == 1

        reminders = store.get_booking(booking_id).reminders
        assert [(r["id"], r["sent"]) for r in reminders] == \
            [("mail", True), ("text", False)]

        store.update_notification_settings(
            sms_notifications={"booking_reminder": True}
        )
        assert dispatch_due_reminders(store, now=now) == 1

    def test_one_update_per_booking(self, store, now):
        store.add_booking({
            "reminders": [
                _reminder("a", "2024-04-29T09:00:00"),
                _reminder("b", "2024-04-30T09:00:00"),
            ],
        })
        events = []
        store.subscribe(events.append)

        assert dispatch_due_reminders(store, now=now) == 2
        assert len(events) == 1

    def test_nothing_due(self, seeded_store, now):
        assert dispatch_due_reminders(seeded_store, now=now) == 0


class TestScheduleReminderDispatch:
    """Tests for schedule_reminder_dispatch."""

    def test_registers_interval_job(self, store):
        scheduler = Scheduler()

        schedule_reminder_dispatch(scheduler, store, minutes=5)

        assert scheduler.get_job(REMINDER_JOB_ID) is not None

    def test_remove_job(self, store):
        scheduler = Scheduler()
        schedule_reminder_dispatch(scheduler, store)

        scheduler.remove_job(REMINDER_JOB_ID)
        scheduler.remove_job(REMINDER_JOB_ID)

        assert scheduler.get_job(REMINDER_JOB_ID) is None


class TestDispatchWithOffsets:
    """Tests for reminders and bookings given with a UTC offset."""

    def test_offset_dates_stored_as_local_time(self, store):
        booking_id = store.add_booking({
            "title": "Wedding",
            "date": "2024-06-15T14:00:00+00:00",
            "reminders": [_reminder("a", "2024-06-14T10:00:00+00:00")],
        })

        booking = store.get_booking(booking_id)
        expected_date = datetime(2024, 6, 15, 14, tzinfo=timezone.utc) \
            .astimezone().replace(tzinfo=None)
        expected_reminder = datetime(2024, 6, 14, 10, tzinfo=timezone.utc) \
            .astimezone().replace(tzinfo=None)
        assert booking.date == expected_date
        assert booking.date.tzinfo is None
        assert booking.reminders[0]["scheduled_date"] == \
            expected_reminder.isoformat()

    def test_dispatch_offset_reminder(self, store):
        booking_id = store.add_booking({
            "title": "Wedding",
            "date": "2024-06-15T14:00:00+00:00",
            "reminders": [_reminder("a", "2024-06-14T10:00:00+00:00")],
        })

        assert dispatch_due_reminders(store, now=datetime(2024, 7, 1)) == 1
        assert store.get_booking(booking_id).reminders[0]["sent"] is True

    def test_due_reminders_with_offset_in_snapshot(self, make_booking):
        booking = make_booking(1, reminders=[
            _reminder("a", "2024-06-14T10:00:00+02:00"),
        ])

        due = due_reminders([booking], now=datetime(2024, 7, 1))

        assert [r["id"] for _, r in due] == ["a"]
