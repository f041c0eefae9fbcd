"""Scheduler wrapper tests."""
from apscheduler.triggers.interval import IntervalTrigger

from business.scheduler import Scheduler


def _noop():
    pass


class TestScheduler:
    """Tests for the APScheduler wrapper."""

    def test_interval_task(self):
        scheduler = Scheduler()
        scheduler.add_interval_task(_noop, minutes=5, task_id="tick")

        job = scheduler.get_job("tick")
        assert isinstance(job.trigger, IntervalTrigger)
        assert job.trigger.interval.total_seconds() == 300

    def test_same_id_replaces_job(self):
        scheduler = Scheduler()
        scheduler.start()
        try:
            scheduler.add_interval_task(_noop, minutes=5, task_id="tick")
            scheduler.add_interval_task(_noop, minutes=10, task_id="tick")

            job = scheduler.get_job("tick")
            assert job.trigger.interval.total_seconds() == 600
        finally:
            scheduler.stop()

    def test_get_missing_job(self):
        assert Scheduler().get_job("missing") is None

    def test_start_and_stop(self):
        scheduler = Scheduler()
        scheduler.add_interval_task(_noop, minutes=60, task_id="hourly")

        scheduler.start()
        try:
            assert scheduler.scheduler.running
            assert scheduler.get_job("hourly") is not None
        finally:
            scheduler.stop()
        assert not scheduler.scheduler.running
