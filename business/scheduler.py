"""定时任务调度器 - 通用的任务调度框架

具体的业务任务逻辑在 business/scheduler_tasks.py 中
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from typing import Callable
from loguru import logger


class Scheduler:
    """定时任务调度器

    通用的任务调度框架，不包含具体的业务逻辑
    业务逻辑通过回调函数注入，任务在后台线程中执行
    """

    def __init__(self):
        """初始化调度器"""
        self.scheduler = BackgroundScheduler()

    def add_interval_task(
        self,
        task_func: Callable,
        minutes: int = 15,
        task_id: str = 'interval_task',
        task_name: str = '周期任务'
    ):
        """添加周期任务

        Args:
            task_func: 任务函数（同步函数）
            minutes: 执行间隔（分钟）
            task_id: 任务ID
            task_name: 任务名称
        """
        self.scheduler.add_job(
            task_func,
            trigger=IntervalTrigger(minutes=minutes),
            id=task_id,
            name=task_name,
            replace_existing=True
        )
        logger.info(f"Added interval task '{task_name}' every {minutes} min")

    def get_job(self, job_id: str):
        """获取任务，不存在返回 None"""
        return self.scheduler.get_job(job_id)

    def start(self):
        """启动调度器"""
        self.scheduler.start()
        logger.info("Scheduler started")

    def stop(self):
        """停止调度器"""
        self.scheduler.shutdown()
        logger.info("Scheduler stopped")

    def remove_job(self, job_id: str):
        """移除任务

        Args:
            job_id: 任务ID
        """
        try:
            self.scheduler.remove_job(job_id)
            logger.info(f"Job {job_id} removed")
        except Exception as e:
            logger.warning(f"Failed to remove job {job_id}: {e}")
