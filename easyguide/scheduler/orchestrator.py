# easyguide/scheduler/orchestrator.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from celery import Celery
from celery.schedules import crontab
from croniter import croniter

from easyguide.scheduler.decorators import CronMetadata
from easyguide.scheduler.registry import SchedulerRegistry
from easyguide.scheduler.scanner import MetadataScanner

logger = logging.getLogger(__name__)


@dataclass
class CronJob:
    name: str
    expression: str
    task_name: str
    target: object


def to_crontab(expression: str) -> crontab:
    minute, hour, day_of_month, month_of_year, day_of_week = expression.split()
    return crontab(
        minute=minute,
        hour=hour,
        day_of_month=day_of_month,
        month_of_year=month_of_year,
        day_of_week=day_of_week,
    )


class SchedulerOrchestrator:
    """
    Turn cron-decorated service methods into Celery tasks plus beat entries.

    Each job becomes a task named ``scheduler.<job name>`` that calls the bound
    method inside the Flask app context; ``celery beat`` fires it on schedule.
    """

    def __init__(self, celery_app: Celery, registry: SchedulerRegistry, flask_app=None, scanner=None):
        self.celery_app = celery_app
        self.registry = registry
        self.flask_app = flask_app
        self.scanner = scanner or MetadataScanner()

    def explore(self, container) -> list:
        jobs = []
        for instance in container.build_all().instances():
            for method, metadata in self.scanner.scan(instance):
                jobs.append(self.add_cron(method, metadata))
        return jobs

    def add_cron(self, method, metadata: CronMetadata) -> CronJob:
        name = metadata.name or uuid.uuid4().hex
        task_name = f"scheduler.{name}"
        flask_app = self.flask_app

        def run_job():
            logger.info("[SCHEDULER] running job %s", name)
            if flask_app is None:
                return method()
            with flask_app.app_context():
                return method()

        job = CronJob(name=name, expression=metadata.expression, task_name=task_name, target=method)
        self.registry.add_cron_job(name, job)

        self.celery_app.task(name=task_name, shared=False)(run_job)
        schedule = dict(self.celery_app.conf.beat_schedule or {})
        schedule[name] = {"task": task_name, "schedule": to_crontab(metadata.expression)}
        self.celery_app.conf.beat_schedule = schedule

        logger.info("[SCHEDULER] registered job %s (%s)", name, metadata.expression)
        return job

    def next_run(self, name: str, now: datetime | None = None) -> datetime:
        job = self.registry.get_cron_job(name)
        return croniter(job.expression, now or datetime.utcnow()).get_next(datetime)
