# easyguide/queue/__init__.py
from easyguide.queue.celery_app import make_celery
from easyguide.queue.registry import JobQueue, QueueRegistry

__all__ = ["make_celery", "JobQueue", "QueueRegistry"]
