# easyguide/queue/registry.py
import logging
from typing import Dict

from celery import Celery

logger = logging.getLogger(__name__)


class JobQueue:
    """One named queue on the shared broker."""

    def __init__(self, name: str, celery_app: Celery):
        self.name = name
        self.celery_app = celery_app

    def add(self, job_name: str, data: dict):
        logger.info("[QUEUE] add job=%s queue=%s", job_name, self.name)
        return self.celery_app.send_task(job_name, args=[data], queue=self.name)

    def ping(self) -> None:
        with self.celery_app.connection_for_write() as conn:
            conn.ensure_connection(max_retries=1)

    def close(self) -> None:
        self.celery_app.pool.force_close_all()

    def __repr__(self):
        return f"<JobQueue {self.name}>"


class QueueRegistry:
    def __init__(self, celery_app: Celery):
        self.celery_app = celery_app
        self._queues: Dict[str, JobQueue] = {}

    def register_queue(self, name: str, check_connection: bool = True) -> JobQueue:
        if not name:
            raise ValueError("No name was provided for queue.")
        if name in self._queues:
            raise ValueError(f"Queue with the given name ({name}) already exists. Ignored.")

        queue = JobQueue(name, self.celery_app)
        self._queues[name] = queue

        if check_connection:
            try:
                queue.ping()
                logger.info("[QUEUE] Connection to (%s) queue successfully established", name)
            except Exception as e:
                logger.error("[QUEUE] Connection to (%s) queue ended with an error: %s", name, e)
        return queue

    def get_queue(self, name: str) -> JobQueue:
        try:
            return self._queues[name]
        except KeyError:
            raise KeyError(f"No queue was found with the given name ({name}).") from None

    def names(self):
        return list(self._queues)

    def close_all(self) -> None:
        for queue in self._queues.values():
            queue.close()
        self._queues.clear()
