# easyguide/data/worker.py
"""
Celery side of the data service: cron jobs declared with ``@cron`` on the
services become beat entries.

    celery -A easyguide.data.worker worker --beat
"""
from easyguide.container import get_container
from easyguide.data.app import create_app
from easyguide.queue import make_celery
from easyguide.scheduler import SchedulerOrchestrator, SchedulerRegistry


def create_worker(app=None):
    app = app or create_app()
    celery_app = make_celery("easyguide.data", app.config)
    orchestrator = SchedulerOrchestrator(celery_app, SchedulerRegistry(), flask_app=app)
    orchestrator.explore(get_container(app))
    app.extensions["scheduler"] = orchestrator
    return celery_app


celery_app = create_worker()
