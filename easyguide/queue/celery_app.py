# easyguide/queue/celery_app.py
"""Celery app factory shared by the producers (REST gateway) and the workers."""

from celery import Celery


def make_celery(name: str, config) -> Celery:
    get = config.get if hasattr(config, "get") else (lambda k, d=None: getattr(config, k, d))
    redis_url = get("REDIS_URL")

    celery_app = Celery(
        name,
        broker=get("CELERY_BROKER_URL") or redis_url,
        backend=get("CELERY_RESULT_BACKEND") or redis_url,
    )
    celery_app.conf.update(
        timezone="UTC",
        enable_utc=True,
        task_serializer="json",
        result_serializer="json",
        accept_content=["json"],
        task_always_eager=bool(get("CELERY_TASK_ALWAYS_EAGER", False)),
        task_eager_propagates=True,
        broker_connection_retry_on_startup=True,
    )
    return celery_app
