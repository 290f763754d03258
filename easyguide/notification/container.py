# easyguide/notification/container.py
from easyguide.container import init_container
from easyguide.notification.mailer import Mailer
from easyguide.queue import QueueRegistry, make_celery


def build_container(app, config_service):
    return init_container(app, {
        "config": lambda c: config_service,
        "mailer": lambda c: Mailer(c.get("config")),
        "celery": lambda c: make_celery("easyguide.notification", app.config),
        "queue_registry": lambda c: QueueRegistry(c.get("celery")),
    })
