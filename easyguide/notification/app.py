# easyguide/notification/app.py
from flask import Flask

from easyguide.config import ConfigService, NotificationConfig
from easyguide.diagnostics import register_diagnostics
from easyguide.errors import register_error_handlers, success
from easyguide.extensions import init_mail
from easyguide.logger import setup_logging
from easyguide.notification.consumer import MailQueueConsumer
from easyguide.notification.container import build_container


def create_app(config=None) -> Flask:
    app = Flask("easyguide.notification", template_folder="templates")
    app.config.from_object(NotificationConfig)
    if config:
        app.config.update(config)

    config_service = ConfigService(app.config)
    setup_logging(app, config_service)
    init_mail(app)
    register_error_handlers(app)

    container = build_container(app, config_service)
    registry = container.get("queue_registry")
    registry.register_queue(app.config["QUEUE_NAME_MAIL"], check_connection=not config_service.is_test())
    MailQueueConsumer(
        config_service, container.get("mailer"), container.get("celery"), app
    ).run_jobs()

    @app.get("/health")
    def health():
        return success({"service": "notification", "queues": registry.names()})

    register_diagnostics(app)
    return app
