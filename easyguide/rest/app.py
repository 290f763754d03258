# easyguide/rest/app.py
from datetime import timedelta

from flask import Flask

from easyguide.config import ConfigService, RestConfig
from easyguide.diagnostics import register_diagnostics
from easyguide.errors import register_error_handlers, success
from easyguide.extensions import init_cors, login_manager
from easyguide.logger import setup_logging
from easyguide.rest.container import build_container
from easyguide.rest.routes import API_PREFIX, register_blueprints


def create_app(config=None) -> Flask:
    app = Flask("easyguide.rest")
    app.config.from_object(RestConfig)
    if config:
        app.config.update(config)
    app.url_map.strict_slashes = False
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(seconds=app.config["SESSION_MAX_AGE"])

    config_service = ConfigService(app.config)
    setup_logging(app, config_service)
    init_cors(app, f"{API_PREFIX}/*")
    login_manager.init_app(app)
    register_error_handlers(app)

    container = build_container(app, config_service)
    registry = container.get("queue_registry")
    registry.register_queue(app.config["QUEUE_NAME_MAIL"], check_connection=not config_service.is_test())

    register_blueprints(app)

    @app.get(f"{API_PREFIX}/health")
    def health():
        return success({"service": "rest", "queues": registry.names()})

    register_diagnostics(app)
    return app
