# easyguide/payment/app.py
from flask import Flask

from easyguide.config import ConfigService, PaymentConfig
from easyguide.diagnostics import register_diagnostics
from easyguide.errors import register_error_handlers
from easyguide.extensions import init_cors
from easyguide.logger import setup_logging
from easyguide.payment.container import build_container
from easyguide.payment.routes import stripe_bp


def create_app(config=None) -> Flask:
    app = Flask("easyguide.payment")
    app.config.from_object(PaymentConfig)
    if config:
        app.config.update(config)
    app.url_map.strict_slashes = False

    config_service = ConfigService(app.config)
    config_service.require("STRIPE_PRIVATE_KEY")
    setup_logging(app, config_service)
    init_cors(app)
    register_error_handlers(app)

    build_container(app, config_service).build_all()

    app.register_blueprint(stripe_bp)
    register_diagnostics(app)
    return app
