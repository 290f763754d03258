# easyguide/data/app.py
import os

from flask import Flask

from easyguide.config import ConfigService, DataConfig
from easyguide.data import models as _models  # noqa: F401
from easyguide.data.container import build_container
from easyguide.data.routes import register_blueprints
from easyguide.diagnostics import register_diagnostics
from easyguide.errors import register_error_handlers
from easyguide.extensions import bcrypt, db, init_cors, migrate
from easyguide.logger import setup_logging

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")


def create_app(config=None) -> Flask:
    app = Flask("easyguide.data")
    app.config.from_object(DataConfig)
    if config:
        app.config.update(config)
    app.url_map.strict_slashes = False

    config_service = ConfigService(app.config)
    setup_logging(app, config_service)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)
    bcrypt.init_app(app)
    init_cors(app)

    register_error_handlers(app)
    build_container(app, config_service)
    register_blueprints(app)
    register_diagnostics(app)
    return app
