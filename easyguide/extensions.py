# easyguide/extensions.py
from __future__ import annotations

import socket
from urllib.parse import urlsplit

from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_login import LoginManager
from flask_mail import Mail
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from easyguide.validation import to_bool

# Shared extension instances, bound per service in each create_app()
db = SQLAlchemy()
migrate = Migrate()
bcrypt = Bcrypt()
cors = CORS()
login_manager = LoginManager()
mail = Mail()


def mail_host(server: str | None) -> str:
    """``smtps://smtp.example.com:465/`` -> ``smtp.example.com``."""
    value = (server or "").strip()
    if not value:
        return ""
    if "://" not in value:
        value = f"//{value}"
    return urlsplit(value).hostname or ""


def init_cors(app, prefix: str = "/*"):
    origins = [o.strip() for o in str(app.config.get("CORS_ORIGINS") or "").split(",") if o.strip()]
    cors.init_app(
        app,
        resources={prefix: {"origins": origins or "*", "supports_credentials": True}},
    )


def init_mail(app):
    """
    Initialize Flask-Mail after normalizing MAIL_SERVER, the SSL/TLS pair,
    the port and the default sender.
    """
    cfg = app.config

    server = mail_host(cfg.get("MAIL_SERVER"))
    if not server:
        server = "localhost"
        app.logger.warning("[MAIL] MAIL_SERVER was not set -> using 'localhost'.")
    cfg["MAIL_SERVER"] = server

    use_ssl = bool(to_bool(cfg.get("MAIL_USE_SSL")))
    use_tls = bool(to_bool(cfg.get("MAIL_USE_TLS")))
    if use_ssl and use_tls:
        use_tls = False
        app.logger.info("[MAIL] MAIL_USE_SSL and MAIL_USE_TLS were both set -> disabling TLS.")
    cfg["MAIL_USE_SSL"] = use_ssl
    cfg["MAIL_USE_TLS"] = use_tls

    try:
        cfg["MAIL_PORT"] = int(cfg.get("MAIL_PORT"))
    except (TypeError, ValueError):
        cfg["MAIL_PORT"] = 465 if use_ssl else (587 if use_tls else 25)
        app.logger.info("[MAIL] MAIL_PORT was invalid -> using %s.", cfg["MAIL_PORT"])

    if not cfg.get("MAIL_DEFAULT_SENDER"):
        address = cfg.get("MAIL_FROM_ADDRESS") or cfg.get("MAIL_USERNAME")
        cfg["MAIL_DEFAULT_SENDER"] = (cfg.get("MAIL_FROM_NAME") or "easyGuide", address) if address else None

    if not cfg.get("MAIL_SUPPRESS_SEND"):
        try:
            socket.getaddrinfo(server, cfg["MAIL_PORT"], proto=socket.IPPROTO_TCP)
        except OSError as e:
            app.logger.error("[MAIL] DNS resolve failed for MAIL_SERVER=%r: %s", server, e)

    app.logger.info(
        "[MAIL] server=%s port=%s ssl=%s tls=%s sender=%s",
        cfg.get("MAIL_SERVER"),
        cfg.get("MAIL_PORT"),
        cfg.get("MAIL_USE_SSL"),
        cfg.get("MAIL_USE_TLS"),
        cfg.get("MAIL_DEFAULT_SENDER"),
    )
    mail.init_app(app)
