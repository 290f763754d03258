# easyguide/logger.py
import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5
FILE_LEVELS = ("debug", "info", "warning", "error")


class _ExactLevelFilter(logging.Filter):
    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno == self.level


def setup_logging(app, config_service=None):
    """
    Console logging for development/test, one rotating file per level
    (``<LOG_DIR>/<level>.log``) in production.
    """
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    production = str(app.config.get("APP_ENV", "")).lower() == "production"
    if production and not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        log_dir = app.config.get("LOG_DIR") or "log"
        os.makedirs(log_dir, exist_ok=True)
        for name in FILE_LEVELS:
            handler = RotatingFileHandler(
                os.path.join(log_dir, f"{name}.log"),
                maxBytes=MAX_BYTES,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
            handler.setFormatter(formatter)
            handler.addFilter(_ExactLevelFilter(getattr(logging, name.upper())))
            root.addHandler(handler)
    elif not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
                 for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    app.logger.setLevel(level)
    if config_service is not None:
        app.logger.info("[CONFIG] %s", " | ".join(config_service.describe()))
