# easyguide/config.py
import json
import os

from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
ROOT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(ROOT_DIR, ".env"))

DEFAULT_SETTINGS_FILE = os.path.join(BASE_DIR, "settings", "default.json")
SECRET_MARKERS = ("SECRET", "PASSWORD", "KEY", "TOKEN")


def _env(key: str, default=None):
    v = os.getenv(key)
    return v if v not in (None, "", "None") else default


def _env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v in (None, "", "None"):
        return default
    return str(v).strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _env_int(key: str, default: int = 0) -> int:
    v = _env(key)
    try:
        return int(v) if v is not None else default
    except ValueError:
        return default


def _redis_url() -> str:
    url = _env("REDIS_URL")
    if url:
        return url
    password = _env("REDIS_PASSWORD")
    auth = f":{password}@" if password else ""
    return f"redis://{auth}{_env('REDIS_HOST', 'localhost')}:{_env_int('REDIS_PORT', 6379)}/{_env_int('REDIS_DB', 0)}"


class BaseConfig:
    APP_ENV = _env("APP_ENV", "development")
    SECRET_KEY = _env("SECRET_KEY", "dev-please-change-me")
    JSON_AS_ASCII = False
    JSON_SORT_KEYS = False

    LOG_LEVEL = _env("LOG_LEVEL", "INFO")
    LOG_DIR = _env("LOG_DIR", os.path.join(ROOT_DIR, "log"))

    CORS_ORIGINS = _env("CORS_ORIGINS", "http://localhost:3000")

    REDIS_URL = _redis_url()
    CELERY_TASK_ALWAYS_EAGER = _env_bool("CELERY_TASK_ALWAYS_EAGER", False)
    QUEUE_NAME_MAIL = _env("QUEUE_NAME_MAIL", "mail")
    QUEUE_JOB_NAME_SEND_EMAIL = _env("QUEUE_JOB_NAME_SEND_EMAIL", "send_email")

    MAX_RETRY_ATTEMPTS = _env_int("MAX_RETRY_ATTEMPTS", 0)
    DELAY_RETRY_ATTEMPTS = _env_int("DELAY_RETRY_ATTEMPTS", 10)
    HTTP_TIMEOUT = _env_int("HTTP_TIMEOUT", 30)

    CONFIG_FILE = _env("CONFIG_FILE", DEFAULT_SETTINGS_FILE)


class DataConfig(BaseConfig):
    PORT = _env_int("DATA_SERVICE_PORT", 5003)
    SQLALCHEMY_DATABASE_URI = _env(
        "DATABASE_URL",
        "mysql+pymysql://{user}:{password}@{host}:{port}/{name}".format(
            user=_env("DB_USER", "root"),
            password=_env("DB_PASSWORD", ""),
            host=_env("DB_HOST", "localhost"),
            port=_env_int("DB_PORT", 3306),
            name=_env("DB_NAME", "easyguide"),
        ),
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    OTP_MAX_AGE_AMOUNT = _env_int("OTP_MAX_AGE_AMOUNT", 4)
    OTP_MAX_AGE_UNIT = _env("OTP_MAX_AGE_UNIT", "minutes")
    CART_LIFE_TIME_AMOUNT = _env_int("CART_LIFE_TIME_AMOUNT", 30)
    CART_LIFE_TIME_UNIT = _env("CART_LIFE_TIME_UNIT", "minutes")
    GATEWAY_CHARGE_PERCENT = float(_env("GATEWAY_CHARGE_PERCENT", 2.9))
    GATEWAY_CHARGE_FIXED = float(_env("GATEWAY_CHARGE_FIXED", 0.2))


class RestConfig(BaseConfig):
    PORT = _env_int("REST_SERVICE_PORT", 5000)
    DATA_SERVICE_URL = _env("DATA_SERVICE_URL", "http://localhost:5003")
    PAYMENT_SERVICE_URL = _env("PAYMENT_SERVICE_URL", "http://localhost:5001")

    SESSION_COOKIE_NAME = _env("SESSION_NAME", "easyguide_session")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE", False)
    SESSION_MAX_AGE = _env_int("SESSION_MAX_AGE", 60 * 60 * 24)
    ACCESS_TOKEN_SALT = _env("ACCESS_TOKEN_SALT", "access")

    CLIENT_APP_DOMAIN = _env("CLIENT_APP_DOMAIN", "http://localhost:3000")
    ADMIN_APP_DOMAIN = _env("ADMIN_APP_DOMAIN", "http://localhost:3001")
    RESTORE_PASSWORD_LINK = _env("RESTORE_PASSWORD_LINK", "/restore-password")
    ADMIN_RESTORE_PASSWORD_LINK = _env("ADMIN_RESTORE_PASSWORD_LINK", "/restore-password")
    CHANGE_EMAIL_LINK = _env("CHANGE_EMAIL_LINK", "/support")

    GOOGLE_CLIENT_ID = _env("GOOGLE_CLIENT_ID")
    FACEBOOK_APP_ID = _env("FACEBOOK_APP_ID")
    FACEBOOK_APP_SECRET = _env("FACEBOOK_APP_SECRET")
    FACEBOOK_GRAPH_URL = _env("FACEBOOK_GRAPH_URL", "https://graph.facebook.com/v12.0")

    CLOUDINARY_CLOUD_NAME = _env("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = _env("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = _env("CLOUDINARY_API_SECRET")

    DEFAULT_CURRENCY = _env("DEFAULT_CURRENCY", "eur")


class PaymentConfig(BaseConfig):
    PORT = _env_int("PAYMENT_SERVICE_PORT", 5001)
    STRIPE_PRIVATE_KEY = _env("STRIPE_PRIVATE_KEY")
    STRIPE_API_VERSION = _env("STRIPE_API_VERSION", "2020-08-27")


class NotificationConfig(BaseConfig):
    PORT = _env_int("NOTIFICATION_SERVICE_PORT", 5002)
    API_DOMAIN = _env("API_DOMAIN", "http://localhost:5000")
    SUPPORT_EMAIL_CONTACT_US = _env("SUPPORT_EMAIL_CONTACT_US")

    MAIL_SERVER = _env("MAIL_SERVER", "localhost")
    MAIL_PORT = _env_int("MAIL_PORT", 465)
    MAIL_USE_SSL = _env_bool("MAIL_USE_SSL", True)
    MAIL_USE_TLS = _env_bool("MAIL_USE_TLS", False)
    MAIL_USERNAME = _env("MAIL_USERNAME")
    MAIL_PASSWORD = _env("MAIL_PASSWORD")
    MAIL_FROM_NAME = _env("MAIL_FROM_NAME", "easyGuide")
    MAIL_FROM_ADDRESS = _env("MAIL_FROM_ADDRESS", _env("MAIL_USERNAME"))
    MAIL_SUPPRESS_SEND = _env_bool("MAIL_SUPPRESS_SEND", False)
    MAIL_DEBUG = _env_bool("MAIL_DEBUG", False)


def _flatten(prefix: str, value, out: dict) -> None:
    if isinstance(value, dict):
        for k, v in value.items():
            _flatten(f"{prefix}.{k}" if prefix else k, v, out)
    else:
        out[prefix] = value


class ConfigService:
    """
    Flat key-value view over a Flask config plus an optional JSON settings file.

    Keys from the config object are kept as-is (``MAIL_SERVER``); nested keys from
    the JSON file are addressed by dotted path (``files.settings.profileImage``).
    """

    def __init__(self, source, config_file: str | None = None):
        if isinstance(source, dict):
            items = source.items()
        else:
            items = ((k, getattr(source, k)) for k in dir(source))
        self._values = {k: v for k, v in items if k.isupper()}
        self._tree = {}

        path = config_file or self._values.get("CONFIG_FILE")
        if path and os.path.exists(path):
            with open(path, encoding="utf-8") as fh:
                self._tree = json.load(fh)

    def get(self, path: str, default=None):
        if path in self._values:
            return self._values[path]
        node = self._tree
        for segment in path.split("."):
            if not isinstance(node, dict) or segment not in node:
                return default
            node = node[segment]
        return node

    def require(self, *keys):
        missing = [k for k in keys if self.get(k) in (None, "")]
        if missing:
            raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")

    @property
    def app_env(self) -> str:
        return str(self.get("APP_ENV", "development")).lower()

    def is_development(self) -> bool:
        return self.app_env == "development"

    def is_production(self) -> bool:
        return self.app_env == "production"

    def is_test(self) -> bool:
        return self.app_env == "test"

    def describe(self) -> list[str]:
        flat = dict(self._values)
        _flatten("", self._tree, flat)
        lines = []
        for key in sorted(flat):
            value = flat[key]
            if any(m in key.upper() for m in SECRET_MARKERS) and value:
                value = "***"
            text = str(value)
            if len(text) > 80:
                text = text[:77] + "..."
            lines.append(f"{key}={text}")
        return lines
