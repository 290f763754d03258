# easyguide/rest/container.py
from easyguide.container import init_container
from easyguide.queue import QueueRegistry, make_celery
from easyguide.rest.client import ServiceClient
from easyguide.rest.cloudinary_helpers import CloudinaryHelpers


def _client(url_key):
    def factory(c):
        config = c.get("config")
        return ServiceClient(
            config.get(url_key),
            max_retry_attempts=config.get("MAX_RETRY_ATTEMPTS", 0),
            delay_retry_attempts=config.get("DELAY_RETRY_ATTEMPTS", 10),
            timeout=config.get("HTTP_TIMEOUT", 30),
        )

    return factory


def build_container(app, config_service):
    return init_container(app, {
        "config": lambda c: config_service,
        "data_client": _client("DATA_SERVICE_URL"),
        "payment_client": _client("PAYMENT_SERVICE_URL"),
        "cloudinary": lambda c: CloudinaryHelpers(c.get("config")),
        "celery": lambda c: make_celery("easyguide.rest", app.config),
        "queue_registry": lambda c: QueueRegistry(c.get("celery")),
    })
