# easyguide/rest/routes/utils.py
from flask import request

from easyguide.container import get_container


def get_payload() -> dict:
    return request.get_json(silent=True) or {}


def query_args() -> dict:
    """Query string as a dict; a repeated key such as ``sort`` keeps all of its values."""
    return {
        key: values if len(values) > 1 else values[0]
        for key, values in request.args.to_dict(flat=False).items()
    }


def data_client():
    return get_container().get("data_client")


def payment_client():
    return get_container().get("payment_client")


def config():
    return get_container().get("config")


def cloudinary_helpers():
    return get_container().get("cloudinary")


def enqueue_mail(job: dict):
    """Push a ``{mailType, options, data}`` job onto the mail queue."""
    cfg = config()
    queue = get_container().get("queue_registry").get_queue(cfg.get("QUEUE_NAME_MAIL"))
    return queue.add(cfg.get("QUEUE_JOB_NAME_SEND_EMAIL"), job)


def without_reason(payment: dict) -> dict:
    return {k: v for k, v in (payment or {}).items() if k != "reason"}
