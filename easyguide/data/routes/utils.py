# easyguide/data/routes/utils.py
from flask import request

from easyguide.container import get_container


def get_payload() -> dict:
    return request.get_json(silent=True) or {}


def service(name: str):
    return get_container().get(name)


def client_ip():
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr
