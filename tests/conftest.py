"""
Pytest configuration and fixtures.
"""
import json
import os
from datetime import date, timedelta

os.environ["APP_ENV"] = "test"

import pytest
import requests

from easyguide.data.app import create_app as create_data_app
from easyguide.extensions import db
from easyguide.notification.app import create_app as create_notification_app
from easyguide.payment.app import create_app as create_payment_app
from easyguide.rest.app import create_app as create_rest_app

BROKER = {
    "CELERY_BROKER_URL": "memory://",
    "CELERY_RESULT_BACKEND": "cache+memory://",
    "CELERY_TASK_ALWAYS_EAGER": True,
}
BASE = {"TESTING": True, "APP_ENV": "test", "SECRET_KEY": "test-secret", **BROKER}


@pytest.fixture
def data_app():
    """Data service on an in-memory SQLite database."""
    app = create_data_app({
        **BASE,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def data_client(data_app):
    return data_app.test_client()


@pytest.fixture
def payment_app():
    return create_payment_app({**BASE, "STRIPE_PRIVATE_KEY": "sk_test_fake_key_for_testing"})


@pytest.fixture
def notification_app():
    return create_notification_app({
        **BASE,
        "MAIL_SUPPRESS_SEND": True,
        "MAIL_SERVER": "smtp.example.com",
        "MAIL_FROM_ADDRESS": "no-reply@easyguide.test",
        "SUPPORT_EMAIL_CONTACT_US": "support@easyguide.test",
        "API_DOMAIN": "https://api.easyguide.test",
    })


@pytest.fixture
def rest_app():
    return create_rest_app({
        **BASE,
        "DATA_SERVICE_URL": "http://data.test",
        "PAYMENT_SERVICE_URL": "http://payment.test",
        "CLIENT_APP_DOMAIN": "https://easyguide.test",
        "ADMIN_APP_DOMAIN": "https://admin.easyguide.test",
        "CLOUDINARY_CLOUD_NAME": "demo",
        "CLOUDINARY_API_KEY": "key",
        "CLOUDINARY_API_SECRET": "secret",
    })


@pytest.fixture
def rest_client(rest_app):
    return rest_app.test_client()


# --- payload helpers ------------------------------------------------------------------
def make_response(status: int, body=None) -> requests.Response:
    """A ``requests.Response`` carrying a JSON body."""
    response = requests.Response()
    response.status_code = status
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    response.headers["Content-Type"] = "application/json"
    return response


def ok(result_data=None, status=200) -> requests.Response:
    return make_response(status, {"errorCode": 0, "resultData": result_data})


def failed(status, error_code, message, errors=None) -> requests.Response:
    return make_response(status, {"errorCode": error_code, "errorMessage": message, "errors": errors or []})


@pytest.fixture
def future_date():
    return (date.today() + timedelta(days=7)).isoformat()


@pytest.fixture
def age_group_options():
    return [
        {"name": "Adult", "orderedQty": 2, "originalPrice": 10, "totalPrice": 20, "ageFrom": 18, "ageTo": 99},
        {"name": "Child", "orderedQty": 0, "originalPrice": 5, "totalPrice": 0, "ageFrom": 3, "ageTo": 17},
    ]
