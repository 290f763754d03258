# easyguide/rest/identity.py
import random
from functools import wraps

from flask import current_app, session
from flask_login import UserMixin, current_user, login_user, logout_user
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from easyguide.container import get_container
from easyguide.errors import ERROR_CODES, ApplicationError, unauthorized_error
from easyguide.extensions import login_manager

GUEST_ID_RANGE = (1111111, 9999999)
USER_FIELDS = ("id", "firstName", "lastName", "email", "status", "isBlocked")
ADMIN_FIELDS = ("id", "name", "email")


class UserStatuses:
    NOT_VERIFIED = 0
    ACTIVE = 1


class SessionUser(UserMixin):
    """Identity rebuilt from the signed session cookie; ``role`` is ``user`` or ``admin``."""

    def __init__(self, data: dict, role: str = "user"):
        self.data = dict(data or {})
        self.role = role

    @property
    def id(self):
        return self.data.get("id")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def get_id(self):
        return f"{self.role}:{self.id}"

    def __getitem__(self, key):
        return self.data[key]

    def get(self, key, default=None):
        return self.data.get(key, default)


@login_manager.user_loader
def load_user(user_id):
    role, _, raw_id = str(user_id).partition(":")
    data = session.get(role)
    if role not in ("user", "admin") or not isinstance(data, dict):
        return None
    if str(data.get("id")) != raw_id:
        return None
    return SessionUser(data, role)


# --- tokens -------------------------------------------------------------------
def _serializer() -> URLSafeTimedSerializer:
    secret = current_app.config.get("SECRET_KEY")
    if not secret:
        raise RuntimeError("SECRET_KEY is not set, access tokens can't be generated.")
    salt = current_app.config.get("ACCESS_TOKEN_SALT", "access")
    return URLSafeTimedSerializer(secret_key=secret, salt=salt)


def generate_token(payload: dict) -> str:
    return _serializer().dumps(payload)


def check_token(token):
    if not token:
        return None
    try:
        return _serializer().loads(token, max_age=current_app.config.get("SESSION_MAX_AGE"))
    except (BadSignature, SignatureExpired):
        return None


# --- session --------------------------------------------------------------------
def _pick(data: dict, fields) -> dict:
    return {k: data.get(k) for k in fields}


def login(user: dict) -> dict:
    payload = _pick(user, USER_FIELDS)
    session["token"] = generate_token({"id": payload["id"], "email": payload["email"]})
    session["user"] = payload
    session.permanent = True
    login_user(SessionUser(payload, "user"))
    return {"user": payload}


def login_admin(admin: dict) -> dict:
    payload = _pick(admin, ADMIN_FIELDS)
    session["adminToken"] = generate_token({"id": payload["id"], "email": payload["email"], "admin": True})
    session["admin"] = payload
    session.permanent = True
    login_user(SessionUser(payload, "admin"))
    return {"admin": admin}


def logout() -> None:
    logout_user()
    session.clear()


def get_customer_ids() -> dict:
    payload = check_token(session.get("token"))
    if "guestId" not in session:
        session["guestId"] = random.randint(*GUEST_ID_RANGE)
    return {"userId": payload.get("id") if payload else None, "guestId": session["guestId"]}


def session_user_id():
    payload = check_token(session.get("token"))
    return payload.get("id") if payload else None


# --- decorators -------------------------------------------------------------------
def authenticate(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        payload = check_token(session.get("token"))
        if not payload or not current_user.is_authenticated or current_user.is_admin:
            raise unauthorized_error()
        return view(*args, **kwargs)

    return wrapper


def check_user_access(user: dict, statuses) -> None:
    if user.get("status") not in statuses:
        raise ApplicationError(403, ERROR_CODES["security__no_permissions"], "Permission denied")
    if user.get("isBlocked"):
        raise ApplicationError(403, ERROR_CODES["security__blocked"], "User is blocked")


def authorize(statuses=(UserStatuses.ACTIVE,)):
    """Re-read the signed-in user from the data service and check status and block flag."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = get_container().get("data_client").get(f"/users/{current_user.id}")
            session["user"] = _pick(user, USER_FIELDS)
            check_user_access(user, statuses)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def authorize_admin(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        payload = check_token(session.get("adminToken"))
        if not payload or not payload.get("admin") or not current_user.is_authenticated \
                or not current_user.is_admin:
            raise unauthorized_error()
        return view(*args, **kwargs)

    return wrapper
