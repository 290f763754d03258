# easyguide/data/services/base.py
import logging
from contextlib import contextmanager
from datetime import timedelta

from sqlalchemy import and_, or_

from easyguide.errors import ApplicationError, ERROR_CODES, not_found_error, transaction_error
from easyguide.extensions import db

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

IDENTITY_ERROR_MESSAGE = "Must provide a valid user id or guest id"


def _positive_int(value, default):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def _getlist(query, key):
    if hasattr(query, "getlist"):
        return query.getlist(key)
    value = (query or {}).get(key)
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def life_time(amount, unit) -> timedelta:
    """``life_time(30, "minutes")`` -> timedelta(minutes=30)."""
    unit = str(unit or "minutes").lower()
    if not unit.endswith("s"):
        unit += "s"
    return timedelta(**{unit: int(amount)})


def parse_phone_number(phone):
    if not phone:
        return phone
    phone = str(phone).strip()
    return phone if phone.startswith("+") else f"+{phone}"


class BaseService:
    """Query helpers and transaction handling shared by the data services."""

    def __init__(self, config=None):
        self.config = config

    # --- query helpers -------------------------------------------------------
    @staticmethod
    def get_pagination(query) -> dict:
        query = query or {}
        page = _positive_int(query.get("page"), DEFAULT_PAGE)
        page_size = _positive_int(query.get("pageSize"), DEFAULT_PAGE_SIZE)
        return {"offset": (page - 1) * page_size, "limit": page_size}

    @staticmethod
    def pagination_response(total: int, pagination: dict) -> dict:
        limit = pagination["limit"]
        return {
            "pagination": {
                "page": pagination["offset"] // limit + 1,
                "pageSize": limit,
                "total": total,
            }
        }

    @staticmethod
    def get_search(query, columns):
        search = ((query or {}).get("search") or "").strip()
        if not search:
            return None
        return or_(*[column.ilike(f"%{search}%") for column in columns])

    @staticmethod
    def get_sort(query, model) -> list:
        """``sort=name`` ascending, ``sort=!name`` descending; unknown columns are ignored."""
        clauses = []
        for raw in _getlist(query, "sort"):
            for field in str(raw).split(","):
                field = field.strip()
                descending = field.startswith("!")
                field = field.lstrip("!")
                column = model.__table__.columns.get(_snake_case(field))
                if column is None:
                    continue
                clauses.append(column.desc() if descending else column.asc())
        return clauses

    @staticmethod
    def get_range_filter(column, start=None, end=None):
        if start and end:
            return column.between(start, end)
        if start:
            return column >= start
        if end:
            return column <= end
        return None

    @staticmethod
    def get_include(query) -> list:
        include = []
        for raw in _getlist(query, "include"):
            include.extend(part.strip() for part in str(raw).split(",") if part.strip())
        return include

    def list_response(self, select_query, pagination, serializer=None) -> dict:
        total = select_query.order_by(None).count()
        rows = select_query.offset(pagination["offset"]).limit(pagination["limit"]).all()
        serializer = serializer or (lambda row: row.to_dict())
        return {"items": [serializer(row) for row in rows], **self.pagination_response(total, pagination)}

    @staticmethod
    def filter_all(select_query, *clauses):
        clauses = [c for c in clauses if c is not None]
        return select_query.filter(and_(*clauses)) if clauses else select_query

    # --- errors / transactions -----------------------------------------------
    @contextmanager
    def transaction(self):
        try:
            yield db.session
            db.session.commit()
        except ApplicationError:
            db.session.rollback()
            raise
        except Exception as e:
            db.session.rollback()
            logger.exception("[DB] transaction rolled back: %s", e)
            raise transaction_error() from e

    @staticmethod
    def throw_identity_error():
        raise not_found_error(IDENTITY_ERROR_MESSAGE)

    @staticmethod
    def check_login_credentials(entity, password):
        if entity is None or not entity.check_password(password):
            raise ApplicationError(
                401,
                ERROR_CODES["authorization__invalid_credentials_error"],
                "User doesn't exist or password is wrong",
            )
        return entity

    @staticmethod
    def get_or_404(model, entity_id, message):
        entity = db.session.get(model, entity_id) if entity_id is not None else None
        if entity is None:
            raise not_found_error(message)
        return entity


def _snake_case(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)
