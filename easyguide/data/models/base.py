# easyguide/data/models/base.py
from datetime import date, datetime
from decimal import Decimal

from easyguide.extensions import db


def camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def json_value(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class SerializerMixin:
    """Column values as a camelCase dict; ``__hidden__`` columns are never exposed."""

    __hidden__ = ()

    def to_dict(self, exclude=()):
        out = {}
        for column in self.__table__.columns:
            if column.key in self.__hidden__ or column.key in exclude:
                continue
            out[camel_case(column.key)] = json_value(getattr(self, column.key))
        return out
