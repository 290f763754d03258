# easyguide/data/models/promo_code.py
import json

from easyguide.extensions import db
from easyguide.data.models.base import SerializerMixin, TimestampMixin


class PromoCodeTypes:
    FLAT = "F"
    PERCENTAGE = "P"
    ALL = (FLAT, PERCENTAGE)


WEEK_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class PromoCode(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "promo_codes"

    id = db.Column(db.Integer, primary_key=True)
    coupon_name = db.Column(db.String(255), nullable=False)
    generation_type = db.Column(db.String(8), default="A")
    promo_code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    coupon_qty = db.Column(db.Integer)
    t_and_c = db.Column(db.Text)
    coupon_type = db.Column(db.String(8), nullable=False)
    coupon_value = db.Column(db.Integer, nullable=False)
    available_days = db.Column(db.Text)
    start_date = db.Column(db.String(16))
    end_date = db.Column(db.String(16))
    start_time = db.Column(db.String(16))
    end_time = db.Column(db.String(16))
    device_type = db.Column(db.Integer, default=2)
    exclude_wallet_point = db.Column(db.SmallInteger, default=0)
    include_api_data = db.Column(db.SmallInteger, default=1)
    user_redemption_limit = db.Column(db.Integer)
    remain_user_redemption_limit = db.Column(db.Integer)
    min_cart_amount = db.Column(db.Numeric(8, 2), default=0)
    uses_count = db.Column(db.Integer, default=0, nullable=False)
    batch_qty = db.Column(db.Integer, default=1)
    status = db.Column(db.SmallInteger, default=0, nullable=False)

    uses = db.relationship("PromoCodeUse", backref="promo_code", lazy=True, cascade="all, delete-orphan")

    @property
    def days(self) -> list:
        # stored as {"data": ["Mon", ...]}
        try:
            return (json.loads(self.available_days or "{}") or {}).get("data") or []
        except ValueError:
            return []

    def to_dict(self, exclude=()):
        data = super().to_dict(exclude)
        data["availableDays"] = self.days
        return data

    def __repr__(self):
        return f"<PromoCode {self.promo_code} type={self.coupon_type} value={self.coupon_value}>"


class PromoCodeUse(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "promo_code_uses"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, index=True)
    guest_id = db.Column(db.Integer, index=True)
    promo_code_id = db.Column(db.Integer, db.ForeignKey("promo_codes.id", ondelete="CASCADE"), nullable=False)
    uses_count = db.Column(db.Integer, default=0)
