# easyguide/data/models/order.py
import json

from easyguide.extensions import db
from easyguide.data.models.base import SerializerMixin, TimestampMixin
from easyguide.statuses import OrderStatuses


class SalesFlatOrder(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "sales_flat_orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, index=True)
    guest_id = db.Column(db.Integer, index=True)
    itinerary_id = db.Column(db.Integer, db.ForeignKey("itineraries.id", ondelete="SET NULL"), index=True)
    order_uuid = db.Column(db.String(64))
    user_name = db.Column(db.String(255))
    user_email = db.Column(db.String(255))
    user_phone = db.Column(db.String(32))
    status = db.Column(db.String(16), default=OrderStatuses.INITIATED, nullable=False)
    sub_total = db.Column(db.Numeric(8, 2), default=0)
    net_total = db.Column(db.Numeric(8, 2), default=0)
    grand_total = db.Column(db.Numeric(8, 2), default=0)
    tax_amount = db.Column(db.Numeric(8, 2), default=0)
    gateway_charges = db.Column(db.Numeric(8, 2), default=0)
    commission_charges = db.Column(db.Numeric(8, 2), default=0)
    discount_amount = db.Column(db.Numeric(8, 2), default=0)
    coupon_code = db.Column(db.String(64))
    referral_discount = db.Column(db.Numeric(8, 2), default=0)
    device_type = db.Column(db.Integer, default=2)
    currency = db.Column(db.String(8), default="EUR")
    lang_code = db.Column(db.String(8), default="en_GB")

    items_meta = db.relationship("SalesFlatOrderItemMeta", backref="order", lazy=True,
                                 cascade="all, delete-orphan")
    payments = db.relationship("SalesFlatOrderPayment", backref="order", lazy=True,
                               cascade="all, delete-orphan")

    def to_dict(self, exclude=(), include=()):
        data = super().to_dict(exclude)
        if "orderItemsMeta" in include:
            data["orderItemsMeta"] = [item.to_dict() for item in self.items_meta]
        if "orderPayment" in include:
            data["orderPayment"] = self.payments[-1].to_dict() if self.payments else None
        return data

    def __repr__(self):
        return f"<SalesFlatOrder #{self.id} {self.status} {self.grand_total}>"


class SalesFlatOrderItemMeta(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "sales_flat_order_items_meta"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("sales_flat_orders.id", ondelete="CASCADE"), nullable=False)
    itinerary_item_id = db.Column(db.Integer)
    date = db.Column(db.Date)
    time = db.Column(db.String(64))
    product_id = db.Column(db.Integer)
    product_name = db.Column(db.String(255))
    variant_id = db.Column(db.Integer)
    variant_name = db.Column(db.String(255))
    variant_item_id = db.Column(db.BigInteger)
    total_price = db.Column(db.Numeric(8, 2), default=0)
    product_options = db.Column(db.Text)
    is_booked = db.Column(db.SmallInteger, default=0, nullable=False)
    booking_id = db.Column(db.String(64))

    @property
    def options(self) -> list:
        try:
            return json.loads(self.product_options or "[]")
        except ValueError:
            return []

    def to_dict(self, exclude=()):
        data = super().to_dict(exclude)
        data["productOptions"] = self.options
        return data


class SalesFlatOrderPayment(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "sales_flat_order_payments"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("sales_flat_orders.id", ondelete="CASCADE"), nullable=False)
    status = db.Column(db.SmallInteger, default=0, nullable=False)
    transaction_id = db.Column(db.String(64))
    reference_id = db.Column(db.String(255))
    reason = db.Column(db.Text)
    total_paid = db.Column(db.Numeric(8, 2), default=0)
