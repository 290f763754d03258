# easyguide/data/models/itinerary.py
import json

from easyguide.extensions import db
from easyguide.data.models.base import SerializerMixin, TimestampMixin


class Itinerary(db.Model, TimestampMixin, SerializerMixin):
    """A visitor's cart; guests' carts carry ``expire_at``."""

    __tablename__ = "itineraries"

    id = db.Column(db.Integer, primary_key=True)
    device_type = db.Column(db.Integer, default=2)
    user_id = db.Column(db.Integer, index=True)
    guest_id = db.Column(db.Integer, index=True)
    name = db.Column(db.String(255))
    status = db.Column(db.SmallInteger, default=0, nullable=False)
    visibility = db.Column(db.SmallInteger, default=1)
    expire_at = db.Column(db.DateTime)
    is_visited = db.Column(db.SmallInteger, default=0)
    is_booked = db.Column(db.SmallInteger, default=0, nullable=False)
    utm_source = db.Column(db.String(255))
    utm_medium = db.Column(db.String(255))

    items = db.relationship("ItineraryItem", backref="itinerary", lazy=True, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Itinerary #{self.id} user={self.user_id} guest={self.guest_id}>"


class ItineraryItem(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "itinerary_items"

    id = db.Column(db.Integer, primary_key=True)
    itinerary_id = db.Column(db.Integer, db.ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)
    product_name = db.Column(db.String(255))
    position = db.Column(db.String(16))
    itinerary_date = db.Column(db.Date, nullable=False)
    date_time = db.Column(db.String(64))
    variant_id = db.Column(db.Integer)
    variant_name = db.Column(db.String(255))
    variant_item_id = db.Column(db.BigInteger)
    total_price = db.Column(db.Numeric(8, 2), default=0)
    product_options = db.Column(db.Text)
    is_excluded = db.Column(db.SmallInteger, default=0)
    is_booked = db.Column(db.SmallInteger, default=0, nullable=False)
    device_type = db.Column(db.Integer, default=2)

    product = db.relationship("Product", lazy="joined")

    @property
    def options(self) -> list:
        try:
            return json.loads(self.product_options or "[]")
        except ValueError:
            return []

    def to_dict(self, exclude=()):
        data = super().to_dict(exclude)
        data["productOptions"] = self.options
        data["imageUrl"] = self.product.image_url if self.product else None
        return data
