# easyguide/data/models/product.py
import json

from easyguide.extensions import db
from easyguide.data.models.base import SerializerMixin, TimestampMixin

DEFAULT_CURRENCY = {"code": "EUR", "currencyName": "Euro", "symbol": "€", "localSymbol": "€", "precision": 2}


class Product(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    article_type = db.Column(db.String(64))
    url = db.Column(db.String(512))
    image_url = db.Column(db.String(512))
    neighbourhood = db.Column(db.String(255))
    canonical_url = db.Column(db.String(512))
    rating_avg = db.Column(db.Float, default=0)
    rating_count = db.Column(db.Integer, default=0)
    pricing_type = db.Column(db.String(64))
    original_price = db.Column(db.Float, default=0)
    final_price = db.Column(db.Float, default=0)
    best_discount = db.Column(db.Float, default=0)
    meta_title = db.Column(db.String(255))
    meta_author = db.Column(db.String(255))
    meta_keyword = db.Column(db.String(255))
    meta_description = db.Column(db.String(255))
    slug = db.Column(db.String(255), index=True)
    lang_code = db.Column(db.String(8), default="en_GB")
    is_suggested = db.Column(db.Integer, default=0)
    status = db.Column(db.Integer, default=0, nullable=False)
    currency = db.Column(db.Text, default=lambda: json.dumps(DEFAULT_CURRENCY))
    city_id = db.Column(db.Integer, db.ForeignKey("cities.id"))
    most_popular = db.Column(db.Boolean, default=False, nullable=False)
    top_activities = db.Column(db.Boolean, default=False, nullable=False)

    details = db.relationship("ProductDetail", backref="product", uselist=False, cascade="all, delete-orphan")
    media = db.relationship("ProductMedia", backref="product", lazy=True, cascade="all, delete-orphan",
                            order_by="ProductMedia.web_position")
    meta_infos = db.relationship("ProductMetaInfo", backref="product", lazy=True, cascade="all, delete-orphan")
    views = db.relationship("ProductView", backref="product", lazy=True, cascade="all, delete-orphan")

    def to_dict(self, exclude=(), include=()):
        data = super().to_dict(exclude)
        try:
            data["currency"] = json.loads(self.currency) if self.currency else None
        except ValueError:
            data["currency"] = None
        if "details" in include:
            data["details"] = self.details.to_dict() if self.details else None
        if "media" in include:
            data["media"] = [m.to_dict() for m in self.media]
        if "metaInfo" in include:
            data["metaInfo"] = [m.to_dict() for m in self.meta_infos]
        if "city" in include:
            data["city"] = self.city.to_dict() if self.city else None
        return data

    def __repr__(self):
        return f"<Product #{self.id} {self.slug}>"


class ProductDetail(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "product_details"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    display_tags = db.Column(db.String(255))
    start_latitude = db.Column(db.Float)
    start_longitude = db.Column(db.Float)
    start_address_line1 = db.Column(db.String(255))
    start_address_line2 = db.Column(db.String(255))
    start_city = db.Column(db.String(255))
    start_postal_code = db.Column(db.String(32))
    start_country = db.Column(db.String(255))
    end_latitude = db.Column(db.Float)
    end_longitude = db.Column(db.Float)
    end_address_line1 = db.Column(db.String(255))
    end_address_line2 = db.Column(db.String(255))
    end_city = db.Column(db.String(255))
    end_postal_code = db.Column(db.String(32))
    end_country = db.Column(db.String(255))
    product_type = db.Column(db.String(64))
    has_instant_confirmation = db.Column(db.Integer, default=0)
    has_mobile_ticket = db.Column(db.Integer, default=0)
    has_audio_available = db.Column(db.Integer, default=0)


class ProductMedia(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "product_media"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    image_url = db.Column(db.String(512), nullable=False)
    caption = db.Column(db.String(255))
    web_position = db.Column(db.Integer, default=1)
    mobile_position = db.Column(db.Integer, default=1)
    status = db.Column(db.Integer, default=1)


class ProductMetaInfo(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "product_meta_infos"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    meta_key = db.Column(db.String(255), nullable=False)
    meta_key_html = db.Column(db.String(255))
    meta_value = db.Column(db.Text)


class ProductView(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "product_views"

    id = db.Column(db.Integer, primary_key=True)
    ip_address = db.Column(db.String(64))
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    page_view = db.Column(db.Integer, default=1)
    device_type = db.Column(db.Integer, default=2)
    utm_source = db.Column(db.String(255))
    utm_medium = db.Column(db.String(255))
