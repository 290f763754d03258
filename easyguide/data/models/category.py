# easyguide/data/models/category.py
from easyguide.extensions import db
from easyguide.data.models.base import SerializerMixin, TimestampMixin


class ECategory(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "e_categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(512))
    status = db.Column(db.SmallInteger, default=0, nullable=False)
    meta_keyword = db.Column(db.String(255))
    meta_description = db.Column(db.String(255))
    position = db.Column(db.Integer)
    slug = db.Column(db.String(255), index=True)
    lang_code = db.Column(db.String(8), default="en_GB")

    def __repr__(self):
        return f"<ECategory {self.slug}>"


class ECategoryProduct(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "e_category_products"

    id = db.Column(db.Integer, primary_key=True)
    e_category_id = db.Column(db.Integer, db.ForeignKey("e_categories.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
