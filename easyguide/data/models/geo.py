# easyguide/data/models/geo.py
from easyguide.extensions import db
from easyguide.data.models.base import SerializerMixin, TimestampMixin


class Country(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "countries"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.String(8))
    dial_code = db.Column(db.String(16))
    currency_name = db.Column(db.String(64))
    currency_symbol = db.Column(db.String(8))
    currency_code = db.Column(db.String(8))

    def __repr__(self):
        return f"<Country {self.code}>"


class City(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "cities"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    code = db.Column(db.String(32))
    top_destination = db.Column(db.Boolean, default=False, nullable=False)
    top_to_visit = db.Column(db.Boolean, default=False, nullable=False)
    image_url = db.Column(db.String(512))

    products = db.relationship("Product", backref="city", lazy=True)

    def __repr__(self):
        return f"<City {self.name}>"
