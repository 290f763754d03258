# easyguide/data/models/user.py
from datetime import datetime

from easyguide.extensions import bcrypt, db
from easyguide.data.models.base import SerializerMixin, TimestampMixin


class User(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "users"
    __hidden__ = ("password", "remember_token")

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(255))
    last_name = db.Column(db.String(255))
    email = db.Column(db.String(255), unique=True, index=True)
    referral_code = db.Column(db.String(255))
    social_id = db.Column(db.String(255))
    social_type = db.Column(db.String(32))
    email_verified_at = db.Column(db.DateTime)
    phone_verified_at = db.Column(db.DateTime)
    sent_email = db.Column(db.DateTime, default=datetime.utcnow)
    reminder_email = db.Column(db.SmallInteger, default=0)
    password = db.Column(db.String(255))
    country_id = db.Column(db.Integer, db.ForeignKey("countries.id"))
    phone_number = db.Column(db.String(32))
    is_mobile_registered = db.Column(db.SmallInteger, default=0)
    dob = db.Column(db.Date)
    age = db.Column(db.Integer)
    gender = db.Column(db.String(16))
    profile_image = db.Column(db.String(512))
    status = db.Column(db.SmallInteger, default=0, nullable=False)
    device_type = db.Column(db.Integer, default=2)
    remember_token = db.Column(db.String(255))
    stripe_customer_token = db.Column(db.String(255))
    utm_source = db.Column(db.String(255))
    utm_medium = db.Column(db.String(255))
    lang_code = db.Column(db.String(8), default="en_GB")
    is_blocked = db.Column(db.SmallInteger, default=0, nullable=False)

    favourites = db.relationship("FavouriteProduct", backref="user", lazy=True, cascade="all, delete-orphan")

    # --- Password handling ---------------------------------------------------
    def set_password(self, password: str) -> None:
        self.password = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password: str) -> bool:
        if not self.password or not password:
            return False
        return bcrypt.check_password_hash(self.password, password)

    @property
    def is_social(self) -> bool:
        return bool(self.social_id and self.social_type)

    def __repr__(self):
        return f"<User #{self.id} {self.email}>"


class RegistrationOtp(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "registration_otps"

    id = db.Column(db.Integer, primary_key=True)
    phone_number = db.Column(db.String(32))
    otp = db.Column(db.String(10), nullable=False)
    status = db.Column(db.SmallInteger, default=0, nullable=False)
    email = db.Column(db.String(255), index=True)
    expire_at = db.Column(db.DateTime)

    def __repr__(self):
        return f"<RegistrationOtp {self.email} status={self.status}>"


class PasswordReset(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "password_resets"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), index=True)
    token = db.Column(db.String(64), index=True)
    status = db.Column(db.SmallInteger, default=0, nullable=False)


class FavouriteProduct(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "favourite_products"
    __table_args__ = (db.UniqueConstraint("user_id", "product_id", name="uq_favourite_user_product"),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
