# easyguide/data/models/admin.py
from easyguide.extensions import bcrypt, db
from easyguide.data.models.base import SerializerMixin, TimestampMixin


class Admin(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "admins"
    __hidden__ = ("password", "remember_token")

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    email_verified_at = db.Column(db.DateTime)
    password = db.Column(db.String(255), nullable=False)
    profile_image = db.Column(db.String(512))
    phone_number = db.Column(db.String(32))
    landline = db.Column(db.String(32))
    address = db.Column(db.String(255))
    postal_code = db.Column(db.String(32))
    is_activated = db.Column(db.SmallInteger, default=1, nullable=False)
    remember_token = db.Column(db.String(255))

    def set_password(self, password: str) -> None:
        self.password = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password: str) -> bool:
        if not self.password or not password:
            return False
        return bcrypt.check_password_hash(self.password, password)

    def __repr__(self):
        return f"<Admin #{self.id} {self.email}>"


class AdminPasswordReset(db.Model, TimestampMixin, SerializerMixin):
    __tablename__ = "admin_password_resets"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), index=True)
    token = db.Column(db.String(64), index=True)
    status = db.Column(db.SmallInteger, default=0, nullable=False)
