# easyguide/data/services/user_service.py
from datetime import datetime

from easyguide.data.models import FavouriteProduct, PasswordReset, Product, RegistrationOtp, User
from easyguide.data.services.base import BaseService, life_time, parse_phone_number
from easyguide.errors import ApplicationError, ERROR_CODES, conflict_error, not_found_error
from easyguide.extensions import db
from easyguide.generators import (
    generate_otp,
    generate_referral_code,
    generate_reset_token,
    generate_temporary_password,
)
from easyguide.validation import Validator, dry_payload, throw_validation_error, to_str

USER_ERROR_MESSAGES = {
    "NOT_FOUND": "User with this identifier doesn't exist",
    "NOT_FOUND_PRODUCT": "Product with this identifier doesn't exist",
    "INVALID_OTP": "Provided otp code is invalid",
    "INVALID_FAVOURITES_ACTION": "Choose an action `add` or `remove`",
    "INVALID_OLD_PASSWORD": "Old password is invalid",
    "INVALID_RESTORE_PASSWORD_TOKEN": "Invalid token",
    "CHANGE_EMAIL_ERROR": "Provide a valid email, different from the current one",
}


def not_unique_message(field):
    return f'Field "{field}" must be unique'


def cant_update_profile_image_message(social_type):
    return f"You can't update your profile image, if you are signed in with {social_type}"


CREATE_USER_SCHEMA = {
    "firstName": to_str,
    "lastName": to_str,
    "email": lambda v: to_str(v).lower(),
    "password": str,
    "phoneNumber": to_str,
    "countryId": int,
    "gender": to_str,
    "langCode": to_str,
    "socialId": to_str,
    "socialType": to_str,
    "profileImage": to_str,
}

UPDATE_USER_SCHEMA = {
    "firstName": to_str,
    "lastName": to_str,
    "phoneNumber": to_str,
    "countryId": int,
    "dob": to_str,
    "gender": to_str,
    "langCode": to_str,
}
SOCIAL_UPDATABLE = ("phoneNumber", "dob")

FIELD_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "phoneNumber": "phone_number",
    "countryId": "country_id",
    "dob": "dob",
    "gender": "gender",
    "langCode": "lang_code",
}


class UserService(BaseService):
    """Customers: registration with OTP, credentials, profile, password restore, favourites."""

    # --- reads ---------------------------------------------------------------
    def get_users(self, query):
        pagination = self.get_pagination(query)
        q = self.filter_all(
            User.query,
            self.get_search(query, [User.first_name, User.last_name, User.email]),
        )
        q = q.order_by(*(self.get_sort(query, User) or [User.id.desc()]))
        return self.list_response(q, pagination)

    def get_user(self, user_id) -> User:
        return self.get_or_404(User, user_id, USER_ERROR_MESSAGES["NOT_FOUND"])

    # --- registration --------------------------------------------------------
    def create_user(self, payload: dict) -> dict:
        if payload.get("socialId") and payload.get("socialType"):
            return self.create_social_network_user(payload)

        values = self._prepare_user_to_create(payload)
        otp = generate_otp()

        with self.transaction():
            user = self._build_user(values, status=0)
            db.session.add(user)
            db.session.flush()
            db.session.add(RegistrationOtp(
                email=user.email,
                phone_number=user.phone_number,
                otp=otp,
                expire_at=self._otp_expiration(),
            ))

        return {**self._created_user(user), "otp": otp}

    def create_social_network_user(self, payload: dict) -> dict:
        values = dry_payload(payload, CREATE_USER_SCHEMA)
        throw_validation_error([
            *Validator(values.get("email"), "email").required().email().result(),
            *Validator(values.get("socialId"), "socialId").required().result(),
            *Validator(values.get("socialType"), "socialType").required().result(),
        ])

        user = User.query.filter_by(email=values["email"]).first()
        with self.transaction():
            if user is None:
                user = User(
                    email=values["email"],
                    referral_code=generate_referral_code(),
                    email_verified_at=datetime.utcnow(),
                    status=1,
                )
                db.session.add(user)
            user.first_name = values.get("firstName", user.first_name)
            user.last_name = values.get("lastName", user.last_name)
            user.social_id = values["socialId"]
            user.social_type = values["socialType"]
            if values.get("profileImage"):
                user.profile_image = values["profileImage"]

        return self._created_user(user)

    def create_user_by_admin(self, payload: dict) -> dict:
        payload = dict(payload or {})
        temporary_password = payload.get("password") or generate_temporary_password()
        payload["password"] = temporary_password
        values = self._prepare_user_to_create(payload)

        with self.transaction():
            user = self._build_user(values, status=1)
            db.session.add(user)

        return {**self._created_user(user), "temporaryPassword": temporary_password}

    def check_otp_code(self, payload: dict) -> User:
        values = dry_payload(payload, {"email": lambda v: to_str(v).lower(), "otp": to_str})
        throw_validation_error([
            *Validator(values.get("email"), "email").required().email().result(),
            *Validator(values.get("otp"), "otp").required().only_digits().result(),
        ])

        otp = (
            RegistrationOtp.query
            .filter(
                RegistrationOtp.email == values["email"],
                RegistrationOtp.status == 0,
                RegistrationOtp.expire_at >= datetime.utcnow(),
            )
            .order_by(RegistrationOtp.created_at.desc(), RegistrationOtp.id.desc())
            .first()
        )
        if otp is None or otp.otp != values["otp"]:
            raise ApplicationError(400, ERROR_CODES["validation"], USER_ERROR_MESSAGES["INVALID_OTP"])

        user = User.query.filter_by(email=values["email"]).first()
        if user is None:
            raise not_found_error(USER_ERROR_MESSAGES["NOT_FOUND"])

        with self.transaction():
            RegistrationOtp.query.filter_by(email=values["email"]).update({"status": 1})
            user.status = 1
            user.email_verified_at = datetime.utcnow()
        return user

    def check_credentials(self, payload: dict) -> User:
        values = dry_payload(payload, {"email": lambda v: to_str(v).lower(), "password": str})
        throw_validation_error([
            *Validator(values.get("email"), "email").required().email().result(),
            *Validator(values.get("password"), "password").required().result(),
        ])
        user = User.query.filter_by(email=values["email"]).first()
        return self.check_login_credentials(user, values["password"])

    def send_new_otp(self, payload: dict):
        email = to_str((payload or {}).get("email") or "").lower()
        user = User.query.filter_by(email=email).first() if email else None
        if user is None or user.status != 0:
            return None

        otp = generate_otp()
        with self.transaction():
            db.session.add(RegistrationOtp(
                email=user.email,
                phone_number=user.phone_number,
                otp=otp,
                expire_at=self._otp_expiration(),
            ))
        return {"email": user.email, "firstName": user.first_name, "otp": otp}

    # --- profile -------------------------------------------------------------
    def update_user(self, user_id, payload: dict) -> User:
        user = self.get_user(user_id)
        values = dry_payload(payload, UPDATE_USER_SCHEMA)
        if user.is_social:
            values = {k: v for k, v in values.items() if k in SOCIAL_UPDATABLE}

        throw_validation_error([
            *Validator(values.get("firstName"), "firstName").required(False).max_length(255).result(),
            *Validator(values.get("lastName"), "lastName").required(False).max_length(255).result(),
            *Validator(values.get("phoneNumber"), "phoneNumber").required(False).phone().result(),
            *Validator(values.get("dob"), "dob").required(False).date_format("%Y-%m-%d").result(),
            *Validator(values.get("countryId"), "countryId").required(False).is_number().result(),
        ])

        if "phoneNumber" in values:
            values["phoneNumber"] = parse_phone_number(values["phoneNumber"])
            taken = User.query.filter(User.phone_number == values["phoneNumber"], User.id != user.id).first()
            if taken:
                raise conflict_error(not_unique_message("phoneNumber"))
        if "dob" in values:
            values["dob"] = datetime.strptime(values["dob"], "%Y-%m-%d").date()

        with self.transaction():
            for key, value in values.items():
                setattr(user, FIELD_COLUMNS[key], value)
        return user

    def update_stripe_customer_token(self, user_id, token) -> User:
        user = self.get_user(user_id)
        throw_validation_error(Validator(token, "stripeCustomerToken").required().result())
        with self.transaction():
            user.stripe_customer_token = token
        return user

    def update_profile_image(self, user_id, profile_image_url) -> dict:
        user = self.get_user(user_id)
        if user.is_social:
            raise conflict_error(cant_update_profile_image_message(user.social_type))
        throw_validation_error(Validator(profile_image_url, "profileImageUrl").required().result())

        old_url = user.profile_image
        with self.transaction():
            user.profile_image = profile_image_url
        return {"oldProfileImageUrl": old_url, "user": user.to_dict()}

    def change_password(self, payload: dict) -> None:
        payload = payload or {}
        throw_validation_error([
            *Validator(payload.get("id"), "id").required().is_number().result(),
            *Validator(payload.get("oldPassword"), "oldPassword").required().result(),
            *Validator(payload.get("newPassword"), "newPassword").required().password().min_length(6).result(),
        ])
        user = self.get_user(int(payload["id"]))
        if not user.check_password(payload["oldPassword"]):
            raise ApplicationError(400, ERROR_CODES["validation"], USER_ERROR_MESSAGES["INVALID_OLD_PASSWORD"])
        with self.transaction():
            user.set_password(payload["newPassword"])

    def delete_user(self, user_id) -> int:
        user = self.get_user(user_id)
        with self.transaction():
            db.session.delete(user)
        return 1

    # --- password restore ----------------------------------------------------
    def restore_password(self, payload: dict):
        email = to_str((payload or {}).get("email") or "").lower()
        throw_validation_error(Validator(email, "email").required().email().result())

        user = User.query.filter_by(email=email).first()
        if user is None:
            return None

        token = generate_reset_token()
        with self.transaction():
            db.session.add(PasswordReset(email=user.email, token=token, status=0))
        return {"firstName": user.first_name, "lastName": user.last_name, "email": user.email, "token": token}

    def reset_password(self, payload: dict) -> None:
        payload = payload or {}
        throw_validation_error([
            *Validator(payload.get("token"), "token").required().result(),
            *Validator(payload.get("password"), "password").required().password().min_length(6).result(),
        ])

        reset = PasswordReset.query.filter(PasswordReset.token == payload["token"], PasswordReset.status < 1).first()
        user = User.query.filter_by(email=reset.email).first() if reset else None
        if reset is None or user is None:
            raise ApplicationError(
                400, ERROR_CODES["validation"], USER_ERROR_MESSAGES["INVALID_RESTORE_PASSWORD_TOKEN"]
            )

        with self.transaction():
            user.set_password(payload["password"])
            reset.status = 1

    # --- favourites ----------------------------------------------------------
    def favourite_products(self, user_id, action, payload: dict) -> None:
        user = self.get_user(user_id)
        product_id = (payload or {}).get("productId")
        throw_validation_error(Validator(product_id, "productId").required().is_number().result())

        if action not in ("add", "remove"):
            raise ApplicationError(
                400, ERROR_CODES["validation"], USER_ERROR_MESSAGES["INVALID_FAVOURITES_ACTION"]
            )
        product = db.session.get(Product, int(product_id))
        if product is None:
            raise not_found_error(USER_ERROR_MESSAGES["NOT_FOUND_PRODUCT"])

        existing = FavouriteProduct.query.filter_by(user_id=user.id, product_id=product.id).first()
        with self.transaction():
            if action == "add" and existing is None:
                db.session.add(FavouriteProduct(user_id=user.id, product_id=product.id))
            elif action == "remove" and existing is not None:
                db.session.delete(existing)

    def get_favourite_products(self, user_id, query):
        user = self.get_user(user_id)
        pagination = self.get_pagination(query)
        q = (
            Product.query
            .join(FavouriteProduct, FavouriteProduct.product_id == Product.id)
            .filter(FavouriteProduct.user_id == user.id)
            .order_by(FavouriteProduct.created_at.desc())
        )
        return self.list_response(q, pagination, lambda p: {**p.to_dict(), "isFavourite": True})

    # --- admin ---------------------------------------------------------------
    def change_email(self, user_id, payload: dict) -> dict:
        user = self.get_user(user_id)
        email = to_str((payload or {}).get("email") or "").lower()
        throw_validation_error(Validator(email, "email").required().email().result())

        if email == (user.email or "").lower():
            raise conflict_error(USER_ERROR_MESSAGES["CHANGE_EMAIL_ERROR"])
        if User.query.filter(User.email == email, User.id != user.id).first():
            raise not_found_error(not_unique_message("email"))

        old_email = user.email
        with self.transaction():
            user.email = email
            user.status = 0
        return {
            "id": user.id,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "oldEmail": old_email,
            "newEmail": email,
        }

    def toggle_block(self, user_id) -> User:
        user = self.get_user(user_id)
        with self.transaction():
            user.is_blocked = 0 if user.is_blocked else 1
        return user

    # --- helpers -------------------------------------------------------------
    def _prepare_user_to_create(self, payload: dict) -> dict:
        values = dry_payload(payload, CREATE_USER_SCHEMA)
        throw_validation_error([
            *Validator(values.get("firstName"), "firstName").required().max_length(255).result(),
            *Validator(values.get("lastName"), "lastName").required().max_length(255).result(),
            *Validator(values.get("email"), "email").required().email().result(),
            *Validator(values.get("password"), "password").required().password().min_length(6).result(),
            *Validator(values.get("phoneNumber"), "phoneNumber").required().phone().result(),
        ])

        if User.query.filter_by(email=values["email"]).first():
            raise self._existed_entity_error("email")
        values["phoneNumber"] = parse_phone_number(values["phoneNumber"])
        if User.query.filter_by(phone_number=values["phoneNumber"]).first():
            raise self._existed_entity_error("phone number")
        return values

    @staticmethod
    def _build_user(values: dict, status: int) -> User:
        user = User(
            first_name=values["firstName"],
            last_name=values["lastName"],
            email=values["email"],
            phone_number=values["phoneNumber"],
            country_id=values.get("countryId"),
            gender=values.get("gender"),
            lang_code=values.get("langCode", "en_GB"),
            referral_code=generate_referral_code(),
            status=status,
        )
        user.set_password(values["password"])
        return user

    @staticmethod
    def _created_user(user: User) -> dict:
        return {"id": user.id, "email": user.email, "firstName": user.first_name, "lastName": user.last_name}

    @staticmethod
    def _existed_entity_error(condition):
        return ApplicationError(400, ERROR_CODES["conflict"], f"User with the same {condition} already exists")

    def _otp_expiration(self) -> datetime:
        amount = self.config.get("OTP_MAX_AGE_AMOUNT", 4) if self.config else 4
        unit = self.config.get("OTP_MAX_AGE_UNIT", "minutes") if self.config else "minutes"
        return datetime.utcnow() + life_time(amount, unit)
