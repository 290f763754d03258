# easyguide/data/services/admin_user_service.py
from easyguide.data.models import Admin, AdminPasswordReset
from easyguide.data.services.base import BaseService, parse_phone_number
from easyguide.data.services.user_service import USER_ERROR_MESSAGES, not_unique_message
from easyguide.errors import ApplicationError, ERROR_CODES, not_found_error
from easyguide.extensions import db
from easyguide.generators import generate_reset_token
from easyguide.validation import Validator, dry_payload, throw_validation_error, to_str

UPDATE_ADMIN_SCHEMA = {
    "name": to_str,
    "email": lambda v: to_str(v).lower(),
    "phoneNumber": to_str,
    "landline": to_str,
    "address": to_str,
    "postalCode": to_str,
}
ADMIN_COLUMNS = {
    "name": "name",
    "email": "email",
    "phoneNumber": "phone_number",
    "landline": "landline",
    "address": "address",
    "postalCode": "postal_code",
}


class AdminUserService(BaseService):
    """Back-office accounts (``admins``)."""

    def get_admin(self, admin_id) -> Admin:
        return self.get_or_404(Admin, admin_id, USER_ERROR_MESSAGES["NOT_FOUND"])

    def check_credentials(self, payload: dict) -> Admin:
        values = dry_payload(payload, {"email": lambda v: to_str(v).lower(), "password": str})
        throw_validation_error([
            *Validator(values.get("email"), "email").required().email().result(),
            *Validator(values.get("password"), "password").required().result(),
        ])
        admin = Admin.query.filter_by(email=values["email"]).first()
        return self.check_login_credentials(admin, values["password"])

    def restore_password(self, payload: dict):
        email = to_str((payload or {}).get("email") or "").lower()
        throw_validation_error(Validator(email, "email").required().email().result())

        admin = Admin.query.filter_by(email=email).first()
        if admin is None:
            return None
        token = generate_reset_token()
        with self.transaction():
            db.session.add(AdminPasswordReset(email=admin.email, token=token, status=0))
        return {"name": admin.name, "email": admin.email, "token": token}

    def reset_password(self, payload: dict) -> None:
        payload = payload or {}
        throw_validation_error([
            *Validator(payload.get("token"), "token").required().result(),
            *Validator(payload.get("password"), "password").required().password().min_length(6).result(),
        ])
        reset = AdminPasswordReset.query.filter(
            AdminPasswordReset.token == payload["token"], AdminPasswordReset.status < 1
        ).first()
        admin = Admin.query.filter_by(email=reset.email).first() if reset else None
        if reset is None or admin is None:
            raise ApplicationError(
                400, ERROR_CODES["validation"], USER_ERROR_MESSAGES["INVALID_RESTORE_PASSWORD_TOKEN"]
            )
        with self.transaction():
            admin.set_password(payload["password"])
            reset.status = 1

    def update_admin(self, admin_id, payload: dict) -> Admin:
        admin = self.get_admin(admin_id)
        values = dry_payload(payload, UPDATE_ADMIN_SCHEMA)
        throw_validation_error([
            *Validator(values.get("name"), "name").required(False).max_length(255).result(),
            *Validator(values.get("email"), "email").required(False).email().result(),
            *Validator(values.get("phoneNumber"), "phoneNumber").required(False).phone().result(),
        ])
        if "email" in values and Admin.query.filter(Admin.email == values["email"], Admin.id != admin.id).first():
            raise not_found_error(not_unique_message("email"))
        if "phoneNumber" in values:
            values["phoneNumber"] = parse_phone_number(values["phoneNumber"])

        with self.transaction():
            for key, value in values.items():
                setattr(admin, ADMIN_COLUMNS[key], value)
        return admin

    def change_password(self, payload: dict) -> None:
        payload = payload or {}
        throw_validation_error([
            *Validator(payload.get("id"), "id").required().is_number().result(),
            *Validator(payload.get("oldPassword"), "oldPassword").required().result(),
            *Validator(payload.get("newPassword"), "newPassword").required().password().min_length(6).result(),
        ])
        admin = self.get_admin(int(payload["id"]))
        if not admin.check_password(payload["oldPassword"]):
            raise ApplicationError(400, ERROR_CODES["validation"], USER_ERROR_MESSAGES["INVALID_OLD_PASSWORD"])
        with self.transaction():
            admin.set_password(payload["newPassword"])

    def update_profile_image(self, admin_id, profile_image_url) -> dict:
        admin = self.get_admin(admin_id)
        throw_validation_error(Validator(profile_image_url, "profileImageUrl").required().result())
        old_url = admin.profile_image
        with self.transaction():
            admin.profile_image = profile_image_url
        return {"oldProfileImageUrl": old_url, "admin": admin.to_dict()}
