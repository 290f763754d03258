# easyguide/data/routes/admins.py
from flask import Blueprint

from easyguide.data.routes.utils import get_payload, service
from easyguide.errors import success

admins_bp = Blueprint("admins", __name__, url_prefix="/admin/admin-user")


@admins_bp.get("/<int:admin_id>")
def get_admin(admin_id):
    return success(service("admin_user_service").get_admin(admin_id).to_dict())


@admins_bp.post("/check-credentials")
def check_credentials():
    admin = service("admin_user_service").check_credentials(get_payload())
    return success(admin.to_dict())


@admins_bp.patch("/restore-password")
def restore_password():
    return success(service("admin_user_service").restore_password(get_payload()))


@admins_bp.patch("/reset-password")
def reset_password():
    service("admin_user_service").reset_password(get_payload())
    return success()


@admins_bp.put("/<int:admin_id>")
def update_admin(admin_id):
    admin = service("admin_user_service").update_admin(admin_id, get_payload())
    return success(admin.to_dict())


@admins_bp.patch("/change-password")
def change_password():
    service("admin_user_service").change_password(get_payload())
    return success()


@admins_bp.patch("/<int:admin_id>/profile-image")
def update_profile_image(admin_id):
    url = get_payload().get("profileImageUrl")
    return success(service("admin_user_service").update_profile_image(admin_id, url))
