# easyguide/data/routes/users.py
from flask import Blueprint, request

from easyguide.data.routes.utils import get_payload, service
from easyguide.errors import success

users_bp = Blueprint("users", __name__, url_prefix="/users")
admin_users_bp = Blueprint("admin_users", __name__, url_prefix="/admin/users")


@users_bp.get("/")
def get_users():
    return success(service("user_service").get_users(request.args))


@users_bp.post("/create")
def create_user():
    return success(service("user_service").create_user(get_payload()), 201)


@users_bp.post("/check-otp")
def check_otp_code():
    user = service("user_service").check_otp_code(get_payload())
    return success(user.to_dict())


@users_bp.post("/check-credentials")
def check_credentials():
    user = service("user_service").check_credentials(get_payload())
    return success(user.to_dict())


@users_bp.post("/send-new-otp")
def send_new_otp():
    return success(service("user_service").send_new_otp(get_payload()))


@users_bp.patch("/change-password")
def change_password():
    service("user_service").change_password(get_payload())
    return success()


@users_bp.post("/restore-password")
def restore_password():
    return success(service("user_service").restore_password(get_payload()))


@users_bp.patch("/reset-password")
def reset_password():
    service("user_service").reset_password(get_payload())
    return success()


@users_bp.patch("/<int:user_id>/customer_token")
def update_stripe_customer_token(user_id):
    token = get_payload().get("stripeCustomerToken")
    user = service("user_service").update_stripe_customer_token(user_id, token)
    return success(user.to_dict())


@users_bp.patch("/<int:user_id>/profile-image")
def update_profile_image(user_id):
    url = get_payload().get("profileImageUrl")
    return success(service("user_service").update_profile_image(user_id, url))


@users_bp.get("/<int:user_id>/favourites")
def get_favourite_products(user_id):
    return success(service("user_service").get_favourite_products(user_id, request.args))


@users_bp.patch("/<int:user_id>/favourites")
def favourite_products(user_id):
    service("user_service").favourite_products(user_id, request.args.get("action"), get_payload())
    return success(None, 201)


@users_bp.get("/<int:user_id>")
def get_user(user_id):
    return success(service("user_service").get_user(user_id).to_dict())


@users_bp.patch("/<int:user_id>")
def update_user(user_id):
    user = service("user_service").update_user(user_id, get_payload())
    return success(user.to_dict())


@users_bp.delete("/<int:user_id>")
def delete_user(user_id):
    return success(service("user_service").delete_user(user_id))


# --- back-office ------------------------------------------------------------
@admin_users_bp.post("/")
def create_user_by_admin():
    return success(service("user_service").create_user_by_admin(get_payload()), 201)


@admin_users_bp.patch("/change-email")
def change_email():
    user_id = request.args.get("userId", type=int)
    return success(service("user_service").change_email(user_id, get_payload()))


@admin_users_bp.get("/<int:user_id>/toggle-block")
def toggle_block(user_id):
    return success(service("user_service").toggle_block(user_id).to_dict())
