# easyguide/rest/routes/admin.py
import logging

from flask import Blueprint, request
from flask_login import current_user

from easyguide.errors import conflict_error, success
from easyguide.queue import mails
from easyguide.rest import identity
from easyguide.rest.identity import authorize_admin
from easyguide.rest.routes.auth import attach_stripe_customer
from easyguide.rest.routes.profile import FILE_REQUIRED, replace_image
from easyguide.rest.routes.utils import (
    cloudinary_helpers,
    config,
    data_client,
    enqueue_mail,
    get_payload,
    query_args,
)

logger = logging.getLogger(__name__)

admin_auth_bp = Blueprint("admin_auth", __name__, url_prefix="/admin/auth")
admin_profile_bp = Blueprint("admin_profile", __name__, url_prefix="/admin/profile")
admin_users_bp = Blueprint("admin_users", __name__, url_prefix="/admin/users")
admin_promo_codes_bp = Blueprint("admin_promo_codes", __name__, url_prefix="/admin/promo-codes")
admin_products_bp = Blueprint("admin_products", __name__, url_prefix="/admin/products")


# --- auth ---------------------------------------------------------------------------
@admin_auth_bp.post("/login")
def login():
    admin = data_client().post("/admin/admin-user/check-credentials", get_payload())
    return success(identity.login_admin(admin))


@admin_auth_bp.post("/restore-password")
def restore_password():
    result = data_client().patch("/admin/admin-user/restore-password", get_payload())
    if result:
        cfg = config()
        link = f"{cfg.get('ADMIN_APP_DOMAIN')}{cfg.get('ADMIN_RESTORE_PASSWORD_LINK')}?token={result['token']}"
        enqueue_mail(mails.send_admin_restore_password(link, result))
    return success()


@admin_auth_bp.patch("/reset-password")
def reset_password():
    data_client().patch("/admin/admin-user/reset-password", get_payload())
    return success()


@admin_auth_bp.get("/logout")
def logout():
    identity.logout()
    return success()


# --- profile -----------------------------------------------------------------------
@admin_profile_bp.get("/")
@authorize_admin
def get_profile():
    return success(data_client().get(f"/admin/admin-user/{current_user.id}"))


@admin_profile_bp.put("/")
@authorize_admin
def update_profile():
    return success(data_client().put(f"/admin/admin-user/{current_user.id}", get_payload()))


@admin_profile_bp.patch("/change-password")
@authorize_admin
def change_password():
    data_client().patch("/admin/admin-user/change-password", {**get_payload(), "id": current_user.id})
    return success()


@admin_profile_bp.patch("/image")
@authorize_admin
def update_image():
    result = replace_image(
        request.files.get("file"),
        config().get("files.settings.profileImage", {}),
        f"/admin/admin-user/{current_user.id}/profile-image",
    )
    return success(result["admin"])


# --- users -------------------------------------------------------------------------
@admin_users_bp.get("/")
@authorize_admin
def get_users():
    return success(data_client().get("/users/", query_args()))


@admin_users_bp.get("/<int:user_id>")
@authorize_admin
def get_user(user_id):
    return success(data_client().get(f"/users/{user_id}"))


@admin_users_bp.post("/")
@authorize_admin
def create_user():
    created = data_client().post("/admin/users/", get_payload(), status=201)
    user = attach_stripe_customer(created)
    enqueue_mail(mails.send_temporary_password({
        "name": created.get("firstName"),
        "email": created.get("email"),
        "temporaryPassword": created.get("temporaryPassword"),
    }))
    logger.info("[ADMIN] user #%s created by admin #%s", created["id"], current_user.id)
    return success(user, 201)


@admin_users_bp.patch("/<int:user_id>/change-email")
@authorize_admin
def change_email(user_id):
    changed = data_client().patch("/admin/users/change-email", get_payload(), params={"userId": user_id})
    cfg = config()
    enqueue_mail(mails.send_change_email_notification({
        "firstName": changed.get("firstName"),
        "email": changed.get("newEmail"),
    }))
    enqueue_mail(mails.send_change_email_alert({
        "firstName": changed.get("firstName"),
        "email": changed.get("oldEmail"),
        "link": f"{cfg.get('CLIENT_APP_DOMAIN')}{cfg.get('CHANGE_EMAIL_LINK')}",
    }))
    return success(changed)


@admin_users_bp.get("/<int:user_id>/toggle-block")
@authorize_admin
def toggle_block(user_id):
    return success(data_client().get(f"/admin/users/{user_id}/toggle-block"))


@admin_users_bp.delete("/<int:user_id>")
@authorize_admin
def delete_user(user_id):
    return success(data_client().delete(f"/users/{user_id}"))


# --- promo codes -------------------------------------------------------------------
@admin_promo_codes_bp.get("/")
@authorize_admin
def get_promo_codes():
    return success(data_client().get("/admin/promo-codes/", query_args()))


@admin_promo_codes_bp.post("/")
@authorize_admin
def create_promo_code():
    return success(data_client().post("/admin/promo-codes/", get_payload(), status=201), 201)


@admin_promo_codes_bp.get("/<int:promo_id>/toggle-activity")
@authorize_admin
def toggle_promo_code(promo_id):
    return success(data_client().get(f"/admin/promo-codes/{promo_id}/toggle-activity"))


@admin_promo_codes_bp.delete("/<int:promo_id>")
@authorize_admin
def delete_promo_code(promo_id):
    return success(data_client().delete(f"/admin/promo-codes/{promo_id}"))


# --- products ----------------------------------------------------------------------
@admin_products_bp.get("/<int:product_id>")
@authorize_admin
def get_product(product_id):
    return success(data_client().get(f"/admin/products/{product_id}"))


@admin_products_bp.post("/")
@authorize_admin
def create_product():
    return success(data_client().post("/admin/products/", get_payload(), status=201), 201)


@admin_products_bp.put("/update/<int:product_id>")
@authorize_admin
def update_product(product_id):
    return success(data_client().put(f"/admin/products/{product_id}", get_payload()))


@admin_products_bp.put("/update/<int:product_id>/details")
@authorize_admin
def update_product_details(product_id):
    return success(data_client().put(f"/admin/products/{product_id}/details", get_payload()))


@admin_products_bp.put("/update/<int:product_id>/meta-info")
@authorize_admin
def update_product_meta_info(product_id):
    return success(data_client().put(f"/admin/products/{product_id}/meta-info", get_payload()))


@admin_products_bp.get("/update/<int:product_id>/toggle-block")
@authorize_admin
def toggle_product_block(product_id):
    return success(data_client().get(f"/admin/products/{product_id}/toggle-block"))


@admin_products_bp.post("/<int:product_id>/attach-media")
@authorize_admin
def attach_media(product_id):
    files = [f for f in request.files.getlist("files") if f and f.filename]
    if not files:
        raise conflict_error(FILE_REQUIRED)
    helpers = cloudinary_helpers()
    options = config().get("files.settings.productImage", {})
    urls = [helpers.upload(f, options) for f in files]
    return success(data_client().post(f"/admin/products/{product_id}/attach-media", {"urls": urls}, status=201), 201)


@admin_products_bp.put("/<int:product_id>/gallery-position")
@authorize_admin
def set_gallery_position(product_id):
    return success(data_client().put(f"/admin/products/{product_id}/gallery-position", get_payload()))


@admin_products_bp.post("/<int:product_id>/remove-media")
@authorize_admin
def remove_media(product_id):
    removed = data_client().post(f"/admin/products/{product_id}/remove-media", get_payload())
    helpers = cloudinary_helpers()
    helpers.destroy(helpers.public_id_from_url(removed.get("imageUrl")))
    return success(removed)
