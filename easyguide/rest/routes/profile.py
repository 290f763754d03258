# easyguide/rest/routes/profile.py
from flask import Blueprint, request
from flask_login import current_user

from easyguide.errors import conflict_error, success
from easyguide.rest.identity import authenticate, authorize
from easyguide.rest.routes.utils import cloudinary_helpers, config, data_client, get_payload, query_args

profile_bp = Blueprint("profile", __name__, url_prefix="/profile")

FILE_REQUIRED = "File is required"


def replace_image(file_storage, options: dict, patch_path: str) -> dict:
    """Upload the new image, store its url and drop the previous Cloudinary asset."""
    if file_storage is None or not file_storage.filename:
        raise conflict_error(FILE_REQUIRED)
    helpers = cloudinary_helpers()
    url = helpers.upload(file_storage, options)
    result = data_client().patch(patch_path, {"profileImageUrl": url})
    old_url = result.get("oldProfileImageUrl")
    if old_url and "cloudinary" in old_url:
        helpers.destroy(helpers.public_id_from_url(old_url))
    return result


@profile_bp.get("/")
@authenticate
@authorize()
def get_profile():
    return success(data_client().get(f"/users/{current_user.id}"))


@profile_bp.patch("/")
@authenticate
@authorize()
def update_profile():
    return success(data_client().patch(f"/users/{current_user.id}", get_payload()))


@profile_bp.patch("/change-password")
@authenticate
@authorize()
def change_password():
    data_client().patch("/users/change-password", {**get_payload(), "id": current_user.id})
    return success()


@profile_bp.patch("/image")
@authenticate
@authorize()
def update_image():
    result = replace_image(
        request.files.get("file"),
        config().get("files.settings.profileImage", {}),
        f"/users/{current_user.id}/profile-image",
    )
    return success(result["user"])


@profile_bp.get("/favourites")
@authenticate
@authorize()
def get_favourites():
    return success(data_client().get(f"/users/{current_user.id}/favourites", query_args()))


@profile_bp.patch("/favourites")
@authenticate
@authorize()
def update_favourites():
    data_client().patch(
        f"/users/{current_user.id}/favourites",
        get_payload(),
        status=201,
        params={"action": request.args.get("action")},
    )
    return success(None, 201)


@profile_bp.get("/bookings")
@authenticate
@authorize()
def get_bookings():
    return success(data_client().get(f"/orders/by-user/{current_user.id}", query_args()))
