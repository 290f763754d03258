# easyguide/rest/cloudinary_helpers.py
import logging
import os
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from easyguide.errors import ERROR_CODES, ApplicationError

logger = logging.getLogger(__name__)


def public_id_from_url(url):
    """``https://res.cloudinary.com/x/image/upload/v1/folder/abc.jpg`` -> ``abc``"""
    if not url:
        return None
    segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    public_id = os.path.splitext(segment)[0]
    return public_id or None


class CloudinaryHelpers:
    def __init__(self, config):
        cloudinary.config(
            cloud_name=config.get("CLOUDINARY_CLOUD_NAME"),
            api_key=config.get("CLOUDINARY_API_KEY"),
            api_secret=config.get("CLOUDINARY_API_SECRET"),
            secure=True,
        )

    def upload(self, file_storage, options=None) -> str:
        try:
            result = cloudinary.uploader.upload(file_storage, **(options or {}))
        except CloudinaryError as e:
            logger.error("[CLOUDINARY] upload failed: %s", e)
            raise ApplicationError(500, ERROR_CODES["internal_server_error"], str(e)) from e
        return result["secure_url"]

    def destroy(self, public_id):
        if not public_id:
            return None
        try:
            return cloudinary.uploader.destroy(public_id)
        except CloudinaryError as e:
            logger.error("[CLOUDINARY] destroy %s failed: %s", public_id, e)
            raise ApplicationError(500, ERROR_CODES["internal_server_error"], str(e)) from e

    public_id_from_url = staticmethod(public_id_from_url)
