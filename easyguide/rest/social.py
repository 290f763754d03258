# easyguide/rest/social.py
import hashlib
import hmac
import logging

import requests
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from easyguide.errors import unauthorized_error

logger = logging.getLogger(__name__)

TOKEN_INVALID = "Token is invalid"


class SocialTypes:
    GOOGLE = "google"
    FACEBOOK = "facebook"


def verify_google_token(token: str, client_id: str) -> dict:
    """Verify a Google ``idToken`` and return the social user payload."""
    if not token:
        raise unauthorized_error(TOKEN_INVALID)
    try:
        info = id_token.verify_oauth2_token(token, google_requests.Request(), client_id)
    except ValueError as e:
        logger.warning("[SOCIAL] google token rejected: %s", e)
        raise unauthorized_error(TOKEN_INVALID) from e

    return {
        "socialId": info.get("sub"),
        "socialType": SocialTypes.GOOGLE,
        "email": info.get("email"),
        "firstName": info.get("given_name"),
        "lastName": info.get("family_name"),
        "profileImage": info.get("picture"),
    }


def appsecret_proof(secret: str, token: str) -> str:
    return hmac.new(secret.encode("utf-8"), token.encode("utf-8"), hashlib.sha256).hexdigest()


class FacebookGraph:
    def __init__(self, app_id, app_secret, graph_url="https://graph.facebook.com/v12.0", timeout=15):
        self.app_id = app_id
        self.app_secret = app_secret or ""
        self.graph_url = graph_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: dict) -> dict:
        response = requests.get(f"{self.graph_url}/{path}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def long_lived_token(self, access_token: str) -> str:
        data = self._get("oauth/access_token", {
            "grant_type": "fb_exchange_token",
            "client_id": self.app_id,
            "client_secret": self.app_secret,
            "fb_exchange_token": access_token,
        })
        return data["access_token"]

    def fetch_user(self, access_token: str) -> dict:
        """Exchange the short-lived token and read ``me`` plus the large picture."""
        if not access_token:
            raise unauthorized_error(TOKEN_INVALID)
        try:
            token = self.long_lived_token(access_token)
            auth = {"access_token": token, "appsecret_proof": appsecret_proof(self.app_secret, token)}
            me = self._get("me", {"fields": "id,email,first_name,last_name", **auth})
            picture = self._get("me/picture", {"type": "large", "redirect": "false", **auth})
        except (requests.RequestException, KeyError, ValueError) as e:
            logger.warning("[SOCIAL] facebook login failed: %s", e)
            raise unauthorized_error(TOKEN_INVALID) from e

        return {
            "socialId": me.get("id"),
            "socialType": SocialTypes.FACEBOOK,
            "email": me.get("email"),
            "firstName": me.get("first_name"),
            "lastName": me.get("last_name"),
            "profileImage": (picture.get("data") or {}).get("url"),
        }
