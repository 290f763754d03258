# easyguide/rest/routes/auth.py
import logging

from flask import Blueprint

from easyguide.errors import ERROR_CODES, ApplicationError, success
from easyguide.queue import mails
from easyguide.rest import identity
from easyguide.rest.routes.utils import config, data_client, enqueue_mail, get_payload, payment_client
from easyguide.rest.social import FacebookGraph, verify_google_token

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _reject_blocked(user: dict) -> None:
    if user.get("isBlocked"):
        raise ApplicationError(403, ERROR_CODES["security__blocked"], "User is blocked")


def attach_stripe_customer(user: dict) -> dict:
    """Create the Stripe customer for ``user`` and store its token on the data side."""
    customer = payment_client().post("/stripe/customer/create", {
        "email": user.get("email"),
        "firstName": user.get("firstName"),
        "lastName": user.get("lastName"),
    }, status=201)
    return data_client().patch(f"/users/{user['id']}/customer_token", {
        "stripeCustomerToken": customer["stripeCustomerToken"],
    })


def _social_login(social_user: dict):
    created = data_client().post("/users/create", social_user, status=201)
    user = data_client().get(f"/users/{created['id']}")
    _reject_blocked(user)
    if not user.get("stripeCustomerToken"):
        user = attach_stripe_customer(user)
    return success(identity.login(user))


@auth_bp.post("/login-email")
def login_email():
    user = data_client().post("/users/check-credentials", get_payload())
    _reject_blocked(user)
    return success(identity.login(user))


@auth_bp.post("/login-google")
def login_google():
    social_user = verify_google_token(get_payload().get("idToken"), config().get("GOOGLE_CLIENT_ID"))
    return _social_login(social_user)


@auth_bp.post("/login-facebook")
def login_facebook():
    cfg = config()
    graph = FacebookGraph(
        cfg.get("FACEBOOK_APP_ID"), cfg.get("FACEBOOK_APP_SECRET"), cfg.get("FACEBOOK_GRAPH_URL")
    )
    return _social_login(graph.fetch_user(get_payload().get("accessToken")))


@auth_bp.post("/registration")
def registration():
    created = data_client().post("/users/create", get_payload(), status=201)
    user = attach_stripe_customer(created)
    enqueue_mail(mails.send_otp(created["otp"], created))
    logger.info("[AUTH] registered user #%s", created["id"])
    return success({"user": user}, 201)


@auth_bp.post("/verify-email")
def verify_email():
    data_client().post("/users/check-otp", get_payload())
    return success()


@auth_bp.post("/verify-email-with-auth")
def verify_email_with_auth():
    user = data_client().post("/users/check-otp", get_payload())
    return success(identity.login(user))


@auth_bp.post("/send-new-otp")
def send_new_otp():
    created = data_client().post("/users/send-new-otp", get_payload())
    if created:
        enqueue_mail(mails.send_otp(created["otp"], created))
    return success(None, 201)


@auth_bp.post("/restore-password")
def restore_password():
    result = data_client().post("/users/restore-password", get_payload())
    if result:
        cfg = config()
        link = f"{cfg.get('CLIENT_APP_DOMAIN')}{cfg.get('RESTORE_PASSWORD_LINK')}?token={result['token']}"
        enqueue_mail(mails.send_restore_password(link, result))
    return success()


@auth_bp.post("/reset-password")
def reset_password():
    data_client().patch("/users/reset-password", get_payload())
    return success()


@auth_bp.get("/logout")
def logout():
    identity.logout()
    return success()
