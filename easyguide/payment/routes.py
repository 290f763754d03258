# easyguide/payment/routes.py
from flask import Blueprint, request

from easyguide.container import get_container
from easyguide.errors import success

stripe_bp = Blueprint("stripe", __name__, url_prefix="/stripe")


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def _service():
    return get_container().get("stripe_service")


@stripe_bp.post("/single-payment")
def create_single_payment():
    return success(_service().create_single_payment(_payload()))


@stripe_bp.post("/customer/create")
def create_customer():
    return success(_service().create_customer(_payload()), 201)


@stripe_bp.post("/customer/payment")
def create_customer_payment():
    return success(_service().create_customer_payment(_payload()))


@stripe_bp.post("/customer/cards")
def get_customer_cards():
    return success(_service().get_customer_cards(_payload().get("stripeCustomerToken")))


@stripe_bp.post("/customer/card-info")
def get_card_info():
    return success(_service().get_card_info(_payload().get("cardId")))


@stripe_bp.post("/customer/add-card")
def add_card_to_customer():
    return success(_service().add_card_to_customer(_payload()))


@stripe_bp.delete("/customer/remove-card/<card_id>")
def remove_card_from_customer(card_id):
    return success(_service().remove_card_from_customer(card_id))
