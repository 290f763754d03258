# easyguide/rest/routes/payment.py
from flask import Blueprint

from easyguide.errors import success
from easyguide.rest.routes.utils import get_payload, payment_client, without_reason

payment_bp = Blueprint("payment", __name__, url_prefix="/payment/stripe")


@payment_bp.post("/single-payment")
def single_payment():
    return success(without_reason(payment_client().post("/stripe/single-payment", get_payload())))


@payment_bp.post("/customer/payment")
def customer_payment():
    return success(without_reason(payment_client().post("/stripe/customer/payment", get_payload())))


@payment_bp.post("/customer/cards")
def customer_cards():
    return success(payment_client().post("/stripe/customer/cards", get_payload()))


@payment_bp.post("/customer/card-info")
def card_info():
    return success(payment_client().post("/stripe/customer/card-info", get_payload()))


@payment_bp.post("/customer/add-card")
def add_card():
    return success(payment_client().post("/stripe/customer/add-card", get_payload()))


@payment_bp.delete("/customer/remove-card/<card_id>")
def remove_card(card_id):
    return success(payment_client().delete(f"/stripe/customer/remove-card/{card_id}"))
