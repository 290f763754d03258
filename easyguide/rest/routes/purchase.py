# easyguide/rest/routes/purchase.py
import logging

from flask import Blueprint

from easyguide.errors import ApplicationError, success
from easyguide.generators import generate_transaction_uuid
from easyguide.queue import mails
from easyguide.rest.identity import get_customer_ids
from easyguide.rest.routes.utils import (
    config,
    data_client,
    enqueue_mail,
    get_payload,
    payment_client,
    without_reason,
)
from easyguide.statuses import OrderStatuses

logger = logging.getLogger(__name__)

purchase_bp = Blueprint("purchase", __name__, url_prefix="/products")

PAYMENT_SUCCEEDED = "succeeded"


def _charge(payload: dict, ids: dict, order: dict, order_id: int) -> dict:
    payment_info = {
        "amount": order["grandTotal"],
        "currency": payload.get("currency") or config().get("DEFAULT_CURRENCY"),
        "description": generate_transaction_uuid(order_id),
        "email": payload.get("userEmail"),
    }
    if ids["userId"] and not payload.get("walletType"):
        user = data_client().get(f"/users/{ids['userId']}")
        return payment_client().post("/stripe/customer/payment", {
            **payment_info,
            "cardId": payload.get("cardId"),
            "stripeCustomerToken": user.get("stripeCustomerToken"),
        })
    return payment_client().post("/stripe/single-payment", {**payment_info, "cardToken": payload.get("cardToken")})


def _update_order(order_id: int, status: str, **extra):
    return data_client().patch("/orders/", {"orderId": order_id, "orderStatus": status, **extra})


@purchase_bp.post("/purchase-product")
def purchase_product():
    """
    Checkout: order from the cart, Stripe charge, payment record, order status,
    cart booking and the tickets mail.
    """
    payload = get_payload()
    ids = get_customer_ids()
    order_id = data_client().post("/orders/", {**payload, **ids}, status=201)
    order = data_client().get(f"/orders/{order_id}")

    _update_order(order_id, OrderStatuses.PROCESSING)
    try:
        payment = _charge(payload, ids, order, order_id)
    except ApplicationError:
        _update_order(order_id, OrderStatuses.FAILED)
        raise

    transaction = data_client().post("/orders/payments/", {
        "orderId": order_id,
        "referenceId": payment.get("referenceId"),
        "reason": payment.get("reason"),
        "totalPaid": order["grandTotal"],
        "paymentStatus": payment.get("status"),
    }, status=201)

    if payment.get("status") != PAYMENT_SUCCEEDED:
        _update_order(order_id, OrderStatuses.FAILED)
        logger.warning("[PURCHASE] order #%s payment %s", order_id, payment.get("status"))
        return success({"order": data_client().get(f"/orders/{order_id}"), "payment": without_reason(payment)})

    _update_order(
        order_id,
        OrderStatuses.CONFIRMED,
        orderUuid=transaction["transactionId"],
        promoCode=order.get("couponCode"),
        customerIds=ids,
    )
    data_client().post("/itinerary/book", ids)

    tickets = data_client().get(f"/orders/{order_id}/tickets")
    enqueue_mail(mails.send_tickets(tickets, {
        "firstName": payload.get("userName"),
        "email": payload.get("userEmail"),
    }))
    logger.info("[PURCHASE] order #%s confirmed (%s)", order_id, transaction["transactionId"])

    return success({"order": data_client().get(f"/orders/{order_id}"), "payment": without_reason(payment)})
