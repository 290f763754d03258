# easyguide/data/routes/orders.py
from flask import Blueprint, request

from easyguide.data.routes.utils import get_payload, service
from easyguide.errors import success

orders_bp = Blueprint("orders", __name__, url_prefix="/orders")
order_payments_bp = Blueprint("order_payments", __name__, url_prefix="/orders/payments")


@orders_bp.get("/")
def get_orders():
    return success(service("order_service").get_orders(request.args))


@orders_bp.get("/by-user/<int:user_id>")
def get_bookings_by_user_id(user_id):
    return success(service("order_service").get_bookings_by_user_id(user_id, request.args))


@orders_bp.get("/<int:order_id>/tickets")
def get_tickets(order_id):
    return success(service("order_service").get_tickets(order_id))


@orders_bp.get("/<int:order_id>")
def get_order(order_id):
    return success(service("order_service").get_order(order_id, request.args))


@orders_bp.post("/")
def create_order():
    return success(service("order_service").create_sales_flat_order_with_items(get_payload()), 201)


@orders_bp.patch("/")
def update_order():
    return success(service("order_service").book_order_items_and_update_order_status(get_payload()))


@order_payments_bp.get("/")
def get_order_payments():
    return success(service("order_payment_service").get_order_payments(request.args))


@order_payments_bp.get("/<int:payment_id>")
def get_order_payment(payment_id):
    return success(service("order_payment_service").get_order_payment(payment_id))


@order_payments_bp.post("/")
def create_order_payment():
    return success(service("order_payment_service").create_payment_data(get_payload()), 201)
