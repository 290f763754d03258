# easyguide/rest/routes/cart.py
from flask import Blueprint

from easyguide.errors import success
from easyguide.rest.identity import get_customer_ids
from easyguide.rest.routes.utils import data_client, get_payload

cart_bp = Blueprint("cart", __name__, url_prefix="/cart")


def _with_ids(payload=None) -> dict:
    return {**(payload or {}), **get_customer_ids()}


@cart_bp.get("/")
def get_cart():
    return success(data_client().post("/itinerary/", _with_ids()))


@cart_bp.post("/")
def add_to_cart():
    return success(data_client().post("/itinerary/itinerary-item", _with_ids(get_payload()), status=201), 201)


@cart_bp.patch("/")
def update_cart():
    return success(data_client().patch("/itinerary/", _with_ids(get_payload())))


@cart_bp.delete("/remove/<int:item_id>")
def remove_from_cart(item_id):
    return success(data_client().patch(f"/itinerary/itinerary-item/{item_id}", _with_ids()))
