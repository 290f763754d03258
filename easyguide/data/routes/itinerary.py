# easyguide/data/routes/itinerary.py
from flask import Blueprint

from easyguide.data.routes.utils import get_payload, service
from easyguide.errors import success

itinerary_bp = Blueprint("itinerary", __name__, url_prefix="/itinerary")


@itinerary_bp.post("/")
def get_itinerary_with_items():
    return success(service("itinerary_service").get_itinerary_with_items(get_payload()))


@itinerary_bp.post("/itinerary-item")
def manage_itinerary():
    return success(service("itinerary_service").manage_itinerary(get_payload()), 201)


@itinerary_bp.patch("/")
def update_itinerary():
    return success(service("itinerary_service").update_itinerary(get_payload()))


@itinerary_bp.patch("/itinerary-item/<int:item_id>")
def remove_itinerary_item(item_id):
    return success(service("itinerary_service").remove_itinerary_item(item_id, get_payload()))


@itinerary_bp.post("/book")
def book_itinerary_items():
    service("itinerary_service").book_itinerary_items(get_payload())
    return success()
