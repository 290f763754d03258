from datetime import date, datetime, timedelta

import pytest

from easyguide.data.models import Itinerary, ItineraryItem, Product
from easyguide.extensions import db


@pytest.fixture
def product(data_app):
    product = Product(name="Tower of London", status=1, image_url="https://img/tower.jpg")
    db.session.add(product)
    db.session.commit()
    return product


@pytest.fixture
def cart_item(product, future_date, age_group_options):
    def _payload(**overrides):
        return {
            "guestId": 1234567,
            "productId": product.id,
            "itineraryDate": future_date,
            "variantId": 10,
            "variantItemId": 100,
            "variantName": "Entry ticket",
            "slotDateTime": f"{future_date}T10:00:00",
            "ageGroupOptions": age_group_options,
            **overrides,
        }
    return _payload


class TestManageItinerary:
    def test_guest_cart_is_created_with_expiry(self, data_client, cart_item, future_date):
        response = data_client.post("/itinerary/itinerary-item", json=cart_item())
        assert response.status_code == 201
        result = response.get_json()["resultData"]
        assert result["itineraryDate"] == future_date

        itinerary = db.session.get(Itinerary, result["itineraryId"])
        assert itinerary.guest_id == 1234567
        assert itinerary.name == "London 1234567"
        assert itinerary.expire_at > datetime.utcnow()
        item = db.session.get(ItineraryItem, result["itineraryItemId"])
        assert float(item.total_price) == 20.0

    def test_user_cart_never_expires(self, data_client, cart_item):
        result = data_client.post("/itinerary/itinerary-item",
                                  json=cart_item(userId=7, guestId=None)).get_json()["resultData"]
        itinerary = db.session.get(Itinerary, result["itineraryId"])
        assert itinerary.user_id == 7
        assert itinerary.expire_at is None

    def test_same_variant_item_twice_conflicts(self, data_client, cart_item):
        data_client.post("/itinerary/itinerary-item", json=cart_item())
        response = data_client.post("/itinerary/itinerary-item", json=cart_item())
        assert response.status_code == 409
        assert response.get_json()["errorMessage"] == "Already in cart"

    def test_child_without_attendant_conflicts(self, data_client, cart_item):
        options = [{"name": "Child", "orderedQty": 1, "originalPrice": 5, "totalPrice": 5}]
        response = data_client.post("/itinerary/itinerary-item", json=cart_item(ageGroupOptions=options))
        assert response.status_code == 409

    def test_identity_is_required(self, data_client, cart_item):
        response = data_client.post("/itinerary/itinerary-item", json=cart_item(guestId=None))
        assert response.status_code == 404
        assert response.get_json()["errorMessage"] == "Must provide a valid user id or guest id"

    def test_unknown_product(self, data_client, cart_item):
        response = data_client.post("/itinerary/itinerary-item", json=cart_item(productId=999))
        assert response.status_code == 404


class TestReadAndUpdate:
    def test_get_cart_with_items(self, data_client, cart_item):
        data_client.post("/itinerary/itinerary-item", json=cart_item())
        cart = data_client.post("/itinerary/", json={"guestId": 1234567}).get_json()["resultData"]
        assert len(cart["itemsOfItineraries"]) == 1
        item = cart["itemsOfItineraries"][0]
        assert item["imageUrl"] == "https://img/tower.jpg"
        assert item["productOptions"][0]["name"] == "Adult"

    def test_empty_cart_is_null(self, data_client):
        response = data_client.post("/itinerary/", json={"guestId": 42})
        assert response.status_code == 200
        assert response.get_json()["resultData"] is None

    def test_past_items_are_hidden(self, data_client, cart_item):
        result = data_client.post("/itinerary/itinerary-item", json=cart_item()).get_json()["resultData"]
        item = db.session.get(ItineraryItem, result["itineraryItemId"])
        item.itinerary_date = date.today() - timedelta(days=1)
        db.session.commit()
        assert data_client.post("/itinerary/", json={"guestId": 1234567}).get_json()["resultData"] is None

    def test_update_item_options(self, data_client, cart_item):
        result = data_client.post("/itinerary/itinerary-item", json=cart_item()).get_json()["resultData"]
        options = [{"name": "Adult", "orderedQty": 3, "originalPrice": 10, "totalPrice": 30}]
        response = data_client.patch("/itinerary/", json={
            "guestId": 1234567,
            "itineraryId": result["itineraryId"],
            "itineraryItem": {"id": result["itineraryItemId"], "ageGroupOptions": options},
        })
        assert response.get_json()["resultData"] == 1
        assert float(db.session.get(ItineraryItem, result["itineraryItemId"]).total_price) == 30.0

    def test_update_foreign_cart_is_null(self, data_client, cart_item, age_group_options):
        result = data_client.post("/itinerary/itinerary-item", json=cart_item()).get_json()["resultData"]
        response = data_client.patch("/itinerary/", json={
            "guestId": 7654321,
            "itineraryId": result["itineraryId"],
            "itineraryItem": {"id": result["itineraryItemId"], "ageGroupOptions": age_group_options},
        })
        assert response.get_json()["resultData"] is None

    def test_remove_item(self, data_client, cart_item):
        result = data_client.post("/itinerary/itinerary-item", json=cart_item()).get_json()["resultData"]
        removed = data_client.patch(f"/itinerary/itinerary-item/{result['itineraryItemId']}",
                                    json={"guestId": 1234567}).get_json()["resultData"]
        assert removed == 1
        assert ItineraryItem.query.count() == 0

    def test_book_items(self, data_client, cart_item):
        data_client.post("/itinerary/itinerary-item", json=cart_item())
        assert data_client.post("/itinerary/book", json={"guestId": 1234567}).status_code == 200
        assert ItineraryItem.query.one().is_booked == 1

        again = data_client.post("/itinerary/book", json={"guestId": 1234567})
        assert again.status_code == 404


def test_expired_carts_are_removed(data_app, data_client, cart_item):
    from easyguide.container import get_container

    result = data_client.post("/itinerary/itinerary-item", json=cart_item()).get_json()["resultData"]
    itinerary = db.session.get(Itinerary, result["itineraryId"])
    itinerary.expire_at = datetime.utcnow() - timedelta(minutes=1)
    db.session.commit()

    removed = get_container(data_app).get("itinerary_service")._remove_expired_itineraries()
    assert removed == 1
    assert Itinerary.query.count() == 0
    assert ItineraryItem.query.count() == 0
