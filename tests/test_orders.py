import json
from datetime import date, datetime, timedelta

import pytest

from easyguide.data.models import (
    ItineraryItem,
    Product,
    PromoCode,
    PromoCodeUse,
    SalesFlatOrder,
    SalesFlatOrderItemMeta,
    SalesFlatOrderPayment,
)
from easyguide.data.services.order_service import order_totals
from easyguide.extensions import db

BUYER = {"userName": "Ada Lovelace", "userEmail": "ada@example.com", "userPhone": "447700900123"}


@pytest.fixture
def cart(data_app, data_client, future_date, age_group_options):
    product = Product(name="Tower of London", status=1, image_url="https://img/tower.jpg", rating_avg=4.5)
    db.session.add(product)
    db.session.commit()
    response = data_client.post("/itinerary/itinerary-item", json={
        "userId": 7,
        "productId": product.id,
        "itineraryDate": future_date,
        "variantId": 10,
        "variantItemId": 100,
        "slotDateTime": "10:00",
        "ageGroupOptions": age_group_options,
    })
    assert response.status_code == 201
    return response.get_json()["resultData"]


def create_order(client, **extra):
    return client.post("/orders/", json={"userId": 7, **BUYER, **extra})


class TestTotals:
    def test_gateway_charges_are_rounded_up(self):
        totals = order_totals(20.0)
        assert totals["net_total"] == 20.0
        assert totals["gateway_charges"] == 0.78
        assert totals["grand_total"] == 20.78

    def test_percentage_and_flat_discounts(self):
        assert order_totals(50.0, {"discountAmount": 10, "discountType": "P"})["discount_amount"] == 5.0
        flat = order_totals(50.0, {"discountAmount": 10, "discountType": "F"})
        assert flat["discount_amount"] == 10.0
        assert flat["net_total"] == 40.0


class TestCreateOrder:
    def test_order_is_built_from_cart(self, data_client, cart):
        response = create_order(data_client)
        assert response.status_code == 201
        order = db.session.get(SalesFlatOrder, response.get_json()["resultData"])
        assert order.status == "initiated"
        assert float(order.sub_total) == 20.0
        assert float(order.grand_total) == 20.78
        assert order.itinerary_id == cart["itineraryId"]
        assert SalesFlatOrderItemMeta.query.filter_by(order_id=order.id).count() == 1

    def test_unconfirmed_order_is_reused(self, data_client, cart):
        first = create_order(data_client).get_json()["resultData"]
        second = create_order(data_client).get_json()["resultData"]
        assert first == second
        assert SalesFlatOrder.query.count() == 1

    def test_changed_cart_refreshes_order(self, data_client, cart):
        order_id = create_order(data_client).get_json()["resultData"]
        item = db.session.get(ItineraryItem, cart["itineraryItemId"])
        item.total_price = 35
        db.session.commit()

        assert create_order(data_client).get_json()["resultData"] == order_id
        db.session.expire_all()
        assert float(db.session.get(SalesFlatOrder, order_id).sub_total) == 35.0

    def test_empty_cart(self, data_client):
        response = create_order(data_client)
        assert response.status_code == 404
        assert response.get_json()["errorMessage"] == "Products not found"

    def test_buyer_fields_are_validated(self, data_client, cart):
        response = data_client.post("/orders/", json={"userId": 7, "userEmail": "nope"})
        assert response.status_code == 400
        assert {e["field"] for e in response.get_json()["errors"]} == {"userName", "userEmail", "userPhone"}

    def test_promo_code_discount(self, data_client, cart):
        today = date.today()
        db.session.add(PromoCode(
            coupon_name="Spring",
            promo_code="SPRING10",
            coupon_type="P",
            coupon_value=10,
            available_days=json.dumps({"data": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]}),
            start_date=(today - timedelta(days=1)).isoformat(),
            end_date=(today + timedelta(days=1)).isoformat(),
            start_time="00:00",
            end_time="23:59",
            user_redemption_limit=100,
            min_cart_amount=0,
            status=1,
        ))
        db.session.commit()

        order_id = create_order(data_client, promoCode="SPRING10").get_json()["resultData"]
        order = db.session.get(SalesFlatOrder, order_id)
        assert float(order.discount_amount) == 2.0
        assert order.coupon_code == "SPRING10"

        response = data_client.patch("/orders/", json={
            "orderId": order_id,
            "orderStatus": "confirmed",
            "promoCode": "SPRING10",
            "customerIds": {"userId": 7},
        })
        assert response.status_code == 200
        assert PromoCodeUse.query.filter_by(user_id=7).count() == 1
        assert PromoCode.query.one().uses_count == 1


class TestUpdateOrder:
    def test_status_and_bookings(self, data_client, cart):
        order_id = create_order(data_client).get_json()["resultData"]
        meta = SalesFlatOrderItemMeta.query.filter_by(order_id=order_id).one()

        response = data_client.patch("/orders/", json={
            "orderId": order_id,
            "orderStatus": "confirmed",
            "orderUuid": "TSI-TKT-1",
            "orderItems": [{"orderItemId": meta.id, "bookingId": "B-1"}],
        })
        assert response.status_code == 200
        db.session.expire_all()
        assert db.session.get(SalesFlatOrder, order_id).status == "confirmed"
        assert db.session.get(SalesFlatOrderItemMeta, meta.id).booking_id == "B-1"

    def test_unknown_status(self, data_client, cart):
        order_id = create_order(data_client).get_json()["resultData"]
        response = data_client.patch("/orders/", json={"orderId": order_id, "orderStatus": "shipped"})
        assert response.status_code == 400

    def test_unknown_order(self, data_client):
        assert data_client.patch("/orders/", json={"orderId": 999}).status_code == 404


class TestPaymentsAndTickets:
    def test_payment_record(self, data_client, cart):
        order_id = create_order(data_client).get_json()["resultData"]
        response = data_client.post("/orders/payments/", json={
            "orderId": order_id,
            "referenceId": "ch_1",
            "reason": "{}",
            "totalPaid": 20.78,
            "paymentStatus": "succeeded",
        })
        assert response.status_code == 201
        assert response.get_json()["resultData"] == {
            "id": SalesFlatOrderPayment.query.one().id,
            "transactionId": f"TSI-TKT-{order_id}",
            "status": 1,
        }

    def test_payment_for_missing_order(self, data_client):
        response = data_client.post("/orders/payments/", json={
            "orderId": 999, "referenceId": "ch_1", "totalPaid": 1, "paymentStatus": "failed",
        })
        assert response.status_code == 404

    def test_tickets(self, data_client, cart):
        order_id = create_order(data_client).get_json()["resultData"]
        tickets = data_client.get(f"/orders/{order_id}/tickets").get_json()["resultData"]
        assert tickets["order"]["grandTotal"] == 20.78
        assert tickets["items"][0]["name"] == "Tower of London"
        assert tickets["items"][0]["ticketsCount"] == 2

    def test_bookings_by_user(self, data_client, cart):
        order_id = create_order(data_client).get_json()["resultData"]
        meta = SalesFlatOrderItemMeta.query.filter_by(order_id=order_id).one()
        data_client.patch("/orders/", json={
            "orderId": order_id, "orderItems": [{"orderItemId": meta.id, "bookingId": "B-1"}],
        })

        bookings = data_client.get("/orders/by-user/7?onlyActiveBookings=true").get_json()["resultData"]
        assert bookings["pagination"]["total"] == 1
        assert bookings["items"][0]["ratingAvg"] == 4.5
        assert bookings["items"][0]["grandTotal"] == 20.78

    def test_get_order_with_include(self, data_client, cart):
        order_id = create_order(data_client).get_json()["resultData"]
        order = data_client.get(f"/orders/{order_id}?include=orderItemsMeta").get_json()["resultData"]
        assert order["id"] == order_id
        assert len(order["orderItemsMeta"]) == 1
        assert "orderPayment" not in order
