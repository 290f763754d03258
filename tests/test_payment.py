from types import SimpleNamespace
from unittest.mock import patch

import pytest
import stripe

from easyguide.payment.stripe_api import StripeApi, stripe_error

PAYMENT = {
    "description": "Order #1",
    "amount": 20.78,
    "currency": "gbp",
    "email": "ann@example.com",
    "cardToken": "tok_visa",
}


def charge(status="succeeded"):
    return SimpleNamespace(
        id="ch_1", amount=2078, status=status, receipt_email="ann@example.com", receipt_number="1234-5678"
    )


def card(customer=None):
    details = SimpleNamespace(brand="visa", last4="4242", exp_month=12, exp_year=2030, country="GB")
    return SimpleNamespace(id="pm_1", type="card", card=details, customer=customer)


@pytest.fixture
def client(payment_app):
    return payment_app.test_client()


class TestCustomers:
    @patch("stripe.Customer.create")
    def test_create_customer(self, create, client):
        create.return_value = SimpleNamespace(id="cus_1")

        response = client.post("/stripe/customer/create",
                               json={"email": "ann@example.com", "firstName": "ann", "lastName": "lee"})

        assert response.status_code == 201
        assert response.get_json()["resultData"] == {"stripeCustomerToken": "cus_1"}
        create.assert_called_once_with(email="ann@example.com", name="Ann Lee")

    def test_create_customer_validates_email(self, client):
        response = client.post("/stripe/customer/create",
                               json={"email": "nope", "firstName": "Ann", "lastName": "Lee"})
        assert response.status_code == 400
        assert response.get_json()["errors"][0]["field"] == "email"


class TestPayments:
    @patch("stripe.Charge.create")
    def test_single_payment_in_minor_units(self, create, client):
        create.return_value = charge()

        response = client.post("/stripe/single-payment", json=PAYMENT)

        body = response.get_json()["resultData"]
        assert create.call_args.kwargs["amount"] == 2078
        assert create.call_args.kwargs["source"] == "tok_visa"
        assert body["referenceId"] == "ch_1"
        assert body["totalPaid"] == 20.78
        assert body["status"] == "succeeded"
        assert body["userPhone"] == "1234-5678"

    def test_single_payment_requires_card_token(self, client):
        payload = {k: v for k, v in PAYMENT.items() if k != "cardToken"}
        response = client.post("/stripe/single-payment", json=payload)
        assert response.status_code == 400
        assert [e["field"] for e in response.get_json()["errors"]] == ["cardToken"]

    @patch("stripe.Charge.create")
    def test_card_error_is_mapped(self, create, client):
        create.side_effect = stripe.CardError("Your card was declined.", "number", "card_declined",
                                              http_status=402)

        response = client.post("/stripe/single-payment", json=PAYMENT)

        assert response.status_code == 402
        assert response.get_json()["errorCode"] == "card_declined"
        assert "declined" in response.get_json()["errorMessage"]

    @patch("stripe.PaymentIntent.create")
    def test_customer_payment(self, create, client):
        create.return_value = charge()
        payload = {**PAYMENT, "cardId": "pm_1", "stripeCustomerToken": "cus_1"}

        body = client.post("/stripe/customer/payment", json=payload).get_json()["resultData"]

        assert create.call_args.kwargs["customer"] == "cus_1"
        assert create.call_args.kwargs["confirm"] is True
        assert "userPhone" not in body


class TestCards:
    @patch("stripe.PaymentMethod.list")
    def test_list_cards(self, list_cards, client):
        list_cards.return_value = SimpleNamespace(data=[card("cus_1")])
        body = client.post("/stripe/customer/cards", json={"stripeCustomerToken": "cus_1"}).get_json()
        assert body["resultData"][0]["last4digits"] == "4242"

    @patch("stripe.PaymentMethod.attach")
    @patch("stripe.PaymentMethod.retrieve")
    def test_add_card_twice_is_a_conflict(self, retrieve, attach, client):
        retrieve.return_value = card("cus_1")
        response = client.post("/stripe/customer/add-card", json={"cardId": "pm_1", "stripeCustomerToken": "cus_1"})
        assert response.status_code == 409
        attach.assert_not_called()

    @patch("stripe.PaymentMethod.attach")
    @patch("stripe.PaymentMethod.retrieve")
    def test_add_card(self, retrieve, attach, client):
        retrieve.return_value = card()
        attach.return_value = card("cus_1")
        response = client.post("/stripe/customer/add-card", json={"cardId": "pm_1", "stripeCustomerToken": "cus_1"})
        assert response.get_json()["resultData"]["customer"] == "cus_1"

    @patch("stripe.PaymentMethod.detach")
    def test_remove_card(self, detach, client):
        detach.return_value = card()
        assert client.delete("/stripe/customer/remove-card/pm_1").get_json()["resultData"] == "pm_1"


def test_stripe_api_requires_a_key():
    with pytest.raises(RuntimeError):
        StripeApi("")


def test_stripe_error_without_status():
    error = stripe_error(stripe.APIConnectionError("Network down"))
    assert error.status_code == 500
    assert error.error_code == "APIConnectionError"
