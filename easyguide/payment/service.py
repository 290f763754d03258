# easyguide/payment/service.py
from easyguide.payment.stripe_api import StripeApi
from easyguide.validation import Validator, dry_payload, throw_validation_error, to_str

CUSTOMER_SCHEMA = {"email": to_str, "firstName": to_str, "lastName": to_str}
PAYMENT_SCHEMA = {
    "description": to_str,
    "amount": lambda v: v,
    "currency": to_str,
    "email": to_str,
    "cardToken": to_str,
    "cardId": to_str,
    "stripeCustomerToken": to_str,
}
CARD_SCHEMA = {"cardId": to_str, "stripeCustomerToken": to_str}


def _payment_errors(values: dict) -> list:
    return [
        *Validator(values.get("description"), "description").required().result(),
        *Validator(values.get("amount"), "amount").required().is_number().result(),
        *Validator(values.get("currency"), "currency").required().result(),
        *Validator(values.get("email"), "email").required().email().result(),
    ]


def to_cents(amount) -> int:
    return int(round(float(amount) * 100))


def _required(name: str, value) -> None:
    throw_validation_error(Validator(value, name).required().result())


class StripeService:
    def __init__(self, api: StripeApi):
        self.api = api

    def create_customer(self, payload: dict) -> dict:
        values = dry_payload(payload, CUSTOMER_SCHEMA)
        throw_validation_error([
            *Validator(values.get("email"), "email").required().email().result(),
            *Validator(values.get("firstName"), "firstName").required().result(),
            *Validator(values.get("lastName"), "lastName").required().result(),
        ])
        return self.api.create_customer(values["email"], values["firstName"], values["lastName"])

    def create_single_payment(self, payload: dict) -> dict:
        values = dry_payload(payload, PAYMENT_SCHEMA)
        throw_validation_error([
            *_payment_errors(values),
            *Validator(values.get("cardToken"), "cardToken").required().result(),
        ])
        return self.api.create_single_payment(
            amount=to_cents(values["amount"]),
            currency=values["currency"],
            description=values["description"],
            card_token=values["cardToken"],
            email=values["email"],
        )

    def create_customer_payment(self, payload: dict) -> dict:
        values = dry_payload(payload, PAYMENT_SCHEMA)
        throw_validation_error([
            *_payment_errors(values),
            *Validator(values.get("cardId"), "cardId").required().result(),
            *Validator(values.get("stripeCustomerToken"), "stripeCustomerToken").required().result(),
        ])
        return self.api.create_customer_payment(
            amount=to_cents(values["amount"]),
            currency=values["currency"],
            description=values["description"],
            card_id=values["cardId"],
            customer=values["stripeCustomerToken"],
            email=values["email"],
        )

    def get_customer_cards(self, stripe_customer_token) -> list:
        _required("stripeCustomerToken", stripe_customer_token)
        return self.api.get_customer_cards(stripe_customer_token)

    def get_card_info(self, card_id) -> dict:
        _required("cardId", card_id)
        return self.api.get_card_info(card_id)

    def add_card_to_customer(self, payload: dict) -> dict:
        values = dry_payload(payload, CARD_SCHEMA)
        throw_validation_error([
            *Validator(values.get("cardId"), "cardId").required().result(),
            *Validator(values.get("stripeCustomerToken"), "stripeCustomerToken").required().result(),
        ])
        return self.api.add_card_to_customer(values["cardId"], values["stripeCustomerToken"])

    def remove_card_from_customer(self, card_id) -> str:
        _required("cardId", card_id)
        return self.api.remove_card_from_customer(card_id)
