# easyguide/payment/stripe_api.py
import logging

import stripe

from easyguide.errors import ApplicationError, ERROR_CODES

logger = logging.getLogger(__name__)

PAYMENT_TYPE_CARD = "card"


def _capitalize(value: str) -> str:
    value = str(value or "")
    return value[:1].upper() + value[1:]


def stripe_error(error: stripe.StripeError) -> ApplicationError:
    code = getattr(error, "code", None) or type(error).__name__
    message = getattr(error, "user_message", None) or str(error)
    return ApplicationError(
        status_code=getattr(error, "http_status", None) or 500,
        error_code=code,
        error_message=message,
    )


def card_dto(card) -> dict:
    details = getattr(card, "card", None)
    return {
        "id": getattr(card, "id", None),
        "type": getattr(card, "type", None),
        "brand": getattr(details, "brand", None),
        "last4digits": getattr(details, "last4", None),
        "expMonth": getattr(details, "exp_month", None),
        "expYear": getattr(details, "exp_year", None),
        "country": getattr(details, "country", None),
        "customer": getattr(card, "customer", None),
    }


def payment_dto(result, with_phone: bool = False) -> dict:
    dto = {
        "referenceId": result.id,
        "reason": str(result),
        "totalPaid": result.amount / 100,
        "userEmail": getattr(result, "receipt_email", None),
        "status": result.status,
    }
    if with_phone:
        dto["userPhone"] = getattr(result, "receipt_number", None)
    return dto


class StripeApi:
    """Stripe calls; every ``stripe.StripeError`` is re-raised as an ApplicationError."""

    def __init__(self, api_key: str, api_version: str = "2020-08-27"):
        if not api_key:
            raise RuntimeError("Provide a valid stripe api key")
        stripe.api_key = api_key
        stripe.api_version = api_version

    def create_customer(self, email: str, first_name: str, last_name: str) -> dict:
        try:
            customer = stripe.Customer.create(
                email=email,
                name=f"{_capitalize(first_name)} {_capitalize(last_name)}",
            )
        except stripe.StripeError as e:
            raise stripe_error(e) from e
        logger.info("[STRIPE] customer created %s", customer.id)
        return {"stripeCustomerToken": customer.id}

    def create_single_payment(self, amount: int, currency: str, description: str, card_token: str,
                              email: str) -> dict:
        try:
            charge = stripe.Charge.create(
                amount=amount,
                currency=currency,
                description=description,
                source=card_token,
                receipt_email=email,
            )
        except stripe.StripeError as e:
            raise stripe_error(e) from e
        logger.info("[STRIPE] charge %s -> %s", charge.id, charge.status)
        return payment_dto(charge, with_phone=True)

    def create_customer_payment(self, amount: int, currency: str, description: str, card_id: str,
                                customer: str, email: str) -> dict:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                description=description,
                customer=customer,
                payment_method=card_id,
                payment_method_types=[PAYMENT_TYPE_CARD],
                confirm=True,
                receipt_email=email,
            )
        except stripe.StripeError as e:
            raise stripe_error(e) from e
        logger.info("[STRIPE] payment intent %s -> %s", intent.id, intent.status)
        return payment_dto(intent)

    def get_customer_cards(self, customer: str) -> list:
        try:
            cards = stripe.PaymentMethod.list(type=PAYMENT_TYPE_CARD, customer=customer)
        except stripe.StripeError as e:
            raise stripe_error(e) from e
        return [card_dto(card) for card in cards.data]

    def get_card_info(self, card_id: str) -> dict:
        try:
            card = stripe.PaymentMethod.retrieve(card_id)
        except stripe.StripeError as e:
            raise stripe_error(e) from e
        return card_dto(card)

    def add_card_to_customer(self, card_id: str, customer: str) -> dict:
        if self.get_card_info(card_id)["customer"] == customer:
            raise ApplicationError(409, ERROR_CODES["conflict"], "Card already attached")
        try:
            card = stripe.PaymentMethod.attach(card_id, customer=customer)
        except stripe.StripeError as e:
            raise stripe_error(e) from e
        return card_dto(card)

    def remove_card_from_customer(self, card_id: str) -> str:
        try:
            card = stripe.PaymentMethod.detach(card_id)
        except stripe.StripeError as e:
            raise stripe_error(e) from e
        return card.id
