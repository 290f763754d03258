# easyguide/payment/container.py
from easyguide.container import init_container
from easyguide.payment.service import StripeService
from easyguide.payment.stripe_api import StripeApi


def build_container(app, config_service):
    return init_container(app, {
        "config": lambda c: config_service,
        "stripe_api": lambda c: StripeApi(
            c.get("config").get("STRIPE_PRIVATE_KEY"),
            c.get("config").get("STRIPE_API_VERSION", "2020-08-27"),
        ),
        "stripe_service": lambda c: StripeService(c.get("stripe_api")),
    })
