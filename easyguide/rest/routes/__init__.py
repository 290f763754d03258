# easyguide/rest/routes/__init__.py
from easyguide.rest.routes.admin import (
    admin_auth_bp,
    admin_products_bp,
    admin_profile_bp,
    admin_promo_codes_bp,
    admin_users_bp,
)
from easyguide.rest.routes.auth import auth_bp
from easyguide.rest.routes.cart import cart_bp
from easyguide.rest.routes.catalogue import categories_bp, cities_bp, countries_bp, products_bp
from easyguide.rest.routes.payment import payment_bp
from easyguide.rest.routes.profile import profile_bp
from easyguide.rest.routes.purchase import purchase_bp
from easyguide.rest.routes.support import support_bp

API_PREFIX = "/api-rest"

BLUEPRINTS = (
    auth_bp,
    cart_bp,
    cities_bp,
    countries_bp,
    categories_bp,
    purchase_bp,
    products_bp,
    payment_bp,
    profile_bp,
    support_bp,
    admin_auth_bp,
    admin_profile_bp,
    admin_users_bp,
    admin_promo_codes_bp,
    admin_products_bp,
)


def register_blueprints(app, prefix: str = API_PREFIX):
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=f"{prefix}{blueprint.url_prefix}")
