# easyguide/data/routes/__init__.py
from easyguide.data.routes.admins import admins_bp
from easyguide.data.routes.catalogue import categories_bp, cities_bp, countries_bp
from easyguide.data.routes.itinerary import itinerary_bp
from easyguide.data.routes.orders import order_payments_bp, orders_bp
from easyguide.data.routes.products import admin_products_bp, products_bp
from easyguide.data.routes.promo_codes import promo_codes_bp
from easyguide.data.routes.users import admin_users_bp, users_bp

BLUEPRINTS = (
    users_bp,
    admin_users_bp,
    admins_bp,
    promo_codes_bp,
    cities_bp,
    countries_bp,
    categories_bp,
    products_bp,
    admin_products_bp,
    itinerary_bp,
    order_payments_bp,
    orders_bp,
)


def register_blueprints(app):
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
