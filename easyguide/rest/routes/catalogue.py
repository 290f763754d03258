# easyguide/rest/routes/catalogue.py
from flask import Blueprint

from easyguide.errors import success
from easyguide.rest.identity import authorize_admin, session_user_id
from easyguide.rest.routes.utils import data_client, get_payload, query_args

cities_bp = Blueprint("cities", __name__, url_prefix="/cities")
countries_bp = Blueprint("countries", __name__, url_prefix="/countries")
categories_bp = Blueprint("categories", __name__, url_prefix="/categories")
products_bp = Blueprint("products", __name__, url_prefix="/products")


def _with_user(args: dict) -> dict:
    user_id = session_user_id()
    if user_id:
        args["userId"] = user_id
    return args


@cities_bp.get("/")
def get_cities():
    return success(data_client().get("/cities/", query_args()))


@cities_bp.get("/<int:city_id>")
def get_city(city_id):
    return success(data_client().get(f"/cities/{city_id}"))


@cities_bp.patch("/top/<int:city_id>")
@authorize_admin
def update_city_top(city_id):
    return success(data_client().patch(f"/cities/top/{city_id}", get_payload()))


@countries_bp.get("/")
def get_countries():
    return success(data_client().get("/countries/", query_args()))


@countries_bp.get("/alpha-codes")
def get_alpha_codes():
    return success(data_client().get("/countries/alpha-codes"))


@countries_bp.get("/dial-codes")
def get_dial_codes():
    return success(data_client().get("/countries/dial-codes"))


@countries_bp.get("/<int:country_id>")
def get_country(country_id):
    return success(data_client().get(f"/countries/{country_id}"))


@categories_bp.get("/e-categories")
def get_categories():
    return success(data_client().get("/categories/e-categories", query_args()))


@products_bp.get("/")
def get_products():
    return success(data_client().get("/products/", _with_user(query_args())))


@products_bp.get("/live-search")
def live_search():
    return success(data_client().get("/products/live-search", query_args()))


@products_bp.get("/slug/<slug>")
def get_product_by_slug(slug):
    return success(data_client().get(f"/products/slug/{slug}", _with_user(query_args())))


@products_bp.patch("/top/<int:product_id>")
@authorize_admin
def update_product_top(product_id):
    return success(data_client().patch(f"/products/top/{product_id}", get_payload()))
