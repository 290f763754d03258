# easyguide/data/routes/catalogue.py
from flask import Blueprint, request

from easyguide.data.routes.utils import get_payload, service
from easyguide.errors import success

cities_bp = Blueprint("cities", __name__, url_prefix="/cities")
countries_bp = Blueprint("countries", __name__, url_prefix="/countries")
categories_bp = Blueprint("categories", __name__, url_prefix="/categories")


@cities_bp.get("/")
def get_cities():
    return success(service("city_service").get_cities(request.args))


@cities_bp.get("/<int:city_id>")
def get_city(city_id):
    return success(service("city_service").get_city(city_id).to_dict())


@cities_bp.patch("/top/<int:city_id>")
def update_city_top(city_id):
    return success(service("city_service").update_city_top(city_id, get_payload()).to_dict())


@countries_bp.get("/")
def get_countries():
    return success(service("country_service").get_countries(request.args))


@countries_bp.get("/alpha-codes")
def get_alpha_codes():
    return success(service("country_service").get_alpha_codes())


@countries_bp.get("/dial-codes")
def get_dial_codes():
    return success(service("country_service").get_dial_codes())


@countries_bp.get("/<int:country_id>")
def get_country(country_id):
    return success(service("country_service").get_country(country_id).to_dict())


@categories_bp.get("/e-categories")
def get_categories():
    return success(service("category_service").get_categories(request.args))


@categories_bp.get("/e-categories/<int:category_id>")
def get_category(category_id):
    return success(service("category_service").get_category(category_id).to_dict())
