# easyguide/data/routes/promo_codes.py
from flask import Blueprint, request

from easyguide.data.routes.utils import get_payload, service
from easyguide.errors import success

promo_codes_bp = Blueprint("promo_codes", __name__, url_prefix="/admin/promo-codes")


@promo_codes_bp.get("/")
def get_promo_codes():
    return success(service("promo_code_service").get_promo_codes(request.args))


@promo_codes_bp.post("/")
def create_promo_code():
    promo = service("promo_code_service").create_promo_code(get_payload())
    return success(promo.to_dict(), 201)


@promo_codes_bp.get("/<int:promo_id>/toggle-activity")
def toggle_activity(promo_id):
    return success(service("promo_code_service").toggle_activity(promo_id).to_dict())


@promo_codes_bp.delete("/<int:promo_id>")
def delete_promo_code(promo_id):
    return success(service("promo_code_service").delete_promo_code(promo_id))
