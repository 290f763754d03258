# easyguide/data/routes/products.py
from flask import Blueprint, request

from easyguide.data.routes.utils import client_ip, get_payload, service
from easyguide.errors import success

products_bp = Blueprint("products", __name__, url_prefix="/products")
admin_products_bp = Blueprint("admin_products", __name__, url_prefix="/admin/products")


@products_bp.get("/")
def get_products():
    user_id = request.args.get("userId", type=int)
    return success(service("product_service").get_products(request.args, user_id))


@products_bp.get("/live-search")
def live_search():
    return success(service("product_service").live_search(request.args))


@products_bp.get("/slug/<slug>")
def get_product_by_slug(slug):
    user_id = request.args.get("userId", type=int)
    return success(service("product_service").get_product_by_slug(slug, request.args, user_id, client_ip()))


@products_bp.get("/<int:product_id>")
def get_product(product_id):
    user_id = request.args.get("userId", type=int)
    return success(service("product_service").get_product(product_id, request.args, user_id, client_ip()))


@products_bp.patch("/top/<int:product_id>")
def update_product_top(product_id):
    return success(service("product_service").update_product_top(product_id, get_payload()).to_dict())


# --- back-office ------------------------------------------------------------
def _full(product):
    return product.to_dict(include=("details", "media", "metaInfo", "city"))


@admin_products_bp.get("/<int:product_id>")
def get_product_for_admin(product_id):
    return success(_full(service("admin_product_service").get_product(product_id)))


@admin_products_bp.post("/")
def create_product():
    return success(_full(service("admin_product_service").create_product_with_details(get_payload())), 201)


@admin_products_bp.put("/<int:product_id>")
def update_product(product_id):
    return success(_full(service("admin_product_service").update_product(product_id, get_payload())))


@admin_products_bp.put("/<int:product_id>/details")
def update_product_details(product_id):
    product = service("admin_product_service").update_product_details(product_id, get_payload())
    return success(_full(product))


@admin_products_bp.put("/<int:product_id>/meta-info")
def update_product_meta_info(product_id):
    product = service("admin_product_service").update_product_meta_info(product_id, get_payload())
    return success(_full(product))


@admin_products_bp.get("/<int:product_id>/toggle-block")
def toggle_product_block(product_id):
    return success(service("admin_product_service").toggle_product_block(product_id).to_dict())


@admin_products_bp.post("/<int:product_id>/attach-media")
def attach_media(product_id):
    urls = get_payload().get("urls")
    return success(_full(service("admin_product_service").attach_media_urls(product_id, urls)), 201)


@admin_products_bp.put("/<int:product_id>/gallery-position")
def set_gallery_position(product_id):
    product = service("admin_product_service").set_gallery_position(product_id, get_payload())
    return success(_full(product))


@admin_products_bp.post("/<int:product_id>/remove-media")
def remove_media(product_id):
    asset_id = get_payload().get("assetId")
    return success(service("admin_product_service").remove_asset(product_id, asset_id))
