# easyguide/data/services/product_service.py
import json

from easyguide.data.models import (
    ECategoryProduct,
    FavouriteProduct,
    Product,
    ProductDetail,
    ProductMedia,
    ProductMetaInfo,
    ProductView,
)
from easyguide.data.models.product import DEFAULT_CURRENCY
from easyguide.data.services.base import BaseService
from easyguide.errors import conflict_error, not_found_error
from easyguide.extensions import db
from easyguide.generators import slugify
from easyguide.validation import Validator, dry_payload, throw_validation_error, to_bool, to_str

PRODUCT_NOT_FOUND = "Product with this identifier doesn't exist"
ASSET_NOT_FOUND = "Asset with this identifier doesn't exist"
LIVE_SEARCH_MIN_LENGTH = 4

DEFAULT_META_KEYS = (
    "Summary",
    "Highlights",
    "FAQs",
    "Cancellation Policy",
    "Ticket Delivery Information",
    "Inclusions",
    "Exclusions",
)
META_KEY_HTML = "SUMMARY_HTML"

MEDIA_POSITION_TYPES = ("web", "mobile")

PRODUCT_SCHEMA = {
    "name": to_str,
    "articleType": to_str,
    "status": int,
    "cityId": int,
    "ratingAvg": float,
    "ratingCount": int,
    "originalPrice": float,
    "finalPrice": float,
    "imageUrl": to_str,
    "metaTitle": to_str,
    "metaKeyword": to_str,
    "metaDescription": to_str,
    "categoryIds": lambda v: [int(i) for i in v],
}
PRODUCT_COLUMNS = {
    "name": "name",
    "articleType": "article_type",
    "status": "status",
    "cityId": "city_id",
    "ratingAvg": "rating_avg",
    "ratingCount": "rating_count",
    "originalPrice": "original_price",
    "finalPrice": "final_price",
    "imageUrl": "image_url",
    "metaTitle": "meta_title",
    "metaKeyword": "meta_keyword",
    "metaDescription": "meta_description",
}
DETAILS_COLUMNS = {
    "displayTags": "display_tags",
    "startLatitude": "start_latitude",
    "startLongitude": "start_longitude",
    "startAddressLine1": "start_address_line1",
    "startAddressLine2": "start_address_line2",
    "startCity": "start_city",
    "startPostalCode": "start_postal_code",
    "startCountry": "start_country",
    "endLatitude": "end_latitude",
    "endLongitude": "end_longitude",
    "endAddressLine1": "end_address_line1",
    "endAddressLine2": "end_address_line2",
    "endCity": "end_city",
    "endPostalCode": "end_postal_code",
    "endCountry": "end_country",
    "productType": "product_type",
    "hasInstantConfirmation": "has_instant_confirmation",
    "hasMobileTicket": "has_mobile_ticket",
    "hasAudioAvailable": "has_audio_available",
}
DETAILS_SCHEMA = {key: (lambda v: v) for key in DETAILS_COLUMNS}


def _validate_product(values, creating):
    throw_validation_error([
        *Validator(values.get("name"), "name").required(creating).max_length(255).result(),
        *Validator(values.get("status"), "status").required(False).enumeration((0, 1)).result(),
        *Validator(values.get("cityId"), "cityId").required(False).is_number().result(),
        *Validator(values.get("categoryIds"), "categoryIds").required(False).is_array().result(),
    ])


def _validate_details(values):
    errors = []
    for field in ("startLatitude", "startLongitude", "endLatitude", "endLongitude"):
        errors += Validator(values.get(field), field).required(False).is_number().result()
    for field in ("hasInstantConfirmation", "hasMobileTicket", "hasAudioAvailable"):
        errors += Validator(values.get(field), field).required(False).enumeration((0, 1, True, False)).result()
    throw_validation_error(errors)


class ProductService(BaseService):
    """Public catalogue reads plus the ``top`` flags."""

    def get_products(self, query, user_id=None):
        pagination = self.get_pagination(query)
        is_active = to_bool(query.get("isActive"))
        with_top_activities = to_bool(query.get("withTopActivities"))
        with_most_popular = to_bool(query.get("withMostPopular"))
        city_id = str(query.get("cityId") or "")
        category_id = query.get("categoryId")

        q = self.filter_all(
            Product.query,
            self.get_search(query, [Product.name]),
            Product.status == int(is_active) if is_active is not None else None,
            Product.top_activities.is_(with_top_activities) if with_top_activities is not None else None,
            Product.most_popular.is_(with_most_popular) if with_most_popular is not None else None,
            Product.city_id == int(city_id) if city_id.isdigit() else None,
        )
        if str(category_id or "").isdigit():
            q = q.join(ECategoryProduct, ECategoryProduct.product_id == Product.id).filter(
                ECategoryProduct.e_category_id == int(category_id)
            )
        q = q.order_by(*(self.get_sort(query, Product) or [Product.id.desc()]))

        favourites = self._favourite_ids(user_id)
        return self.list_response(q, pagination, lambda p: self._serialize(p, favourites, user_id, ["city"]))

    def live_search(self, query):
        pagination = self.get_pagination(query)
        search = (query.get("search") or "").strip()
        if len(search) < LIVE_SEARCH_MIN_LENGTH:
            return {"items": [], **self.pagination_response(0, pagination)}

        is_active = to_bool(query.get("isActive"))
        city_id = str(query.get("cityId") or "")
        q = self.filter_all(
            Product.query,
            Product.name.ilike(f"%{search}%"),
            Product.status == int(is_active) if is_active is not None else None,
            Product.city_id == int(city_id) if city_id.isdigit() else None,
        )
        q = q.order_by(*(self.get_sort(query, Product) or [Product.name.asc()]))
        return self.list_response(q, pagination)

    def get_product(self, product_id, query=None, user_id=None, ip_address=None) -> dict:
        product = self.get_or_404(Product, product_id, PRODUCT_NOT_FOUND)
        self._record_view(product, ip_address)
        return self._serialize(product, self._favourite_ids(user_id), user_id, self._include(query))

    def get_product_by_slug(self, slug, query=None, user_id=None, ip_address=None) -> dict:
        product = Product.query.filter(Product.slug.like(f"%{slug}%"), Product.status > 0).first()
        if product is None:
            raise not_found_error(PRODUCT_NOT_FOUND)
        self._record_view(product, ip_address)
        return self._serialize(product, self._favourite_ids(user_id), user_id, self._include(query))

    def update_product_top(self, product_id, payload: dict) -> Product:
        product = self.get_or_404(Product, product_id, PRODUCT_NOT_FOUND)
        values = dry_payload(payload, {"topActivities": lambda v: v, "mostPopular": lambda v: v})
        throw_validation_error([
            *Validator(values.get("topActivities"), "topActivities").required(False).is_boolean().result(),
            *Validator(values.get("mostPopular"), "mostPopular").required(False).is_boolean().result(),
        ])
        with self.transaction():
            if "topActivities" in values:
                product.top_activities = to_bool(values["topActivities"])
            if "mostPopular" in values:
                product.most_popular = to_bool(values["mostPopular"])
        return product

    def _include(self, query):
        include = self.get_include(query or {})
        return include or ["details", "media", "metaInfo", "city"]

    @staticmethod
    def _favourite_ids(user_id) -> set:
        if not user_id:
            return set()
        rows = FavouriteProduct.query.with_entities(FavouriteProduct.product_id).filter_by(user_id=user_id)
        return {row.product_id for row in rows}

    @staticmethod
    def _serialize(product, favourites, user_id, include=()):
        data = product.to_dict(include=include)
        if user_id:
            data["isFavourite"] = product.id in favourites
        return data

    @staticmethod
    def _record_view(product, ip_address):
        db.session.add(ProductView(product_id=product.id, ip_address=ip_address, page_view=1))
        db.session.commit()


class AdminProductService(BaseService):
    """Back-office product management."""

    def get_product(self, product_id) -> Product:
        return self.get_or_404(Product, product_id, PRODUCT_NOT_FOUND)

    def create_product_with_details(self, payload: dict) -> Product:
        values = dry_payload(payload, PRODUCT_SCHEMA)
        details = dry_payload(payload, DETAILS_SCHEMA)
        _validate_product(values, creating=True)
        _validate_details(details)

        with self.transaction():
            product = Product(
                slug=slugify(values["name"]),
                currency=json.dumps(DEFAULT_CURRENCY),
                status=values.get("status", 0),
            )
            for key, column in PRODUCT_COLUMNS.items():
                if key in values:
                    setattr(product, column, values[key])
            db.session.add(product)
            db.session.flush()

            product_details = ProductDetail(product_id=product.id)
            for key, column in DETAILS_COLUMNS.items():
                if key in details:
                    setattr(product_details, column, details[key])
            db.session.add(product_details)

            for meta_key in DEFAULT_META_KEYS:
                db.session.add(ProductMetaInfo(
                    product_id=product.id, meta_key=meta_key, meta_key_html=META_KEY_HTML, meta_value=""
                ))
            for category_id in values.get("categoryIds", []):
                db.session.add(ECategoryProduct(e_category_id=category_id, product_id=product.id))
        return product

    def update_product(self, product_id, payload: dict) -> Product:
        product = self.get_product(product_id)
        values = dry_payload(payload, PRODUCT_SCHEMA)
        _validate_product(values, creating=False)
        with self.transaction():
            for key, column in PRODUCT_COLUMNS.items():
                if key in values:
                    setattr(product, column, values[key])
            if "name" in values:
                product.slug = slugify(values["name"])
        return product

    def update_product_details(self, product_id, payload: dict) -> Product:
        product = self.get_product(product_id)
        details = dry_payload(payload, DETAILS_SCHEMA)
        _validate_details(details)
        with self.transaction():
            if product.details is None:
                product.details = ProductDetail(product_id=product.id)
            for key, value in details.items():
                setattr(product.details, DETAILS_COLUMNS[key], value)
        return product

    def update_product_meta_info(self, product_id, meta_info: dict) -> Product:
        product = self.get_product(product_id)
        throw_validation_error(Validator(meta_info, "metaInfo").required().result())
        existing = {m.meta_key: m for m in product.meta_infos}
        with self.transaction():
            for meta_key, meta_value in (meta_info or {}).items():
                if meta_key in existing:
                    existing[meta_key].meta_value = meta_value
                else:
                    db.session.add(ProductMetaInfo(
                        product_id=product.id, meta_key=meta_key, meta_key_html=META_KEY_HTML, meta_value=meta_value
                    ))
        return product

    def toggle_product_block(self, product_id) -> Product:
        product = self.get_product(product_id)
        with self.transaction():
            product.status = 0 if product.status == 1 else 1
        return product

    def attach_media_urls(self, product_id, urls) -> Product:
        product = self.get_product(product_id)
        throw_validation_error(Validator(urls, "urls").required().is_array().array_min_length(1).result())
        with self.transaction():
            for url in urls:
                db.session.add(ProductMedia(
                    product_id=product.id,
                    image_url=url,
                    caption=product.name,
                    web_position=0,
                    mobile_position=0,
                    status=1,
                ))
        return product

    def set_gallery_position(self, product_id, payload: dict) -> Product:
        product = self.get_product(product_id)
        payload = payload or {}
        throw_validation_error([
            *Validator(payload.get("id"), "id").required().is_number().result(),
            *Validator(payload.get("type"), "type").required().enumeration(MEDIA_POSITION_TYPES).result(),
            *Validator(payload.get("position"), "position").required().is_number().result(),
        ])
        media_type, position = payload["type"], int(payload["position"])
        column = "web_position" if media_type == "web" else "mobile_position"

        asset = self.get_asset(int(payload["id"]), product.id)
        if any(getattr(m, column) == position for m in product.media if m.id != asset.id):
            raise conflict_error("Duplicate position")
        with self.transaction():
            setattr(asset, column, position)
        return product

    def get_asset(self, asset_id, product_id=None) -> ProductMedia:
        q = ProductMedia.query.filter_by(id=asset_id)
        if product_id is not None:
            q = q.filter_by(product_id=product_id)
        asset = q.first()
        if asset is None:
            raise not_found_error(ASSET_NOT_FOUND)
        return asset

    def remove_asset(self, product_id, asset_id) -> dict:
        product = self.get_product(product_id)
        asset = self.get_asset(asset_id, product.id)
        removed = asset.to_dict()
        with self.transaction():
            db.session.delete(asset)
        return removed
