# easyguide/data/services/itinerary_service.py
import json
import logging
from datetime import date, datetime

from easyguide.data.models import Itinerary, ItineraryItem, Product
from easyguide.data.services.base import BaseService, life_time
from easyguide.errors import conflict_error, not_found_error
from easyguide.extensions import db
from easyguide.scheduler import CronExpression, cron
from easyguide.validation import Validator, throw_validation_error

logger = logging.getLogger(__name__)

ITINERARY_ERROR_MESSAGES = {
    "IS_EXISTS": "Already in cart",
    "ATTENDANT_REQUIRED": "For age groups `Infant`, `Child` an attendant is required.",
    "PRODUCT_NOT_FOUND": "Product with this identifier doesn't exist",
}
AGE_GROUPS_NEED_ATTENDANT = ("Infant", "Child")
ITEM_POSITION = 2


def customer_ids(payload: dict) -> dict:
    payload = payload or {}

    def _id(value):
        try:
            return int(value) if value not in (None, "") else None
        except (TypeError, ValueError):
            return None

    return {"userId": _id(payload.get("userId")), "guestId": _id(payload.get("guestId"))}


def _options_errors(options, field="ageGroupOptions"):
    errors = Validator(options, field).required().is_array().array_min_length(1).result()
    if errors:
        return errors
    for index, option in enumerate(options):
        prefix = f"{field}[{index}]"
        if not isinstance(option, dict):
            errors += Validator(None, prefix).required().result()
            continue
        errors += [
            *Validator(option.get("name"), f"{prefix}.name").required().result(),
            *Validator(option.get("orderedQty"), f"{prefix}.orderedQty").required().is_number().result(),
            *Validator(option.get("originalPrice"), f"{prefix}.originalPrice").required().is_number().result(),
            *Validator(option.get("totalPrice"), f"{prefix}.totalPrice").required().is_number().result(),
            *Validator(option.get("ageFrom"), f"{prefix}.ageFrom").required(False).is_number().result(),
            *Validator(option.get("ageTo"), f"{prefix}.ageTo").required(False).is_number().result(),
        ]
    return errors


def total_price(options) -> float:
    return round(sum(float(option.get("totalPrice") or 0) for option in options), 2)


class ItineraryService(BaseService):
    """The visitor's cart: one itinerary per user (or per guest, with an expiry)."""

    def _visitor_filter(self, ids: dict, only_alive: bool = True):
        if ids["userId"]:
            return [Itinerary.user_id == ids["userId"]]
        clauses = [Itinerary.guest_id == ids["guestId"]]
        if only_alive:
            clauses.append(Itinerary.expire_at >= datetime.utcnow())
        return clauses

    def _require_identity(self, ids: dict) -> None:
        if not ids["userId"] and not ids["guestId"]:
            self.throw_identity_error()

    def find_itinerary(self, ids: dict) -> Itinerary | None:
        return (
            Itinerary.query.filter(*self._visitor_filter(ids))
            .order_by(Itinerary.id.desc())
            .first()
        )

    def current_items(self, itinerary: Itinerary) -> list:
        return (
            ItineraryItem.query
            .filter(
                ItineraryItem.itinerary_id == itinerary.id,
                ItineraryItem.itinerary_date >= date.today(),
                ItineraryItem.is_booked == 0,
            )
            .order_by(ItineraryItem.itinerary_date.asc(), ItineraryItem.id.asc())
            .all()
        )

    def get_itinerary_with_items(self, payload: dict) -> dict | None:
        ids = customer_ids(payload)
        self._require_identity(ids)

        itinerary = self.find_itinerary(ids)
        if itinerary is None:
            return None
        items = self.current_items(itinerary)
        if not items:
            return None
        return {**itinerary.to_dict(), "itemsOfItineraries": [item.to_dict() for item in items]}

    def manage_itinerary(self, payload: dict) -> dict:
        payload = payload or {}
        ids = customer_ids(payload)
        self._require_identity(ids)

        throw_validation_error([
            *Validator(payload.get("itineraryDate"), "itineraryDate").required().date_format("%Y-%m-%d").result(),
            *Validator(payload.get("productId"), "productId").required().is_number().result(),
            *Validator(payload.get("variantId"), "variantId").required().is_number().result(),
            *Validator(payload.get("variantItemId"), "variantItemId").required().is_number().result(),
            *Validator(payload.get("slotDateTime"), "slotDateTime").required().result(),
            *_options_errors(payload.get("ageGroupOptions")),
        ])
        options = payload["ageGroupOptions"]
        self._check_requiring_an_attendant(options)

        itinerary_date = datetime.strptime(str(payload["itineraryDate"]).strip(), "%Y-%m-%d").date()
        product = db.session.get(Product, int(payload["productId"]))
        if product is None:
            raise not_found_error(ITINERARY_ERROR_MESSAGES["PRODUCT_NOT_FOUND"])

        itinerary = self.find_itinerary(ids)
        if itinerary is not None:
            duplicate = ItineraryItem.query.filter_by(
                itinerary_id=itinerary.id, variant_item_id=int(payload["variantItemId"]), is_booked=0
            ).first()
            if duplicate:
                raise conflict_error(ITINERARY_ERROR_MESSAGES["IS_EXISTS"])

        with self.transaction():
            if itinerary is None:
                itinerary = self._new_itinerary(ids)
                db.session.add(itinerary)
                db.session.flush()
            item = ItineraryItem(
                itinerary_id=itinerary.id,
                product_id=product.id,
                product_name=product.name,
                position=str(ITEM_POSITION),
                itinerary_date=itinerary_date,
                date_time=str(payload["slotDateTime"]),
                variant_id=int(payload["variantId"]),
                variant_name=payload.get("variantName"),
                variant_item_id=int(payload["variantItemId"]),
                total_price=total_price(options),
                product_options=json.dumps(options),
            )
            db.session.add(item)
            db.session.flush()

        return {
            "itineraryId": itinerary.id,
            "itineraryItemId": item.id,
            "itineraryDate": itinerary_date.isoformat(),
        }

    def update_itinerary(self, payload: dict) -> int | None:
        payload = payload or {}
        ids = customer_ids(payload)
        self._require_identity(ids)

        item_payload = payload.get("itineraryItem") or {}
        throw_validation_error([
            *Validator(payload.get("itineraryId"), "itineraryId").required().is_number().result(),
            *Validator(item_payload.get("id"), "itineraryItem.id").required().is_number().result(),
            *_options_errors(item_payload.get("ageGroupOptions"), "itineraryItem.ageGroupOptions"),
        ])
        options = item_payload["ageGroupOptions"]
        self._check_requiring_an_attendant(options)

        itinerary = Itinerary.query.filter(
            *self._visitor_filter(ids, only_alive=False), Itinerary.id == int(payload["itineraryId"])
        ).first()
        if itinerary is None:
            return None

        with self.transaction():
            updated = ItineraryItem.query.filter_by(
                id=int(item_payload["id"]), itinerary_id=itinerary.id
            ).update({
                "total_price": total_price(options),
                "product_options": json.dumps(options),
                "updated_at": datetime.utcnow(),
            })
        return updated

    def remove_itinerary_item(self, item_id, payload: dict) -> int:
        ids = customer_ids(payload)
        self._require_identity(ids)

        itinerary = self.find_itinerary(ids)
        if itinerary is None:
            return 0
        with self.transaction():
            removed = ItineraryItem.query.filter_by(id=item_id, itinerary_id=itinerary.id).delete()
        return removed

    def book_itinerary_items(self, payload: dict) -> None:
        ids = customer_ids(payload)
        self._require_identity(ids)

        itinerary = self.find_itinerary(ids)
        items = self.current_items(itinerary) if itinerary else []
        if not items:
            raise not_found_error(ITINERARY_ERROR_MESSAGES["PRODUCT_NOT_FOUND"])

        with self.transaction():
            for item in items:
                item.is_booked = 1

    @cron(CronExpression.EVERY_DAY_AT_MIDNIGHT, name="removeExpiredItineraries")
    def _remove_expired_itineraries(self) -> int:
        expired = Itinerary.query.filter(Itinerary.expire_at < datetime.utcnow()).all()
        with self.transaction():
            for itinerary in expired:
                db.session.delete(itinerary)
        logger.info("[CART] removed %d expired itineraries", len(expired))
        return len(expired)

    def _new_itinerary(self, ids: dict) -> Itinerary:
        owner = ids["userId"] or ids["guestId"]
        itinerary = Itinerary(
            user_id=ids["userId"],
            guest_id=None if ids["userId"] else ids["guestId"],
            name=f"London {owner}",
            status=1,
        )
        if not ids["userId"]:
            amount = self.config.get("CART_LIFE_TIME_AMOUNT", 30) if self.config else 30
            unit = self.config.get("CART_LIFE_TIME_UNIT", "minutes") if self.config else "minutes"
            itinerary.expire_at = datetime.utcnow() + life_time(amount, unit)
        return itinerary

    @staticmethod
    def _check_requiring_an_attendant(options) -> None:
        ordered = [o for o in options if float(o.get("orderedQty") or 0) > 0]
        needs_attendant = any(o.get("name") in AGE_GROUPS_NEED_ATTENDANT for o in ordered)
        has_attendant = any(o.get("name") not in AGE_GROUPS_NEED_ATTENDANT for o in ordered)
        if needs_attendant and not has_attendant:
            raise conflict_error(ITINERARY_ERROR_MESSAGES["ATTENDANT_REQUIRED"])
