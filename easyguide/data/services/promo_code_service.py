# easyguide/data/services/promo_code_service.py
import json
from datetime import datetime

from easyguide.data.models import PromoCode, PromoCodeTypes, PromoCodeUse, WEEK_DAYS
from easyguide.data.services.base import BaseService
from easyguide.errors import ApplicationError, ERROR_CODES, conflict_error, not_found_error
from easyguide.extensions import db
from easyguide.validation import Validator, dry_payload, throw_validation_error, to_bool, to_str

PROMO_ERROR_MESSAGES = {
    "NOT_FOUND": "Promo code not found",
    "NOT_FOUND_BY_ID": "Promo code with this identifier doesn't exist",
    "EXISTS": "Promo code already exists",
    "ALREADY_USED": "Promo code have already used by user.",
    "INVALID": "Promo code is invalid",
    "UNAVAILABLE_DAY_OF_THE_WEEK": "Not available day of the week for provided promo code",
    "INVALID_USAGE_DATE": "Current date is not included in a range of available dates",
}


def min_cart_amount_message(amount):
    return f"Minimum cart price amount is not reached. Must be greater then {amount}"


CREATE_PROMO_SCHEMA = {
    "couponName": to_str,
    "promoCode": to_str,
    "tAndC": to_str,
    "couponType": to_str,
    "couponValue": lambda v: v,
    "couponQty": lambda v: v,
    "availableDays": lambda v: v,
    "startDate": to_str,
    "endDate": to_str,
    "startTime": to_str,
    "endTime": to_str,
    "includeApiData": lambda v: v,
    "userRedemptionLimit": lambda v: v,
    "minCartAmount": lambda v: v,
}


def _parse_moment(day: str, time: str) -> datetime:
    value = f"{day} {time or '00:00'}".strip()
    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return datetime.strptime(day, "%Y-%m-%d")


class PromoCodeService(BaseService):
    """Promo code lookup and redemption plus the admin CRUD."""

    # --- customer side -------------------------------------------------------
    def get_discount(self, code: str, sub_total: float, customer_ids: dict) -> dict:
        coupon = PromoCode.query.filter_by(promo_code=code).first()
        if coupon is None:
            raise not_found_error(PROMO_ERROR_MESSAGES["NOT_FOUND"])

        if self._find_use(coupon, customer_ids) is not None:
            raise conflict_error(PROMO_ERROR_MESSAGES["ALREADY_USED"])

        self._validate_promo_code(coupon, sub_total)
        return {
            "discountAmount": coupon.coupon_value,
            "discountType": PromoCodeTypes.PERCENTAGE
            if coupon.coupon_type == PromoCodeTypes.PERCENTAGE
            else PromoCodeTypes.FLAT,
        }

    def use_promo_code(self, code: str, customer_ids: dict) -> None:
        """Count one redemption; runs inside the caller's transaction."""
        coupon = PromoCode.query.filter_by(promo_code=code).first()
        if coupon is None:
            return
        coupon.uses_count = (coupon.uses_count or 0) + 1
        user_id, guest_id = customer_ids.get("userId"), customer_ids.get("guestId")
        db.session.add(PromoCodeUse(
            user_id=user_id,
            guest_id=None if user_id else guest_id,
            promo_code_id=coupon.id,
            uses_count=1,
        ))

    @staticmethod
    def _find_use(coupon, customer_ids):
        user_id, guest_id = customer_ids.get("userId"), customer_ids.get("guestId")
        q = PromoCodeUse.query.filter_by(promo_code_id=coupon.id)
        q = q.filter_by(user_id=user_id) if user_id else q.filter_by(guest_id=guest_id)
        return q.first()

    @staticmethod
    def _validate_promo_code(coupon: PromoCode, sub_total: float, now: datetime | None = None) -> None:
        if coupon.user_redemption_limit is not None and (coupon.uses_count or 0) >= coupon.user_redemption_limit:
            raise conflict_error(PROMO_ERROR_MESSAGES["INVALID"])

        now = now or datetime.utcnow()
        messages = []
        if now.strftime("%a") not in coupon.days:
            messages.append(PROMO_ERROR_MESSAGES["UNAVAILABLE_DAY_OF_THE_WEEK"])

        min_cart_amount = float(coupon.min_cart_amount or 0)
        if float(sub_total) < min_cart_amount:
            messages.append(min_cart_amount_message(min_cart_amount))

        start = _parse_moment(coupon.start_date, coupon.start_time)
        end = _parse_moment(coupon.end_date, coupon.end_time)
        if not start <= now <= end:
            messages.append(PROMO_ERROR_MESSAGES["INVALID_USAGE_DATE"])

        if messages:
            errors = [
                {"field": "promoCode", "errorCode": ERROR_CODES["validation"], "errorMessage": m}
                for m in messages
            ]
            raise ApplicationError(400, ERROR_CODES["validation"], PROMO_ERROR_MESSAGES["INVALID"], errors)

    # --- admin ---------------------------------------------------------------
    def get_promo_codes(self, query):
        pagination = self.get_pagination(query)
        q = self.filter_all(
            PromoCode.query,
            self.get_search(query, [PromoCode.coupon_name]),
            self.get_range_filter(
                PromoCode.start_date, query.get("startDateStartRange"), query.get("startDateEndRange")
            ),
        )
        q = q.order_by(*(self.get_sort(query, PromoCode) or [PromoCode.id.desc()]))
        return self.list_response(q, pagination)

    def get_promo_code(self, promo_id) -> PromoCode:
        return self.get_or_404(PromoCode, promo_id, PROMO_ERROR_MESSAGES["NOT_FOUND_BY_ID"])

    def create_promo_code(self, payload: dict) -> PromoCode:
        values = dry_payload(payload, CREATE_PROMO_SCHEMA)
        throw_validation_error([
            *Validator(values.get("couponName"), "couponName").required().result(),
            *Validator(values.get("promoCode"), "promoCode").required().result(),
            *Validator(values.get("tAndC"), "tAndC").required().result(),
            *Validator(values.get("couponType"), "couponType").required().enumeration(PromoCodeTypes.ALL).result(),
            *Validator(values.get("couponValue"), "couponValue").required().is_number().result(),
            *Validator(values.get("couponQty"), "couponQty").required().is_number().result(),
            *Validator(values.get("availableDays"), "availableDays")
            .required().is_array().specific_array_values(WEEK_DAYS).result(),
            *Validator(values.get("startDate"), "startDate").required().date_format("%Y-%m-%d").result(),
            *Validator(values.get("endDate"), "endDate").required().date_format("%Y-%m-%d").result(),
            *Validator(values.get("startTime"), "startTime").required().result(),
            *Validator(values.get("endTime"), "endTime").required().result(),
            *Validator(values.get("includeApiData"), "includeApiData").required().is_boolean().result(),
            *Validator(values.get("userRedemptionLimit"), "userRedemptionLimit").required().is_number().result(),
            *Validator(values.get("minCartAmount"), "minCartAmount").required().is_number().result(),
        ])

        if PromoCode.query.filter_by(promo_code=values["promoCode"]).first():
            raise conflict_error(PROMO_ERROR_MESSAGES["EXISTS"])

        promo = PromoCode(
            coupon_name=values["couponName"],
            promo_code=values["promoCode"],
            t_and_c=values["tAndC"],
            coupon_type=values["couponType"],
            coupon_value=int(float(values["couponValue"])),
            coupon_qty=int(float(values["couponQty"])),
            available_days=json.dumps({"data": values["availableDays"]}),
            start_date=values["startDate"],
            end_date=values["endDate"],
            start_time=values["startTime"],
            end_time=values["endTime"],
            include_api_data=1 if to_bool(values["includeApiData"]) else 0,
            user_redemption_limit=int(float(values["userRedemptionLimit"])),
            remain_user_redemption_limit=int(float(values["userRedemptionLimit"])),
            min_cart_amount=float(values["minCartAmount"]),
            generation_type="A",
            uses_count=0,
            status=1,
        )
        with self.transaction():
            db.session.add(promo)
        return promo

    def toggle_activity(self, promo_id) -> PromoCode:
        promo = self.get_promo_code(promo_id)
        with self.transaction():
            promo.status = 0 if promo.status == 1 else 1
        return promo

    def delete_promo_code(self, promo_id) -> int:
        promo = self.get_promo_code(promo_id)
        with self.transaction():
            db.session.delete(promo)
        return 1
