# easyguide/data/services/order_service.py
import logging
import math
from datetime import date

from easyguide.data.models import (
    OrderStatuses,
    Product,
    PromoCodeTypes,
    SalesFlatOrder,
    SalesFlatOrderItemMeta,
    SalesFlatOrderPayment,
)
from easyguide.data.services.base import BaseService
from easyguide.data.services.itinerary_service import ItineraryService, customer_ids
from easyguide.data.services.promo_code_service import PromoCodeService
from easyguide.errors import not_found_error
from easyguide.extensions import db
from easyguide.generators import generate_transaction_uuid
from easyguide.validation import Validator, dry_payload, throw_validation_error

logger = logging.getLogger(__name__)

PAYMENT_SUCCEEDED = "succeeded"


def not_found_message(entity: str) -> str:
    return f"{entity} not found"


CREATE_ORDER_SCHEMA = {
    "userId": int,
    "guestId": int,
    "userName": str,
    "userEmail": str,
    "userPhone": str,
    "promoCode": str,
}

UPDATE_ORDER_SCHEMA = {
    "orderId": int,
    "orderUuid": str,
    "orderItems": list,
    "orderStatus": str,
    "promoCode": str,
    "customerIds": dict,
}

CREATE_PAYMENT_SCHEMA = {
    "orderId": int,
    "referenceId": str,
    "reason": str,
    "totalPaid": float,
    "paymentStatus": str,
}


def ceil_cents(value: float) -> float:
    return math.ceil(round(value * 100, 6)) / 100


def order_totals(sub_total: float, discount: dict | None = None, config=None) -> dict:
    """Amounts stored on an order; gateway charges are Stripe's percent plus fixed fee."""
    percent = float(config.get("GATEWAY_CHARGE_PERCENT", 2.9)) if config else 2.9
    fixed = float(config.get("GATEWAY_CHARGE_FIXED", 0.2)) if config else 0.2

    discount_amount = referral_discount = 0.0
    if discount and discount.get("discountAmount") and discount.get("discountType"):
        value = float(discount["discountAmount"])
        if discount["discountType"] == PromoCodeTypes.PERCENTAGE:
            discount_amount = ceil_cents(sub_total * value / 100)
        else:
            discount_amount = value

    net_total = round(sub_total - (discount_amount + referral_discount), 2)
    gateway_charges = ceil_cents(net_total * percent / 100 + fixed)
    return {
        "sub_total": sub_total,
        "net_total": net_total,
        "grand_total": round(net_total + gateway_charges, 2),
        "discount_amount": discount_amount,
        "referral_discount": referral_discount,
        "tax_amount": 0.0,
        "gateway_charges": gateway_charges,
        "commission_charges": 0.0,
    }


class OrderService(BaseService):
    def __init__(self, config=None, itinerary_service=None, promo_code_service=None):
        super().__init__(config)
        self.itinerary_service = itinerary_service or ItineraryService(config)
        self.promo_code_service = promo_code_service or PromoCodeService(config)

    def get_orders(self, query) -> dict:
        pagination = self.get_pagination(query)
        q = self.filter_all(SalesFlatOrder.query, self.get_search(query, [
            SalesFlatOrder.user_name, SalesFlatOrder.user_email, SalesFlatOrder.order_uuid,
        ]))
        q = q.order_by(*(self.get_sort(query, SalesFlatOrder) or [SalesFlatOrder.id.desc()]))
        return self.list_response(q, pagination)

    def get_order(self, order_id, query=None) -> dict:
        order = self.get_or_404(SalesFlatOrder, order_id, not_found_message("Order"))
        return order.to_dict(include=self.get_include(query))

    def get_bookings_by_user_id(self, user_id, query) -> dict:
        """Booked order items of a user with the product image and the order total."""
        pagination = self.get_pagination(query)
        q = (
            db.session.query(SalesFlatOrderItemMeta, Product.rating_avg, Product.image_url,
                             SalesFlatOrder.grand_total)
            .join(SalesFlatOrder, SalesFlatOrder.id == SalesFlatOrderItemMeta.order_id)
            .join(Product, Product.id == SalesFlatOrderItemMeta.product_id)
            .filter(SalesFlatOrder.user_id == user_id, SalesFlatOrderItemMeta.is_booked > 0)
        )
        if str((query or {}).get("onlyActiveBookings")).lower() == "true":
            q = q.filter(SalesFlatOrderItemMeta.date >= date.today())
        q = q.order_by(SalesFlatOrderItemMeta.date.desc(), SalesFlatOrderItemMeta.id.desc())

        def serialize(row):
            item, rating_avg, image_url, grand_total = row
            return {
                **item.to_dict(),
                "ratingAvg": rating_avg,
                "imageUrl": image_url,
                "grandTotal": float(grand_total) if grand_total is not None else None,
            }

        return self.list_response(q, pagination, serialize)

    def get_tickets(self, order_id) -> dict:
        order = db.session.get(SalesFlatOrder, order_id)
        rows = (
            db.session.query(Product.name, SalesFlatOrderItemMeta)
            .join(Product, Product.id == SalesFlatOrderItemMeta.product_id)
            .filter(SalesFlatOrderItemMeta.order_id == order_id)
            .all()
        ) if order else []

        items = []
        for name, item in rows:
            options = item.options
            items.append({
                "name": name,
                "date": item.date.isoformat() if item.date else None,
                "time": item.time,
                "productOptions": options,
                "ticketsCount": sum(int(float(o.get("orderedQty") or 0)) for o in options),
            })

        summary = {}
        if order is not None:
            summary = {
                "orderUuid": order.order_uuid,
                "subTotal": float(order.sub_total or 0),
                "grandTotal": float(order.grand_total or 0),
                "gatewayCharges": float(order.gateway_charges or 0),
            }
        return {"order": summary, "items": items}

    def create_sales_flat_order_with_items(self, payload: dict) -> int:
        values = dry_payload(payload, CREATE_ORDER_SCHEMA)
        ids = customer_ids(values)
        if not ids["userId"] and not ids["guestId"]:
            self.throw_identity_error()

        throw_validation_error([
            *Validator(values.get("userName"), "userName").required().result(),
            *Validator(values.get("userEmail"), "userEmail").required().email().result(),
            *Validator(values.get("userPhone"), "userPhone").required().phone().result(),
        ])

        itinerary = self.itinerary_service.find_itinerary(ids)
        cart_items = self.itinerary_service.current_items(itinerary) if itinerary else []
        if not cart_items:
            raise not_found_error(not_found_message("Products"))

        owner = {"user_id": ids["userId"]} if ids["userId"] else {"guest_id": ids["guestId"]}
        order = (
            SalesFlatOrder.query
            .filter_by(itinerary_id=itinerary.id, **owner)
            .filter(SalesFlatOrder.status != OrderStatuses.CONFIRMED)
            .order_by(SalesFlatOrder.updated_at.desc(), SalesFlatOrder.id.desc())
            .first()
        )

        sub_total = round(sum(float(item.total_price or 0) for item in cart_items), 2)
        discount = None
        promo_code = values.get("promoCode")
        if promo_code:
            discount = self.promo_code_service.get_discount(promo_code, sub_total, ids)
        totals = order_totals(sub_total, discount, self.config)
        if promo_code:
            totals["coupon_code"] = promo_code

        if order is not None:
            if float(order.sub_total or 0) != sub_total or len(order.items_meta) != len(cart_items):
                with self.transaction():
                    for key, value in totals.items():
                        setattr(order, key, value)
                    for meta in list(order.items_meta):
                        db.session.delete(meta)
                    db.session.flush()
                    self._add_order_items(order, cart_items)
            return order.id

        with self.transaction():
            order = SalesFlatOrder(
                **owner,
                itinerary_id=itinerary.id,
                user_name=values["userName"],
                user_email=values["userEmail"],
                user_phone=values["userPhone"],
                status=OrderStatuses.INITIATED,
                device_type=2,
                **totals,
            )
            db.session.add(order)
            db.session.flush()
            self._add_order_items(order, cart_items)
        logger.info("[ORDER] created #%s for %s", order.id, owner)
        return order.id

    def book_order_items_and_update_order_status(self, payload: dict) -> int:
        values = dry_payload(payload, UPDATE_ORDER_SCHEMA)
        throw_validation_error([
            *Validator(values.get("orderId"), "orderId").required().is_number().result(),
            *Validator(values.get("orderStatus"), "orderStatus")
            .required(False).enumeration(OrderStatuses.ALL).result(),
        ])

        order = db.session.get(SalesFlatOrder, values["orderId"])
        if order is None or not order.items_meta:
            raise not_found_error(not_found_message("Order"))

        with self.transaction():
            for booking in values.get("orderItems") or []:
                SalesFlatOrderItemMeta.query.filter_by(
                    id=booking.get("orderItemId"), order_id=order.id
                ).update({"is_booked": 1, "booking_id": booking.get("bookingId")})
            if values.get("orderUuid"):
                order.order_uuid = values["orderUuid"]
            if values.get("orderStatus"):
                order.status = values["orderStatus"]
            if values.get("promoCode") and values.get("customerIds"):
                self.promo_code_service.use_promo_code(values["promoCode"], customer_ids(values["customerIds"]))
        return order.id

    @staticmethod
    def _add_order_items(order: SalesFlatOrder, cart_items) -> None:
        for item in cart_items:
            db.session.add(SalesFlatOrderItemMeta(
                order_id=order.id,
                itinerary_item_id=item.id,
                product_id=item.product_id,
                product_name=item.product_name,
                variant_id=item.variant_id,
                variant_name=item.variant_name,
                variant_item_id=item.variant_item_id,
                total_price=item.total_price,
                product_options=item.product_options,
                date=item.itinerary_date,
                time=item.date_time,
                is_booked=0,
            ))


class OrderPaymentService(BaseService):
    def get_order_payments(self, query) -> dict:
        pagination = self.get_pagination(query)
        q = SalesFlatOrderPayment.query.order_by(
            *(self.get_sort(query, SalesFlatOrderPayment) or [SalesFlatOrderPayment.id.desc()])
        )
        return self.list_response(q, pagination)

    def get_order_payment(self, payment_id) -> dict:
        return self.get_or_404(SalesFlatOrderPayment, payment_id, not_found_message("Payment")).to_dict()

    def create_payment_data(self, payload: dict) -> dict:
        values = dry_payload(payload, CREATE_PAYMENT_SCHEMA)
        throw_validation_error([
            *Validator(values.get("orderId"), "orderId").required().is_number().result(),
            *Validator(values.get("referenceId"), "referenceId").required().result(),
            *Validator(values.get("totalPaid"), "totalPaid").required().is_number().result(),
        ])
        self.get_or_404(SalesFlatOrder, values["orderId"], not_found_message("Order"))

        with self.transaction():
            payment = SalesFlatOrderPayment(
                order_id=values["orderId"],
                reference_id=values["referenceId"],
                reason=values.get("reason"),
                total_paid=values["totalPaid"],
                status=1 if values.get("paymentStatus") == PAYMENT_SUCCEEDED else 0,
                transaction_id=generate_transaction_uuid(values["orderId"]),
            )
            db.session.add(payment)
        return {"id": payment.id, "transactionId": payment.transaction_id, "status": payment.status}
