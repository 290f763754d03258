# easyguide/data/models/__init__.py
from easyguide.data.models.admin import Admin, AdminPasswordReset
from easyguide.data.models.category import ECategory, ECategoryProduct
from easyguide.data.models.e_ticket import ETicket
from easyguide.data.models.geo import City, Country
from easyguide.data.models.itinerary import Itinerary, ItineraryItem
from easyguide.data.models.order import (
    OrderStatuses,
    SalesFlatOrder,
    SalesFlatOrderItemMeta,
    SalesFlatOrderPayment,
)
from easyguide.data.models.product import (
    Product,
    ProductDetail,
    ProductMedia,
    ProductMetaInfo,
    ProductView,
)
from easyguide.data.models.promo_code import PromoCode, PromoCodeTypes, PromoCodeUse, WEEK_DAYS
from easyguide.data.models.user import FavouriteProduct, PasswordReset, RegistrationOtp, User

__all__ = [
    "Admin",
    "AdminPasswordReset",
    "City",
    "Country",
    "ECategory",
    "ECategoryProduct",
    "ETicket",
    "FavouriteProduct",
    "Itinerary",
    "ItineraryItem",
    "OrderStatuses",
    "PasswordReset",
    "Product",
    "ProductDetail",
    "ProductMedia",
    "ProductMetaInfo",
    "ProductView",
    "PromoCode",
    "PromoCodeTypes",
    "PromoCodeUse",
    "RegistrationOtp",
    "SalesFlatOrder",
    "SalesFlatOrderItemMeta",
    "SalesFlatOrderPayment",
    "User",
    "WEEK_DAYS",
]
