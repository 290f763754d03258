# easyguide/data/container.py
from easyguide.config import ConfigService
from easyguide.container import init_container
from easyguide.data.services.admin_user_service import AdminUserService
from easyguide.data.services.catalogue_service import CityService, CountryService, ECategoryService
from easyguide.data.services.itinerary_service import ItineraryService
from easyguide.data.services.order_service import OrderPaymentService, OrderService
from easyguide.data.services.product_service import AdminProductService, ProductService
from easyguide.data.services.promo_code_service import PromoCodeService
from easyguide.data.services.user_service import UserService


def build_container(app, config_service: ConfigService):
    return init_container(app, {
        "config": lambda c: config_service,
        "user_service": lambda c: UserService(c.get("config")),
        "admin_user_service": lambda c: AdminUserService(c.get("config")),
        "promo_code_service": lambda c: PromoCodeService(c.get("config")),
        "city_service": lambda c: CityService(c.get("config")),
        "country_service": lambda c: CountryService(c.get("config")),
        "category_service": lambda c: ECategoryService(c.get("config")),
        "product_service": lambda c: ProductService(c.get("config")),
        "admin_product_service": lambda c: AdminProductService(c.get("config")),
        "itinerary_service": lambda c: ItineraryService(c.get("config")),
        "order_service": lambda c: OrderService(
            c.get("config"), c.get("itinerary_service"), c.get("promo_code_service")
        ),
        "order_payment_service": lambda c: OrderPaymentService(c.get("config")),
    })
