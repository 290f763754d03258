# easyguide/data/services/catalogue_service.py
from easyguide.data.models import City, Country, ECategory
from easyguide.data.services.base import BaseService
from easyguide.validation import Validator, dry_payload, throw_validation_error, to_bool


class CityService(BaseService):
    def get_cities(self, query):
        pagination = self.get_pagination(query)
        with_top_destination = to_bool(query.get("withTopDestination"))
        with_top_to_visit = to_bool(query.get("withTopToVisit"))
        q = self.filter_all(
            City.query,
            self.get_search(query, [City.name]),
            City.top_destination.is_(with_top_destination) if with_top_destination is not None else None,
            City.top_to_visit.is_(with_top_to_visit) if with_top_to_visit is not None else None,
        )
        q = q.order_by(*(self.get_sort(query, City) or [City.name.asc()]))
        return self.list_response(q, pagination)

    def get_city(self, city_id) -> City:
        return self.get_or_404(City, city_id, "City with this identifier doesn't exist")

    def update_city_top(self, city_id, payload: dict) -> City:
        city = self.get_city(city_id)
        values = dry_payload(payload, {"topDestination": lambda v: v, "topToVisit": lambda v: v})
        throw_validation_error([
            *Validator(values.get("topDestination"), "topDestination").required(False).is_boolean().result(),
            *Validator(values.get("topToVisit"), "topToVisit").required(False).is_boolean().result(),
        ])
        with self.transaction():
            if "topDestination" in values:
                city.top_destination = to_bool(values["topDestination"])
            if "topToVisit" in values:
                city.top_to_visit = to_bool(values["topToVisit"])
        return city


class CountryService(BaseService):
    def get_countries(self, query):
        pagination = self.get_pagination(query)
        q = self.filter_all(Country.query, self.get_search(query, [Country.name]))
        q = q.order_by(*(self.get_sort(query, Country) or [Country.name.asc()]))
        return self.list_response(q, pagination)

    def get_alpha_codes(self):
        return [{"id": c.id, "code": c.code} for c in Country.query.order_by(Country.code).all()]

    def get_dial_codes(self):
        return [{"id": c.id, "dialCode": c.dial_code} for c in Country.query.order_by(Country.dial_code).all()]

    def get_country(self, country_id) -> Country:
        return self.get_or_404(Country, country_id, "Country with this identifier doesn't exist")


class ECategoryService(BaseService):
    def get_categories(self, query):
        pagination = self.get_pagination(query)
        q = self.filter_all(ECategory.query, self.get_search(query, [ECategory.name]))
        q = q.order_by(*(self.get_sort(query, ECategory) or [ECategory.position.asc(), ECategory.id.asc()]))
        return self.list_response(q, pagination)

    def get_category(self, category_id) -> ECategory:
        return self.get_or_404(ECategory, category_id, "Category with this identifier doesn't exist")
