from datetime import date, timedelta

from easyguide.data.models import City, Country, ECategory, ECategoryProduct, Product, ProductView
from easyguide.extensions import db

PROMO = {
    "couponName": "Spring",
    "promoCode": "SPRING10",
    "tAndC": "One per customer",
    "couponType": "P",
    "couponValue": 10,
    "couponQty": 100,
    "availableDays": ["Mon", "Fri"],
    "startDate": date.today().isoformat(),
    "endDate": (date.today() + timedelta(days=30)).isoformat(),
    "startTime": "00:00",
    "endTime": "23:59",
    "includeApiData": True,
    "userRedemptionLimit": 5,
    "minCartAmount": 10,
}


def seed():
    london = City(name="London", code="LON", top_destination=True)
    paris = City(name="Paris", code="PAR")
    db.session.add_all([
        london,
        paris,
        Country(name="United Kingdom", code="GB", dial_code="+44"),
        Country(name="France", code="FR", dial_code="+33"),
    ])
    db.session.flush()
    tours = ECategory(name="Tours", slug="tours", position=1, status=1)
    db.session.add(tours)
    tower = Product(name="Tower of London", slug="tower-of-london", status=1, city_id=london.id)
    eye = Product(name="London Eye", slug="london-eye", status=0, city_id=london.id, most_popular=True)
    db.session.add_all([tower, eye])
    db.session.flush()
    db.session.add(ECategoryProduct(e_category_id=tours.id, product_id=tower.id))
    db.session.commit()
    return {"london": london.id, "tower": tower.id, "eye": eye.id, "tours": tours.id}


class TestCities:
    def test_list_with_filters_and_pagination(self, data_client):
        seed()
        body = data_client.get("/cities/?withTopDestination=true").get_json()["resultData"]
        assert [c["name"] for c in body["items"]] == ["London"]
        assert body["pagination"] == {"page": 1, "pageSize": 10, "total": 1}

        page = data_client.get("/cities?pageSize=1&page=2&sort=name").get_json()["resultData"]
        assert [c["name"] for c in page["items"]] == ["Paris"]

    def test_update_top_flags(self, data_client):
        ids = seed()
        response = data_client.patch(f"/cities/top/{ids['london']}", json={"topToVisit": True})
        assert response.get_json()["resultData"]["topToVisit"] is True
        bad = data_client.patch(f"/cities/top/{ids['london']}", json={"topToVisit": "yes"})
        assert bad.status_code == 400


class TestCountriesAndCategories:
    def test_codes(self, data_client):
        seed()
        assert [c["code"] for c in data_client.get("/countries/alpha-codes").get_json()["resultData"]] == ["FR", "GB"]
        dial_codes = data_client.get("/countries/dial-codes").get_json()["resultData"]
        assert {c["dialCode"] for c in dial_codes} == {"+44", "+33"}
        assert data_client.get("/countries/999").status_code == 404

    def test_categories(self, data_client):
        seed()
        items = data_client.get("/categories/e-categories").get_json()["resultData"]["items"]
        assert [c["slug"] for c in items] == ["tours"]


class TestProducts:
    def test_filters(self, data_client):
        ids = seed()
        active = data_client.get("/products/?isActive=true").get_json()["resultData"]["items"]
        assert [p["id"] for p in active] == [ids["tower"]]
        assert active[0]["city"]["name"] == "London"

        by_category = data_client.get(f"/products/?categoryId={ids['tours']}").get_json()["resultData"]["items"]
        assert [p["id"] for p in by_category] == [ids["tower"]]

        popular = data_client.get("/products/?withMostPopular=true").get_json()["resultData"]["items"]
        assert [p["id"] for p in popular] == [ids["eye"]]

    def test_live_search_needs_four_chars(self, data_client):
        seed()
        assert data_client.get("/products/live-search?search=tow").get_json()["resultData"]["items"] == []
        found = data_client.get("/products/live-search?search=towe").get_json()["resultData"]["items"]
        assert [p["name"] for p in found] == ["Tower of London"]

    def test_slug_lookup_records_a_view(self, data_client):
        ids = seed()
        response = data_client.get("/products/slug/tower?userId=3",
                                   headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.2"})
        product = response.get_json()["resultData"]
        assert product["id"] == ids["tower"]
        assert product["isFavourite"] is False
        assert "details" in product
        assert ProductView.query.one().ip_address == "10.0.0.1"

    def test_inactive_slug_is_404(self, data_client):
        seed()
        assert data_client.get("/products/slug/london-eye").status_code == 404


class TestAdminProducts:
    def test_create_and_manage_media(self, data_client):
        seed()
        created = data_client.post("/admin/products/", json={
            "name": "Westminster Abbey",
            "cityId": 1,
            "finalPrice": 25,
        })
        assert created.status_code == 201
        product = created.get_json()["resultData"]
        assert product["slug"] == "westminster-abbey"
        assert product["details"] is not None

        attached = data_client.post(f"/admin/products/{product['id']}/attach-media",
                                    json={"urls": ["https://img/1.jpg", "https://img/2.jpg"]})
        media = attached.get_json()["resultData"]["media"]
        assert len(media) == 2

        moved = data_client.put(f"/admin/products/{product['id']}/gallery-position",
                                json={"id": media[0]["id"], "type": "web", "position": 3})
        assert moved.status_code == 200

        removed = data_client.post(f"/admin/products/{product['id']}/remove-media", json={"assetId": media[1]["id"]})
        assert removed.get_json()["resultData"]["imageUrl"] in ("https://img/1.jpg", "https://img/2.jpg")

        toggled = data_client.get(f"/admin/products/{product['id']}/toggle-block").get_json()["resultData"]
        assert toggled["status"] == 1


class TestPromoCodes:
    def test_crud(self, data_client):
        created = data_client.post("/admin/promo-codes/", json=PROMO)
        assert created.status_code == 201
        promo = created.get_json()["resultData"]
        assert promo["availableDays"] == ["Mon", "Fri"]
        assert promo["status"] == 1

        duplicate = data_client.post("/admin/promo-codes/", json=PROMO)
        assert duplicate.status_code == 409

        toggled = data_client.get(f"/admin/promo-codes/{promo['id']}/toggle-activity").get_json()["resultData"]
        assert toggled["status"] == 0

        listed = data_client.get("/admin/promo-codes/?search=spr").get_json()["resultData"]
        assert listed["pagination"]["total"] == 1

        assert data_client.delete(f"/admin/promo-codes/{promo['id']}").get_json()["resultData"] == 1

    def test_invalid_type_and_days(self, data_client):
        response = data_client.post("/admin/promo-codes/", json={**PROMO, "couponType": "X", "availableDays": ["Xyz"]})
        assert response.status_code == 400
        assert {e["field"] for e in response.get_json()["errors"]} == {"couponType", "availableDays"}
