from easyguide.data.models import Admin, PasswordReset, Product, RegistrationOtp, User
from easyguide.extensions import db

NEW_USER = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "Ada@Example.com",
    "password": "secret1",
    "phoneNumber": "447700900123",
}


def register(client, **overrides):
    return client.post("/users/create", json={**NEW_USER, **overrides})


class TestRegistration:
    def test_create_user_stores_otp(self, data_client):
        response = register(data_client)
        assert response.status_code == 201
        body = response.get_json()
        assert body["errorCode"] == 0
        result = body["resultData"]
        assert result["email"] == "ada@example.com"
        assert len(result["otp"]) == 6

        user = db.session.get(User, result["id"])
        assert user.status == 0
        assert user.phone_number == "+447700900123"
        assert user.check_password("secret1")
        assert RegistrationOtp.query.filter_by(email="ada@example.com").count() == 1

    def test_duplicate_email_is_rejected(self, data_client):
        register(data_client)
        response = register(data_client, phoneNumber="447700900999")
        assert response.status_code == 400
        assert response.get_json()["errorMessage"] == "User with the same email already exists"

    def test_validation_errors_envelope(self, data_client):
        response = data_client.post("/users/create", json={"email": "nope"})
        assert response.status_code == 400
        body = response.get_json()
        assert body["errorCode"] == 400
        assert body["errorMessage"] == "Invalid parameters"
        fields = {e["field"] for e in body["errors"]}
        assert {"firstName", "lastName", "email", "password", "phoneNumber"} <= fields

    def test_check_otp_activates_user(self, data_client):
        otp = register(data_client).get_json()["resultData"]["otp"]
        response = data_client.post("/users/check-otp", json={"email": "ada@example.com", "otp": otp})
        assert response.status_code == 200
        assert response.get_json()["resultData"]["status"] == 1
        assert "password" not in response.get_json()["resultData"]

    def test_wrong_otp(self, data_client):
        register(data_client)
        response = data_client.post("/users/check-otp", json={"email": "ada@example.com", "otp": "000000x"})
        assert response.status_code == 400

    def test_send_new_otp_only_for_unverified(self, data_client):
        register(data_client)
        first = data_client.post("/users/send-new-otp", json={"email": "ada@example.com"}).get_json()
        created = first["resultData"]
        assert set(created) == {"email", "firstName", "otp"}
        assert created["email"] == "ada@example.com"
        assert created["otp"]
        missing = data_client.post("/users/send-new-otp", json={"email": "ghost@example.com"}).get_json()
        assert missing["resultData"] is None

    def test_social_user_is_upserted(self, data_client):
        payload = {"email": "sam@example.com", "socialId": "g-1", "socialType": "google", "firstName": "Sam"}
        first = data_client.post("/users/create", json=payload).get_json()["resultData"]
        second = data_client.post("/users/create", json={**payload, "firstName": "Samuel"}).get_json()["resultData"]
        assert first["id"] == second["id"]
        assert db.session.get(User, first["id"]).first_name == "Samuel"


class TestCredentials:
    def test_check_credentials(self, data_client):
        register(data_client)
        good = data_client.post("/users/check-credentials", json={"email": "ada@example.com", "password": "secret1"})
        assert good.status_code == 200
        bad = data_client.post("/users/check-credentials", json={"email": "ada@example.com", "password": "nope"})
        assert bad.status_code == 401
        assert bad.get_json()["errorCode"] == "authorization__invalid_credentials_error"

    def test_restore_and_reset_password(self, data_client):
        register(data_client)
        token = data_client.post("/users/restore-password", json={"email": "ada@example.com"}) \
            .get_json()["resultData"]["token"]
        response = data_client.patch("/users/reset-password", json={"token": token, "password": "newpass1"})
        assert response.status_code == 200
        assert PasswordReset.query.filter_by(token=token).one().status == 1
        assert User.query.filter_by(email="ada@example.com").one().check_password("newpass1")

        reused = data_client.patch("/users/reset-password", json={"token": token, "password": "newpass2"})
        assert reused.status_code == 400

    def test_change_password_checks_old_one(self, data_client):
        user_id = register(data_client).get_json()["resultData"]["id"]
        wrong = data_client.patch("/users/change-password",
                                  json={"id": user_id, "oldPassword": "bad", "newPassword": "another1"})
        assert wrong.status_code == 400
        right = data_client.patch("/users/change-password",
                                  json={"id": user_id, "oldPassword": "secret1", "newPassword": "another1"})
        assert right.status_code == 200


class TestProfile:
    def test_get_missing_user_is_404(self, data_client):
        response = data_client.get("/users/999")
        assert response.status_code == 404
        assert response.get_json() == {
            "errorCode": 1,
            "errorMessage": "User with this identifier doesn't exist",
            "errors": [],
        }

    def test_update_profile_image_returns_old_url(self, data_client):
        user_id = register(data_client).get_json()["resultData"]["id"]
        data_client.patch(f"/users/{user_id}/profile-image", json={"profileImageUrl": "https://img/a.png"})
        result = data_client.patch(f"/users/{user_id}/profile-image",
                                   json={"profileImageUrl": "https://img/b.png"}).get_json()["resultData"]
        assert result["oldProfileImageUrl"] == "https://img/a.png"
        assert result["user"]["profileImage"] == "https://img/b.png"

    def test_favourites(self, data_client):
        user_id = register(data_client).get_json()["resultData"]["id"]
        product = Product(name="Tower of London", status=1)
        db.session.add(product)
        db.session.commit()

        added = data_client.patch(f"/users/{user_id}/favourites?action=add", json={"productId": product.id})
        assert added.status_code == 201
        listed = data_client.get(f"/users/{user_id}/favourites").get_json()["resultData"]
        assert [p["id"] for p in listed["items"]] == [product.id]
        assert listed["items"][0]["isFavourite"] is True

        bad = data_client.patch(f"/users/{user_id}/favourites?action=toggle", json={"productId": product.id})
        assert bad.status_code == 400

    def test_stripe_customer_token(self, data_client):
        user_id = register(data_client).get_json()["resultData"]["id"]
        response = data_client.patch(f"/users/{user_id}/customer_token", json={"stripeCustomerToken": "cus_1"})
        assert response.get_json()["resultData"]["stripeCustomerToken"] == "cus_1"


class TestBackOffice:
    def test_admin_creates_user_with_temporary_password(self, data_client):
        response = data_client.post("/admin/users/", json={**NEW_USER, "password": None})
        assert response.status_code == 201
        result = response.get_json()["resultData"]
        user = db.session.get(User, result["id"])
        assert user.status == 1
        assert user.check_password(result["temporaryPassword"])

    def test_change_email_and_toggle_block(self, data_client):
        user_id = register(data_client).get_json()["resultData"]["id"]
        same = data_client.patch(f"/admin/users/change-email?userId={user_id}", json={"email": "ada@example.com"})
        assert same.status_code == 409

        changed = data_client.patch(f"/admin/users/change-email?userId={user_id}", json={"email": "new@example.com"})
        assert changed.get_json()["resultData"]["oldEmail"] == "ada@example.com"
        assert db.session.get(User, user_id).status == 0

        blocked = data_client.get(f"/admin/users/{user_id}/toggle-block").get_json()["resultData"]
        assert blocked["isBlocked"] == 1

    def test_admin_credentials(self, data_client):
        admin = Admin(name="Root", email="root@easyguide.test")
        admin.set_password("rootpass")
        db.session.add(admin)
        db.session.commit()

        response = data_client.post("/admin/admin-user/check-credentials",
                                    json={"email": "root@easyguide.test", "password": "rootpass"})
        assert response.status_code == 200
        assert response.get_json()["resultData"]["name"] == "Root"
