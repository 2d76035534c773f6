"""
Tests for registration, login, OTP and authorization.

Tests cover:
- Health check
- User registration (hashing, duplicates, validation)
- Login and bearer-token enforcement
- Role checks (Admin vs Farmer)
- E-mail OTP send / verify
"""

from tests.conftest import API, unique


class TestHealthCheck:
    def test_health_check_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestRegistration:
    def test_register_returns_user_without_password(self, client):
        email = f"{unique('reg')}@superfarmer.test"
        response = client.post(
            f"{API}/users", json={"name": "Siti", "email": email, "password": "secret123"}
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == email
        assert data["roleId"] == 2
        assert "password" not in data

    def test_register_lowercases_email(self, client):
        local = unique("Mixed")
        response = client.post(
            f"{API}/users",
            json={"name": "Mixed", "email": f"{local}@SuperFarmer.test", "password": "secret123"},
        )
        assert response.status_code == 201
        assert response.json()["data"]["email"] == f"{local}@superfarmer.test".lower()

    def test_duplicate_email_conflicts(self, client, farmer):
        user, _ = farmer
        response = client.post(
            f"{API}/users",
            json={"name": "Again", "email": user["email"], "password": "secret123"},
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_short_password_rejected(self, client):
        response = client.post(
            f"{API}/users",
            json={"name": "Short", "email": f"{unique('s')}@superfarmer.test", "password": "123"},
        )
        assert response.status_code == 422


class TestLogin:
    def test_login_returns_token_and_user(self, client, farmer):
        user, _ = farmer
        response = client.post(
            f"{API}/auth/login", json={"email": user["email"], "password": "secret123"}
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token"]
        assert data["user"]["id"] == user["id"]

    def test_wrong_password_is_bad_request(self, client, farmer):
        user, _ = farmer
        response = client.post(
            f"{API}/auth/login", json={"email": user["email"], "password": "wrong-password"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"

    def test_unknown_email_is_bad_request(self, client):
        response = client.post(
            f"{API}/auth/login", json={"email": "nobody@superfarmer.test", "password": "x"}
        )
        assert response.status_code == 400


class TestAuthorization:
    def test_missing_token_is_unauthorized(self, client):
        response = client.get(f"{API}/commodities")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_garbage_token_is_unauthorized(self, client):
        response = client.get(
            f"{API}/commodities", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401

    def test_farmer_cannot_create_commodity(self, client, farmer_headers):
        response = client.post(
            f"{API}/commodities",
            json={"name": unique("Corn"), "code": unique("CN")},
            headers=farmer_headers,
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_farmer_cannot_list_users(self, client, farmer_headers):
        assert client.get(f"{API}/users", headers=farmer_headers).status_code == 403

    def test_admin_can_list_users(self, client, admin_headers):
        response = client.get(f"{API}/users", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["meta"]["total"] >= 1
        assert all("password" not in u for u in response.json()["data"])

    def test_farmer_reads_own_profile_only(self, client, farmer, admin_headers):
        user, headers = farmer
        assert client.get(f"{API}/users/{user['id']}", headers=headers).status_code == 200

        other = client.post(
            f"{API}/users",
            json={"name": "Other", "email": f"{unique('o')}@superfarmer.test", "password": "secret123"},
        ).json()["data"]
        assert client.get(f"{API}/users/{other['id']}", headers=headers).status_code == 403
        assert client.get(f"{API}/users/{other['id']}", headers=admin_headers).status_code == 200

    def test_password_change_takes_effect(self, client, farmer):
        user, headers = farmer
        response = client.patch(
            f"{API}/users/{user['id']}", json={"password": "brand-new-pass"}, headers=headers
        )
        assert response.status_code == 200
        assert client.post(
            f"{API}/auth/login", json={"email": user["email"], "password": "brand-new-pass"}
        ).status_code == 200

    def test_deleted_user_token_stops_working(self, client, farmer, admin_headers):
        user, headers = farmer
        assert client.delete(f"{API}/users/{user['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"{API}/users/{user['id']}", headers=headers).status_code == 401


class TestRoles:
    def test_seeded_roles_are_listed(self, client, admin_headers):
        response = client.get(f"{API}/roles", headers=admin_headers)
        assert response.status_code == 200
        names = {r["name"] for r in response.json()["data"]}
        assert {"Admin", "Farmer"} <= names

    def test_duplicate_role_conflicts(self, client, admin_headers):
        response = client.post(f"{API}/roles", json={"name": "Admin"}, headers=admin_headers)
        assert response.status_code == 409


class TestOTP:
    def test_send_and_verify_otp(self, client, farmer, publisher):
        user, _ = farmer
        response = client.post(f"{API}/auth/otp/send", json={"email": user["email"]})
        assert response.status_code == 200

        publisher.publish_mail.assert_awaited_once()
        payload = publisher.publish_mail.await_args.args[0]
        assert payload["to"] == user["email"]
        assert len(payload["otp"]) == 6

        response = client.post(
            f"{API}/auth/otp/verify", json={"email": user["email"], "otp": payload["otp"]}
        )
        assert response.status_code == 200

        # OTPs are single use
        response = client.post(
            f"{API}/auth/otp/verify", json={"email": user["email"], "otp": payload["otp"]}
        )
        assert response.status_code == 400

    def test_wrong_otp_is_rejected(self, client, farmer, publisher):
        user, _ = farmer
        client.post(f"{API}/auth/otp/send", json={"email": user["email"]})
        sent = publisher.publish_mail.await_args.args[0]["otp"]
        wrong = "000000" if sent != "000000" else "111111"
        response = client.post(
            f"{API}/auth/otp/verify", json={"email": user["email"], "otp": wrong}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid OTP"

    def test_otp_for_unknown_email_is_rejected(self, client, publisher):
        response = client.post(f"{API}/auth/otp/send", json={"email": "ghost@superfarmer.test"})
        assert response.status_code == 400
        publisher.publish_mail.assert_not_awaited()
