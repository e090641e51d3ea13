from datetime import timedelta

from aqua_erp.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from conftest import bearer


def test_password_hashing():
    hashed = get_password_hash("s3cret!")

    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret!", None)


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1))
    assert decode_access_token(token) is None


class TestLogin:

    def test_login_sets_cookie_and_returns_token(self, client, admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@aqua.test", "password": "admin123", "role": "ADMIN"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["email"] == "admin@aqua.test"
        assert decode_access_token(body["access_token"])["sub"] == str(admin_user.id)

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("token=")
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()

        # the cookie alone authenticates follow-up requests
        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["role"] == "ADMIN"

    def test_login_with_wrong_role(self, client, cashier_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "cashier@aqua.test", "password": "cashier123", "role": "ADMIN"},
        )

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_login_with_wrong_password(self, client, admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@aqua.test", "password": "nope1234", "role": "ADMIN"},
        )
        assert response.status_code == 401

    def test_logout_clears_cookie(self, client, admin_user):
        client.post(
            "/api/auth/login",
            json={"email": "admin@aqua.test", "password": "admin123", "role": "ADMIN"},
        )

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert client.get("/api/auth/me").status_code == 401


class TestProfile:

    def test_update_name_and_password(self, client, admin_user, admin_headers):
        response = client.put(
            "/api/auth/update",
            json={"name": "Head Admin", "current_password": "admin123", "new_password": "newpass1"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Head Admin"

        login = client.post(
            "/api/auth/login",
            json={"email": "admin@aqua.test", "password": "newpass1", "role": "ADMIN"},
        )
        assert login.status_code == 200

    def test_password_change_needs_current_password(self, client, admin_headers):
        response = client.put(
            "/api/auth/update",
            json={"current_password": "wrong", "new_password": "newpass1"},
            headers=admin_headers,
        )
        assert response.status_code == 401


class TestRoleGuards:

    def test_invalid_token(self, client):
        response = client.get("/api/admin/dashboard", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_cashier_blocked_from_admin(self, client, cashier_headers):
        assert client.get("/api/admin/dashboard", headers=cashier_headers).status_code == 403

    def test_admin_allowed_on_cashier_routes(self, client, admin_headers):
        assert client.get("/api/cashier/get-customers", headers=admin_headers).status_code == 200

    def test_deactivated_user_is_rejected(self, client, db, cashier_user):
        headers = bearer(cashier_user)
        cashier_user.is_active = False
        db.commit()

        assert client.get("/api/cashier/get-customers", headers=headers).status_code == 401
