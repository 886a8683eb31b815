"""
Tests for registration, login and the /users/me profile.
"""

from beauty_manager.domain.users import UserService
from beauty_manager.models import DEFAULT_CONFIRM_MESSAGE

# matches the password of the conftest users
OWNER_PASSWORD = "secret123"

REGISTRATION = {
    "email": "Nova@Salon.com",
    "password": "secret123",
    "phone": "(21) 98765-4321",
    "address": {
        "cep": "20040-020",
        "state": "RJ",
        "city": "Rio de Janeiro",
        "street": "Rua da Assembleia",
        "number": "10",
    },
}


class TestAuth:
    def test_register_returns_token_and_user(self, client):
        resp = client.post("/auth/register", json=REGISTRATION)

        assert resp.status_code == 201
        body = resp.json()
        assert body["access_token"]
        assert body["user"]["email"] == "nova@salon.com"
        assert body["user"]["whatsappMessages"]["confirm"] == DEFAULT_CONFIRM_MESSAGE
        assert "password_hash" not in body["user"]

        me = client.get("/users/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.status_code == 200
        assert me.json()["email"] == "nova@salon.com"

    def test_register_duplicate_email_conflicts(self, client):
        client.post("/auth/register", json=REGISTRATION)
        resp = client.post("/auth/register", json={**REGISTRATION, "email": "NOVA@salon.com"})
        assert resp.status_code == 409

    def test_register_short_password(self, client):
        resp = client.post("/auth/register", json={**REGISTRATION, "password": "123"})
        assert resp.status_code == 422

    def test_login(self, client, user):
        resp = client.post("/auth/login", json={"email": "OWNER@salon.com", "password": OWNER_PASSWORD})
        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == user.id

    def test_login_wrong_password(self, client, user):
        resp = client.post("/auth/login", json={"email": user.email, "password": "wrong-one"})
        assert resp.status_code == 401

    def test_invalid_token(self, client):
        resp = client.get("/users/me", headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 401


class TestProfile:
    def test_update_profile(self, client, auth_headers):
        resp = client.put(
            "/users/me",
            json={"phone": "(11) 90000-1111", "address": {"number": "2000"}},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        assert resp.json()["phone"] == "(11) 90000-1111"
        assert resp.json()["address"]["number"] == "2000"
        assert resp.json()["address"]["street"] == "Avenida Paulista"

    def test_email_taken_by_other_account(self, client, auth_headers, other_user):
        resp = client.put("/users/me", json={"email": other_user.email}, headers=auth_headers)
        assert resp.status_code == 409

    def test_change_password(self, client, auth_headers, user):
        resp = client.put(
            "/users/me/password",
            json={"currentPassword": OWNER_PASSWORD, "newPassword": "brand-new"},
            headers=auth_headers,
        )
        assert resp.status_code == 200

        login = client.post("/auth/login", json={"email": user.email, "password": "brand-new"})
        assert login.status_code == 200

    def test_change_password_wrong_current(self, client, auth_headers):
        resp = client.put(
            "/users/me/password",
            json={"currentPassword": "nope-nope", "newPassword": "brand-new"},
            headers=auth_headers,
        )
        assert resp.status_code == 409

    def test_whatsapp_messages_merge(self, client, auth_headers):
        resp = client.put(
            "/users/me/whatsapp-messages", json={"cancel": "Cancelado!"}, headers=auth_headers
        )

        messages = resp.json()["whatsappMessages"]
        assert messages["cancel"] == "Cancelado!"
        assert messages["confirm"] == DEFAULT_CONFIRM_MESSAGE


class TestAdminSeed:
    def test_seed_is_idempotent(self, db_session):
        service = UserService(db_session)

        first = service.seed_admin("Admin@Salon.com", "admin123")
        second = service.seed_admin("admin@salon.com", "other-pass")

        assert first.id == second.id
        assert first.email == "admin@salon.com"
