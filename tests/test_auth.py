import uuid

from todo_app import config
from todo_app.models import RevokedToken, User
from todo_app.utils.auth import create_token, verify_password

PASSWORD = "Password123"  # matches the make_user fixture default


def _register(client, **overrides):
    payload = {
        "name": "New User",
        "email": f"test_{uuid.uuid4().hex}@example.com",
        "password": "correct_horse_battery_staple",
        "password_confirmation": "correct_horse_battery_staple",
    }
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


class TestRegister:
    def test_register_returns_user_and_token(self, client, db):
        r = _register(client, name="Jane", email="jane@example.com")
        assert r.status_code == 201
        data = r.json()
        assert data["user"]["name"] == "Jane"
        assert data["user"]["email"] == "jane@example.com"
        assert "password" not in data["user"]
        assert data["token"]

        stored = db.query(User).filter(User.email == "jane@example.com").one()
        assert stored.password != "correct_horse_battery_staple"
        assert verify_password("correct_horse_battery_staple", stored.password)

    def test_token_from_register_works(self, client):
        token = _register(client).json()["token"]
        r = client.get("/auth/user", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 200

    def test_duplicate_email(self, client, user):
        r = _register(client, email=user.email)
        assert r.status_code == 422
        assert r.json()["errors"] == {"email": ["The email has already been taken."]}

    def test_password_confirmation_must_match(self, client):
        r = _register(client, password_confirmation="something_else")
        assert r.status_code == 422
        assert r.json()["errors"]["password_confirmation"] == ["The password field confirmation does not match."]

    def test_password_too_short(self, client):
        r = _register(client, password="short", password_confirmation="short")
        assert r.status_code == 422
        assert "password" in r.json()["errors"]

    def test_password_too_long(self, client):
        password = "a" * 100  # 100 bytes > bcrypt 72
        r = _register(client, password=password, password_confirmation=password)
        assert r.status_code == 422
        text = r.text.lower()
        assert "password" in text and ("too long" in text or "72" in text)

    def test_required_fields(self, client):
        r = client.post("/auth/register", json={"password": PASSWORD})
        assert r.status_code == 422
        assert {"name", "email", "password_confirmation"} <= set(r.json()["errors"])

    def test_invalid_email(self, client):
        r = _register(client, email="not_an_email")
        assert r.status_code == 422
        assert "email" in r.json()["errors"]


class TestLogin:
    def test_login(self, client, user):
        r = client.post("/auth/login", json={"email": user.email, "password": PASSWORD})
        assert r.status_code == 200
        data = r.json()
        assert data["user"]["id"] == user.id
        assert data["token"]

    def test_wrong_password(self, client, user):
        r = client.post("/auth/login", json={"email": user.email, "password": "WrongPass123!"})
        assert r.status_code == 401
        assert r.json() == {"message": "Invalid login credentials"}

    def test_unknown_email(self, client):
        r = client.post("/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})
        assert r.status_code == 401

    def test_too_long_password_fails(self, client, user):
        r = client.post("/auth/login", json={"email": user.email, "password": "a" * 100})
        assert r.status_code == 401

    def test_missing_fields(self, client):
        r = client.post("/auth/login", json={})
        assert r.status_code == 422


class TestCurrentUser:
    def test_current_user(self, client, user, auth_headers):
        r = client.get("/auth/user", headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["email"] == user.email
        assert "password" not in r.json()

    def test_legacy_route(self, client, user, auth_headers):
        r = client.get("/user", headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["id"] == user.id

    def test_missing_token(self, client):
        r = client.get("/auth/user")
        assert r.status_code == 401
        assert r.headers["www-authenticate"] == "Bearer"

    def test_wrong_scheme(self, client, user):
        r = client.get("/auth/user", headers={"Authorization": f"Token {create_token(user.id)}"})
        assert r.status_code == 401

    def test_invalid_token(self, client):
        r = client.get("/auth/user", headers={"Authorization": "Bearer invalid"})
        assert r.status_code == 401
        assert r.json()["message"] == "Invalid token"

    def test_expired_token(self, client, user, monkeypatch):
        monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_MINUTES", -1)
        token = create_token(user.id)
        r = client.get("/auth/user", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert "expired" in r.json()["message"].lower()

    def test_deleted_user(self, client, db, user, auth_headers):
        db.delete(user)
        db.commit()
        r = client.get("/auth/user", headers=auth_headers)
        assert r.status_code == 401


class TestLogout:
    def test_logout_revokes_token(self, client, db, user, auth_headers):
        r = client.post("/auth/logout", headers=auth_headers)
        assert r.status_code == 200
        assert r.json() == {"message": "Logged out successfully"}
        assert db.query(RevokedToken).count() == 1

        r = client.get("/todos", headers=auth_headers)
        assert r.status_code == 401
        assert r.json()["message"] == "Token has been revoked"

    def test_other_sessions_survive(self, client, user):
        first = {"Authorization": f"Bearer {create_token(user.id)}"}
        second = {"Authorization": f"Bearer {create_token(user.id)}"}
        assert client.post("/auth/logout", headers=first).status_code == 200
        assert client.get("/auth/user", headers=second).status_code == 200

    def test_requires_token(self, client):
        assert client.post("/auth/logout").status_code == 401


class TestUpdateProfile:
    def test_update_name(self, client, user, auth_headers):
        r = client.put("/auth/user", json={"name": "Alice Updated"}, headers=auth_headers)
        assert r.status_code == 200
        assert r.json()["name"] == "Alice Updated"
        assert r.json()["email"] == user.email

    def test_keep_own_email(self, client, user, auth_headers):
        r = client.put("/auth/user", json={"email": user.email, "name": "Same"}, headers=auth_headers)
        assert r.status_code == 200

    def test_email_taken(self, client, other_user, auth_headers):
        r = client.put("/auth/user", json={"email": other_user.email}, headers=auth_headers)
        assert r.status_code == 422
        assert r.json()["errors"] == {"email": ["The email has already been taken."]}

    def test_blank_name(self, client, auth_headers):
        r = client.put("/auth/user", json={"name": ""}, headers=auth_headers)
        assert r.status_code == 422
        assert r.json()["errors"]["name"] == ["The name field is required."]

    def test_change_password(self, client, user, auth_headers):
        r = client.put(
            "/auth/user",
            json={"password": "a_new_password", "password_confirmation": "a_new_password"},
            headers=auth_headers,
        )
        assert r.status_code == 200

        assert client.post("/auth/login", json={"email": user.email, "password": PASSWORD}).status_code == 401
        assert client.post("/auth/login", json={"email": user.email, "password": "a_new_password"}).status_code == 200

    def test_password_needs_confirmation(self, client, auth_headers):
        r = client.put("/auth/user", json={"password": "a_new_password"}, headers=auth_headers)
        assert r.status_code == 422
        assert "password" in r.json()["errors"]

    def test_requires_token(self, client):
        assert client.put("/auth/user", json={"name": "x"}).status_code == 401
