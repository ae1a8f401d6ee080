from medikey.core import security
from tests.conftest import API


class TestRegister:
    def test_register_creates_user(self, client):
        response = client.post(
            f"{API}/auth/register",
            json={"username": "carol", "password": "secret123", "fullName": "Carol", "email": "carol@example.com"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert isinstance(body["id"], int)

    def test_duplicate_username_rejected(self, client, alice):
        response = client.post(
            f"{API}/auth/register",
            json={"username": "alice", "password": "secret123", "fullName": "Other", "email": "other@example.com"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Username already exists"

    def test_duplicate_email_rejected(self, client, alice):
        response = client.post(
            f"{API}/auth/register",
            json={"username": "alice2", "password": "secret123", "fullName": "Other", "email": "alice@example.com"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    def test_short_password_rejected(self, client):
        response = client.post(
            f"{API}/auth/register",
            json={"username": "dave", "password": "123", "fullName": "Dave", "email": "dave@example.com"},
        )
        assert response.status_code == 422


class TestLogin:
    def test_login_returns_token(self, client, alice):
        response = client.post(f"{API}/auth/login", json={"username": "alice", "password": "secret123"})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"] == {"id": alice["id"], "username": "alice"}
        assert body["tokenType"] == "bearer"
        assert body["expiresIn"] > 0

    def test_wrong_password_is_401(self, client, alice):
        response = client.post(f"{API}/auth/login", json={"username": "alice", "password": "wrong-password"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_user_is_401(self, client):
        response = client.post(f"{API}/auth/login", json={"username": "nobody", "password": "whatever"})
        assert response.status_code == 401

    def test_oauth2_token_endpoint(self, client, alice):
        response = client.post(f"{API}/auth/token", data={"username": "alice", "password": "secret123"})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.status_code == 200


class TestSession:
    def test_me_hides_password(self, client, alice):
        response = client.get(f"{API}/auth/me", headers=alice["headers"])
        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "alice"
        assert body["email"] == "alice@example.com"
        assert "password" not in body
        assert "hashedPassword" not in body

    def test_logout(self, client, alice):
        response = client.post(f"{API}/auth/logout", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json() == {"message": "Logout successful"}

    def test_token_of_missing_user_is_401(self, client):
        token = security.create_access_token(9999)
        response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
