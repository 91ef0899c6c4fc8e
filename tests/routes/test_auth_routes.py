"""Tests for login, password update and first-time setup routes."""


def _setup_admin(client, **overrides):
    payload = {"email": "admin@example.com", "name": "Admin", "password": "correct-horse"}
    payload.update(overrides)
    return client.post("/setup", json=payload)


class TestSetup:

    def test_first_admin(self, client, db_session):
        response = _setup_admin(client)

        assert response.status_code == 201
        user = response.get_json()["user"]
        assert user["user_type"] == "admin"
        assert user["invite_status"] == "accepted"

    def test_only_once(self, client, db_session):
        _setup_admin(client)
        response = _setup_admin(client, email="second@example.com")
        assert response.status_code == 409
        assert response.get_json()["error"] == "Setup has already been completed"

    def test_short_password(self, client, db_session):
        response = _setup_admin(client, password="short")
        assert response.status_code == 400


class TestLogin:

    def test_login(self, client, db_session):
        _setup_admin(client)

        response = client.post("/auth/login", json={"email": "Admin@Example.com", "password": "correct-horse"})

        assert response.status_code == 200
        body = response.get_json()
        assert body["user"]["email"] == "admin@example.com"
        assert body["session"]["token_type"] == "bearer"

    def test_bad_password(self, client, db_session):
        _setup_admin(client)
        response = client.post("/auth/login", json={"email": "admin@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.get_json() == {"success": False, "error": "Invalid email or password"}

    def test_missing_fields(self, client, db_session):
        response = client.post("/auth/login", json={})
        assert response.status_code == 400

    def test_numeric_email(self, client, db_session):
        response = client.post("/auth/login", json={"email": 12345, "password": "x"})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Email and password are required"


class TestUpdatePassword:

    def test_new_password_works(self, client, db_session):
        temp = client.post("/users", json={
            "email": "jane@example.com",
            "name": "Jane",
            "type": "advisor",
            "company_relationship": "Acme Corp",
            "send_invite": False,
        }).get_json()["temporary_password"]
        assert client.post("/auth/login", json={"email": "jane@example.com", "password": temp}).status_code == 200

        response = client.post("/auth/update-password", json={
            "email": "jane@example.com", "newPassword": "my-own-password",
        })

        assert response.status_code == 200
        assert response.get_json()["user"]["invite_status"] == "accepted"
        assert client.post("/auth/login", json={"email": "jane@example.com", "password": temp}).status_code == 401
        assert client.post("/auth/login", json={
            "email": "jane@example.com", "password": "my-own-password",
        }).status_code == 200

    def test_unknown_user(self, client, db_session):
        response = client.post("/auth/update-password", json={"email": "ghost@example.com", "password": "long-enough"})
        assert response.status_code == 404


class TestDebugUser:

    def test_linked_user(self, client, db_session):
        _setup_admin(client)

        body = client.get("/debug/user/admin@example.com").get_json()

        assert body["in_user_store"] is True
        assert body["in_auth_provider"] is True
        assert body["linked"] is True

    def test_unknown_email(self, client, db_session):
        body = client.get("/debug/user/ghost@example.com").get_json()
        assert body["in_user_store"] is False
        assert body["in_auth_provider"] is False
        assert body["linked"] is False
