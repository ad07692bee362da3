from tests.conftest import MASTER_EMAIL, MASTER_PASSWORD, auth_headers, master_headers, register_user


class TestLogin:
    def test_wrong_password_is_rejected(self, client):
        resp = client.post("/login", json={"email": MASTER_EMAIL, "password": "wrongpass"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "Invalid credentials"

    def test_unknown_email_gets_the_same_error(self, client):
        resp = client.post("/login", json={"email": "nobody@example.com", "password": "wrongpass"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "Invalid credentials"

    def test_correct_password_returns_token_and_profile(self, client):
        resp = client.post("/login", json={"email": MASTER_EMAIL, "password": MASTER_PASSWORD})
        assert resp.status_code == 200
        body = resp.json()
        assert body["token"]
        assert body["role"] == "admin"
        assert body["userEmail"] == MASTER_EMAIL
        assert body["userName"] == "Master Admin"
        assert body["isMasterAdmin"] is True
        assert "expiresAt" in body

    def test_login_accepts_legacy_field_name_and_email_case(self, client):
        resp = client.post("/login", json={"email": "MASTER@example.com", "senha": MASTER_PASSWORD})
        assert resp.status_code == 200

    def test_other_admin_is_not_master(self, client):
        register_user(client, "Second Admin", "admin2@example.com", "admin")
        resp = client.post("/login", json={"email": "admin2@example.com", "password": "password123"})
        assert resp.status_code == 200
        assert resp.json()["isMasterAdmin"] is False


class TestTokenChecks:
    def test_missing_token(self, client):
        resp = client.get("/uploads")
        assert resp.status_code == 401
        assert "error" in resp.json()

    def test_non_bearer_scheme(self, client):
        resp = client.get("/uploads", headers={"Authorization": "Basic abc"})
        assert resp.status_code == 401

    def test_garbage_token(self, client):
        resp = client.get("/uploads", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "Invalid or expired token"


class TestRegister:
    def test_master_admin_creates_user(self, client):
        resp = client.post(
            "/cadastrar",
            headers=master_headers(client),
            json={"nome": "Carrier", "email": "Carrier@Example.com", "senha": "password123", "role": "carrier"},
        )
        assert resp.status_code == 201, resp.text
        assert resp.json()["role"] == "carrier"
        assert client.post("/login", json={"email": "carrier@example.com", "password": "password123"}).status_code == 200

    def test_duplicate_email_is_rejected(self, client):
        register_user(client, "First", "dup@example.com", "carrier")
        resp = client.post(
            "/cadastrar",
            headers=master_headers(client),
            json={"name": "Second", "email": "DUP@example.com", "password": "password123", "role": "collaborator"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Email is already registered"

    def test_other_admin_is_forbidden(self, client):
        register_user(client, "Second Admin", "admin2@example.com", "admin")
        resp = client.post(
            "/cadastrar",
            headers=auth_headers(client, "admin2@example.com"),
            json={"name": "X", "email": "x@example.com", "password": "password123", "role": "carrier"},
        )
        assert resp.status_code == 403

    def test_collaborator_is_forbidden(self, client):
        register_user(client, "Colab", "colab@example.com", "collaborator")
        resp = client.post(
            "/cadastrar",
            headers=auth_headers(client, "colab@example.com"),
            json={"name": "X", "email": "x@example.com", "password": "password123", "role": "carrier"},
        )
        assert resp.status_code == 403

    def test_requires_token(self, client):
        resp = client.post(
            "/cadastrar",
            json={"name": "X", "email": "x@example.com", "password": "password123", "role": "carrier"},
        )
        assert resp.status_code == 401

    def test_invalid_role(self, client):
        resp = client.post(
            "/cadastrar",
            headers=master_headers(client),
            json={"name": "X", "email": "x@example.com", "password": "password123", "role": "superuser"},
        )
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "role"

    def test_short_password(self, client):
        resp = client.post(
            "/cadastrar",
            headers=master_headers(client),
            json={"name": "X", "email": "x@example.com", "password": "short", "role": "carrier"},
        )
        assert resp.status_code == 400
        assert any(error["field"] == "password" for error in resp.json()["errors"])

    def test_malformed_email(self, client):
        resp = client.post(
            "/cadastrar",
            headers=master_headers(client),
            json={"name": "X", "email": "not-an-email", "password": "password123", "role": "carrier"},
        )
        assert resp.status_code == 400
        assert any(error["field"] == "email" for error in resp.json()["errors"])


class TestListUsers:
    def test_collaborator_lists_users_by_name(self, client):
        register_user(client, "Zeca", "zeca@example.com", "carrier")
        register_user(client, "Ana", "ana@example.com", "collaborator")
        resp = client.get("/usuarios", headers=auth_headers(client, "ana@example.com"))
        assert resp.status_code == 200
        users = resp.json()
        assert [user["nome"] for user in users] == ["Ana", "Master Admin", "Zeca"]
        assert set(users[0]) == {"id", "nome", "email", "role"}

    def test_carrier_is_forbidden(self, client):
        register_user(client, "Carrier", "carrier@example.com", "carrier")
        resp = client.get("/usuarios", headers=auth_headers(client, "carrier@example.com"))
        assert resp.status_code == 403
