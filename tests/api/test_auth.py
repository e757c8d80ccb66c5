from aniex.config import settings
from aniex.models.user import User

NORMAL_PASSWORD = "test1234"


def test_register_creates_regular_user_and_logs_in(client):
    response = client.post("/api/register", json={"username": "newbie", "password": "secret123"})
    assert response.status_code == 201

    body = response.json()
    assert body["username"] == "newbie"
    assert body["isAdmin"] is False
    assert "password" not in body and "passwordHash" not in body

    # Registration also starts a session
    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["username"] == "newbie"


def test_register_privileged_looking_name_is_not_admin(client):
    """No username/password pair grants admin through registration"""
    response = client.post("/api/register", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 201
    assert response.json()["isAdmin"] is False


def test_register_duplicate_username(client, normal_user):
    response = client.post("/api/register", json={"username": "TestUser", "password": "whatever"})
    assert response.status_code == 400
    assert response.json()["message"] == "Username already exists"


def test_register_requires_fields(client):
    response = client.post("/api/register", json={"username": "   "})
    assert response.status_code == 400

    body = response.json()
    assert body["message"] == "Invalid data"
    fields = {err["field"] for err in body["errors"]}
    assert {"username", "password"} <= fields


def test_password_is_stored_hashed(client, db):
    client.post("/api/register", json={"username": "hashme", "password": "plaintext-pw"})
    user = db.query(User).filter(User.username == "hashme").first()
    assert user.password_hash != "plaintext-pw"
    assert user.password_hash.startswith("$pbkdf2-sha256$")


def test_login_bad_credentials(client, normal_user):
    response = client.post("/api/login", json={"username": "testuser", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid username or password"}


def test_login_unknown_user(client):
    response = client.post("/api/login", json={"username": "ghost", "password": "boo"})
    assert response.status_code == 401


def test_login_sets_hardened_cookie(client, normal_user):
    response = client.post("/api/login", json={"username": "testuser", "password": NORMAL_PASSWORD})
    assert response.status_code == 200
    assert response.json()["username"] == "testuser"

    cookie_header = response.headers["set-cookie"].lower()
    assert settings.session_cookie_name in cookie_header
    assert "httponly" in cookie_header
    assert "samesite=lax" in cookie_header
    # Secure is only set in production
    assert "; secure" not in cookie_header


def test_login_records_last_login(client, db, normal_user):
    assert normal_user.last_login is None
    client.post("/api/login", json={"username": "testuser", "password": NORMAL_PASSWORD})
    db.refresh(normal_user)
    assert normal_user.last_login is not None


def test_current_user_requires_session(client):
    response = client.get("/api/user")
    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated"}


def test_forged_cookie_is_rejected(client, normal_user):
    client.cookies.set(settings.session_cookie_name, "not-a-signed-token")
    assert client.get("/api/user").status_code == 401


def test_logout_ends_session(auth_client):
    assert auth_client.get("/api/user").status_code == 200

    response = auth_client.post("/api/logout")
    assert response.status_code == 200

    assert auth_client.get("/api/user").status_code == 401


def test_logout_when_logged_out_is_harmless(client):
    assert client.post("/api/logout").status_code == 200
