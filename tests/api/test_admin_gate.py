import pytest

from aniex.models.anime import AnimeSeries

ADMIN_ENDPOINTS = [
    ("get", "/api/admin/users"),
    ("get", "/api/admin/stats"),
    ("get", "/api/admin/sources"),
    ("post", "/api/admin/anime"),
    ("put", "/api/admin/anime/1"),
    ("delete", "/api/admin/anime/1"),
    ("post", "/api/admin/movies"),
    ("delete", "/api/admin/movies/1"),
    ("post", "/api/admin/episodes"),
    ("post", "/api/admin/sources"),
    ("post", "/api/admin/servers"),
    ("delete", "/api/admin/servers/9999"),
]


@pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS)
def test_admin_routes_require_login(client, method, path):
    response = client.request(method.upper(), path, json={})
    assert response.status_code == 401
    # Nothing but the message; in particular no validation detail for the body
    assert response.json() == {"message": "Not authenticated"}


@pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS)
def test_admin_routes_reject_non_admins(auth_client, method, path):
    response = auth_client.request(method.upper(), path, json={})
    assert response.status_code == 403
    assert response.json() == {"message": "Not authorized"}


def test_rejected_create_does_not_write(auth_client, db):
    payload = {"title": "Sneaky", "description": "Should never be stored at all."}
    assert auth_client.post("/api/admin/anime", json=payload).status_code == 403
    assert db.query(AnimeSeries).count() == 0


def test_user_list_for_admin_hides_password_hashes(admin_client, normal_user):
    response = admin_client.get("/api/admin/users")
    assert response.status_code == 200

    users = response.json()
    assert {u["username"] for u in users} == {"admin", "testuser"}
    for user in users:
        assert "passwordHash" not in user and "password" not in user


def test_public_routes_do_not_need_login(client):
    for path in ("/api/anime", "/api/movies", "/api/episodes", "/api/servers"):
        assert client.get(path).status_code == 200
