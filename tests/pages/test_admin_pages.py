import pytest

ADMIN_PAGES = [
    "/admin",
    "/admin/anime",
    "/admin/movies",
    "/admin/episodes",
    "/admin/sources",
    "/admin/servers",
    "/admin/users",
    "/admin/settings",
]


def test_anonymous_visitor_is_sent_to_login(client):
    response = client.get("/admin/anime?q=x", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login?next=/admin/anime%3Fq%3Dx"


def test_non_admin_gets_forbidden_page(auth_client):
    response = auth_client.get("/admin")
    assert response.status_code == 403
    assert "Not authorized" in response.text


@pytest.mark.parametrize("path", ADMIN_PAGES)
def test_admin_pages_render(admin_client, sample_episodes, sample_movie, path):
    response = admin_client.get(path)
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]


def test_admin_episode_filter(admin_client, db, sample_episodes):
    anime_id = sample_episodes[0].anime_id
    response = admin_client.get("/admin/episodes", params={"anime_id": str(anime_id)})
    assert "Killing Magic" in response.text

    response = admin_client.get("/admin/episodes", params={"anime_id": str(anime_id + 1)})
    assert "Killing Magic" not in response.text


def test_settings_page_hides_secrets(admin_client):
    response = admin_client.get("/admin/settings")
    assert "test-secret-key" not in response.text
