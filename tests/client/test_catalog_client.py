import pytest

from aniex.client.api import ApiError, CatalogClient
from aniex.schemas.anime import AnimeCreate

ADMIN_PASSWORD = "admin1234"


@pytest.fixture
def catalog(client):
    # TestClient is an httpx.Client, so the real request path is exercised
    return CatalogClient(http=client)


def test_current_user_when_logged_out(catalog):
    assert catalog.current_user() is None


def test_login_and_current_user(catalog, admin_user):
    user = catalog.login("admin", ADMIN_PASSWORD)
    assert user.is_admin is True
    assert catalog.current_user().username == "admin"


def test_bad_login_raises(catalog, admin_user):
    with pytest.raises(ApiError) as exc:
        catalog.login("admin", "nope")
    assert exc.value.status == 401
    assert exc.value.message == "Invalid username or password"


def test_reads_are_cached(catalog, db, sample_anime):
    first = catalog.list_anime()
    assert [a.title for a in first] == ["Frieren"]

    # Renamed behind the client's back: the cached list is still served
    sample_anime.title = "Renamed"
    db.commit()
    assert catalog.list_anime()[0].title == "Frieren"


def test_mutation_invalidates_related_queries(catalog, admin_user, sample_anime):
    catalog.login("admin", ADMIN_PASSWORD)
    assert len(catalog.list_anime()) == 1
    catalog.get_anime(sample_anime.id)

    catalog.create_anime(AnimeCreate(title="Dandadan", description="Aliens and ghosts, at once."))

    assert "/api/anime" not in catalog.cache
    assert f"/api/anime/{sample_anime.id}" not in catalog.cache
    assert len(catalog.list_anime()) == 2


def test_validation_errors_surface(catalog, admin_user):
    catalog.login("admin", ADMIN_PASSWORD)

    with pytest.raises(ApiError) as exc:
        catalog.create_server({"name": "", "number": 1})
    assert exc.value.status == 400
    assert exc.value.message == "Invalid data"
    assert exc.value.errors[0]["field"] == "name"


def test_missing_resource(catalog):
    with pytest.raises(ApiError) as exc:
        catalog.get_movie(404)
    assert exc.value.status == 404
    assert exc.value.message == "Movie not found"


def test_admin_calls_need_admin(catalog, normal_user):
    catalog.login("testuser", "test1234")
    with pytest.raises(ApiError) as exc:
        catalog.stats()
    assert exc.value.status == 403


def test_logout_clears_cache(catalog, admin_user, sample_anime):
    catalog.login("admin", ADMIN_PASSWORD)
    catalog.list_anime()
    catalog.stats()

    catalog.logout()
    assert catalog.cache.keys() == []
    assert catalog.current_user() is None
