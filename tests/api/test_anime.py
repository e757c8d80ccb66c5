from aniex.models.episode import Episode
from aniex.models.video_source import VideoSource


def test_create_anime_scenario(admin_client):
    response = admin_client.post("/api/admin/anime", json={
        "title": "Test",
        "description": "A" * 15,
        "status": "ongoing",
    })
    assert response.status_code == 201

    body = response.json()
    assert body["id"] == 1
    assert body["createdAt"] is not None
    assert body["status"] == "ongoing"
    assert body["genres"] == []


def test_partial_update_keeps_other_fields(admin_client):
    created = admin_client.post("/api/admin/anime", json={
        "title": "Test",
        "description": "A" * 15,
        "status": "ongoing",
        "genres": ["Action"],
    }).json()

    response = admin_client.put(f"/api/admin/anime/{created['id']}", json={"year": 2021})
    assert response.status_code == 200

    fetched = admin_client.get(f"/api/anime/{created['id']}").json()
    assert fetched["title"] == "Test"
    assert fetched["year"] == 2021
    assert fetched["genres"] == ["Action"]
    assert fetched["status"] == "ongoing"


def test_create_anime_validation_errors(admin_client):
    response = admin_client.post("/api/admin/anime", json={
        "title": "",
        "description": "too short",
        "status": "cancelled",
    })
    assert response.status_code == 400

    body = response.json()
    assert body["message"] == "Invalid data"
    fields = {err["field"] for err in body["errors"]}
    assert {"title", "description", "status"} <= fields


def test_numeric_text_and_comma_genres_are_coerced(admin_client):
    response = admin_client.post("/api/admin/anime", json={
        "title": "Vinland Saga",
        "description": "A young warrior seeks revenge in Viking-age Europe.",
        "year": "2019",
        "genres": "Action, Historical, ,Drama",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["year"] == 2019
    assert body["genres"] == ["Action", "Historical", "Drama"]


def test_blank_year_becomes_null_and_bad_year_fails(admin_client):
    ok = admin_client.post("/api/admin/anime", json={
        "title": "Blank Year",
        "description": "Nobody remembers when this aired.",
        "year": "",
    })
    assert ok.status_code == 201
    assert ok.json()["year"] is None

    bad = admin_client.post("/api/admin/anime", json={
        "title": "Bad Year",
        "description": "This year is not a number at all.",
        "year": "abc",
    })
    assert bad.status_code == 400
    assert bad.json()["errors"][0]["field"] == "year"


def test_update_cannot_null_required_fields(admin_client, sample_anime):
    response = admin_client.put(f"/api/admin/anime/{sample_anime.id}", json={"title": None})
    assert response.status_code == 400


def test_get_missing_anime(client):
    response = client.get("/api/anime/42")
    assert response.status_code == 404
    assert response.json() == {"message": "Anime not found"}


def test_update_and_delete_missing_anime(admin_client):
    assert admin_client.put("/api/admin/anime/42", json={"year": 2000}).status_code == 404

    response = admin_client.delete("/api/admin/anime/42")
    assert response.status_code == 404
    assert response.json() == {"message": "Anime not found"}


def test_list_and_search_anime(client, db, sample_anime):
    response = client.get("/api/anime")
    assert [a["title"] for a in response.json()] == ["Frieren"]

    # Genre membership, case-insensitive
    assert len(client.get("/api/anime", params={"search": "fantasy"}).json()) == 1
    # Description match
    assert len(client.get("/api/anime", params={"search": "ELF MAGE"}).json()) == 1
    assert client.get("/api/anime", params={"search": "mecha"}).json() == []
    # Empty search is the whole list
    assert len(client.get("/api/anime", params={"search": ""}).json()) == 1


def test_episodes_sorted_by_number(client, sample_anime, sample_episodes):
    response = client.get(f"/api/anime/{sample_anime.id}/episodes")
    assert response.status_code == 200
    assert [ep["episodeNumber"] for ep in response.json()] == [1, 2, 3]


def test_episodes_for_unknown_anime_is_empty(client):
    response = client.get("/api/anime/999/episodes")
    assert response.status_code == 200
    assert response.json() == []


def test_delete_anime_cascades(admin_client, db, sample_anime, sample_episodes):
    db.add(VideoSource(episode_id=sample_episodes[0].id, server_name="Main", server_number=1,
                       video_url="https://player.example/1"))
    db.commit()

    response = admin_client.delete(f"/api/admin/anime/{sample_anime.id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Anime deleted successfully"}

    db.expire_all()
    assert db.query(Episode).count() == 0
    assert db.query(VideoSource).count() == 0


def test_year_out_of_range(admin_client):
    response = admin_client.post("/api/admin/anime", json={
        "title": "Far Future",
        "description": "A series set a very long time from now.",
        "year": 10**20,
    })
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "year"
