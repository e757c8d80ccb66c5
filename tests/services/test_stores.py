import pytest
from sqlalchemy.exc import OperationalError

from aniex.core.errors import InvalidData, StoreError
from aniex.models.episode import Episode
from aniex.models.video_source import VideoSource
from aniex.schemas.anime import AnimeCreate, AnimeUpdate
from aniex.services.anime import AnimeStore
from aniex.services.episodes import EpisodeStore
from aniex.services.movies import MovieStore
from aniex.services.video_sources import VideoSourceStore


def test_absent_records_are_not_errors(db):
    store = AnimeStore(db)
    assert store.get(1) is None
    assert store.update(1, {"title": "Nope"}) is None
    assert store.delete(1) is False


def test_create_then_get(db):
    store = AnimeStore(db)
    created = store.create(AnimeCreate(
        title="Mushishi",
        description="A wanderer studies the strange lifeforms called mushi.",
        genres="Mystery, Slice of Life",
    ))

    fetched = store.get(created.id)
    assert fetched.title == "Mushishi"
    assert fetched.genres == ["Mystery", "Slice of Life"]
    assert fetched.status == "ongoing"
    assert fetched.created_at is not None


def test_partial_update_keeps_other_fields(db, sample_anime):
    store = AnimeStore(db)
    updated = store.update(sample_anime.id, AnimeUpdate(status="completed"))

    assert updated.status == "completed"
    assert updated.title == "Frieren"
    assert updated.year == 2023


def test_search_matches_title_description_and_genre(db, sample_anime):
    store = AnimeStore(db)
    assert store.search("FRIER") == [sample_anime]
    assert store.search("elf mage") == [sample_anime]
    assert store.search("adventure") == [sample_anime]
    assert store.search("mecha") == []
    assert store.search("") == store.list()
    assert store.search(None) == store.list()


def test_movie_search_over_genres(db, sample_movie):
    assert MovieStore(db).search("roman") == [sample_movie]


def test_delete_anime_cascades(db, sample_episodes):
    episode = sample_episodes[0]
    db.add(VideoSource(episode_id=episode.id, server_name="Main", server_number=1, video_url="https://x.example"))
    db.commit()

    assert AnimeStore(db).delete(episode.anime_id) is True
    assert db.query(Episode).count() == 0
    assert db.query(VideoSource).count() == 0


def test_episodes_by_anime_are_numbered(db, sample_episodes):
    numbers = [ep.episode_number for ep in EpisodeStore(db).by_anime(sample_episodes[0].anime_id)]
    assert numbers == [1, 2, 3]
    assert EpisodeStore(db).by_anime(999) == []


def test_episode_store_checks_parent(db):
    with pytest.raises(InvalidData) as exc:
        EpisodeStore(db).create({"anime_id": 42, "title": "Lost", "episode_number": 1})
    assert exc.value.errors == [{"field": "animeId", "message": "Anime not found"}]


def test_source_store_enforces_one_parent(db, sample_episodes, sample_movie):
    store = VideoSourceStore(db)
    base = {"server_name": "Main", "server_number": 1, "video_url": "https://x.example"}

    with pytest.raises(InvalidData):
        store.create(dict(base))
    with pytest.raises(InvalidData):
        store.create(dict(base, episode_id=sample_episodes[0].id, movie_id=sample_movie.id))

    source = store.create(dict(base, movie_id=sample_movie.id))
    assert store.by_movie(sample_movie.id) == [source]
    assert store.by_episode(sample_episodes[0].id) == []


def test_commit_failure_raises_store_error(db, monkeypatch):
    def failing_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", failing_commit)

    with pytest.raises(StoreError) as exc:
        AnimeStore(db).create({"title": "Doomed", "description": "This row never lands.", "genres": []})
    assert isinstance(exc.value.original, OperationalError)


def test_out_of_range_integer_raises_store_error(db):
    store = AnimeStore(db)
    with pytest.raises(StoreError):
        store.create({"title": "Overflow", "description": "Bypasses schema validation.", "genres": [], "year": 10**20})

    # The session was rolled back and is usable again
    assert store.count() == 0
