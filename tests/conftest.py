import os
import tempfile

# Settings are read at import time, so the environment must be in place first.
_TMP_DIR = tempfile.mkdtemp(prefix="aniex-tests-")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["CACHE_DIR"] = os.path.join(_TMP_DIR, "cache")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock

from aniex.api.deps import get_db
from aniex.core.security import get_password_hash
from aniex.database import Base, SessionLocal
from aniex.main import app
from aniex.models.anime import AnimeSeries
from aniex.models.episode import Episode
from aniex.models.movie import Movie
from aniex.models.user import User

NORMAL_PASSWORD = "test1234"
ADMIN_PASSWORD = "admin1234"


# --- FIXTURE START ---
@pytest.fixture(scope="session", autouse=True)
def mock_background_services():
    """
    Global patch to prevent the scheduler thread from starting during tests.
    """
    from aniex.services.scheduler import scheduler_service

    scheduler_service.start = MagicMock()
    scheduler_service.stop = MagicMock()


# --- FIXTURE END ---

# 1. SETUP TEST DATABASE
# SQLite in-memory with StaticPool so every session in a test sees the same data.
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# 2. DB SESSION FIXTURE
@pytest.fixture(scope="function")
def db():
    """
    Creates a fresh database for every single test case.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    yield session

    # Cleanup
    session.close()
    Base.metadata.drop_all(bind=engine)


# 3. CLIENT FIXTURE (Unauthenticated)
@pytest.fixture(scope="function")
def client(db) -> Generator:
    """
    Returns a TestClient with the database dependency overridden.
    """

    def override_get_db():
        try:
            yield db
        finally:
            # The 'db' fixture handles the teardown at the end of the test function.
            pass

    app.dependency_overrides[get_db] = override_get_db
    # The admin gate middleware opens its own sessions
    app.state.session_factory = TestingSessionLocal

    with TestClient(app) as c:
        yield c

    # Reset overrides after test
    app.dependency_overrides.clear()
    app.state.session_factory = SessionLocal


# 4. USER FIXTURES
@pytest.fixture(scope="function")
def normal_user(db):
    user = User(
        username="testuser",
        password_hash=get_password_hash(NORMAL_PASSWORD),
        is_admin=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def admin_user(db):
    user = User(
        username="admin",
        password_hash=get_password_hash(ADMIN_PASSWORD),
        is_admin=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# 5. AUTHENTICATED CLIENT FIXTURES
# These log in through the real endpoint so the session cookie and the gate are exercised.
@pytest.fixture(scope="function")
def auth_client(client, normal_user):
    response = client.post("/api/login", json={"username": normal_user.username, "password": NORMAL_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture(scope="function")
def admin_client(client, admin_user):
    response = client.post("/api/login", json={"username": admin_user.username, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


# 6. CATALOG FIXTURES
@pytest.fixture(scope="function")
def sample_anime(db):
    anime = AnimeSeries(
        title="Frieren",
        description="An elf mage reflects on a finished quest.",
        genres=["Fantasy", "Adventure"],
        status="ongoing",
        year=2023,
    )
    db.add(anime)
    db.commit()
    db.refresh(anime)
    return anime


@pytest.fixture(scope="function")
def sample_episodes(db, sample_anime):
    # Inserted out of order on purpose
    episodes = [
        Episode(anime_id=sample_anime.id, title="The Journey's End", episode_number=1),
        Episode(anime_id=sample_anime.id, title="Killing Magic", episode_number=3),
        Episode(anime_id=sample_anime.id, title="It Didn't Have to Be Magic", episode_number=2),
    ]
    db.add_all(episodes)
    db.commit()
    for ep in episodes:
        db.refresh(ep)
    return episodes


@pytest.fixture(scope="function")
def sample_movie(db):
    movie = Movie(
        title="Your Name",
        description="Two teenagers swap bodies across distance and time.",
        genres=["Romance", "Drama"],
        duration=106,
        year=2016,
    )
    db.add(movie)
    db.commit()
    db.refresh(movie)
    return movie
