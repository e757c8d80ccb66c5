"""
Python client for the AniEx REST API.

Reads go through a QueryCache so repeated lookups don't hit the server; every
mutation invalidates the paths it can affect. Nothing is retried: a failed
request raises ApiError once and the caller decides what to do.
"""
import logging
from typing import Any, Iterable, List, Literal, Optional, Type, TypeVar, Union
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, TypeAdapter

from aniex.client.cache import QueryCache
from aniex.schemas.anime import AnimeRead
from aniex.schemas.episode import EpisodeRead
from aniex.schemas.movie import MovieRead
from aniex.schemas.server import ServerRead
from aniex.schemas.stats import CatalogStatsResponse
from aniex.schemas.user import UserRead
from aniex.schemas.video_source import VideoSourceRead

logger = logging.getLogger(__name__)

T = TypeVar("T")
OnUnauthorized = Literal["throw", "return_none"]
Payload = Union[BaseModel, dict]

STATS_PATH = "/api/admin/stats"


class ApiError(Exception):
    """Non-2xx response. `errors` carries per-field details for 400s."""

    def __init__(self, status: int, message: str, errors: Optional[List[dict]] = None):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.errors = errors or []


class CatalogClient:

    def __init__(self, base_url: str = "http://localhost:8000", http: Optional[httpx.Client] = None,
                 cache: Optional[QueryCache] = None):
        # httpx.Client keeps the session cookie between requests
        self._http = http if http is not None else httpx.Client(base_url=base_url)
        self.cache = cache if cache is not None else QueryCache()

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # --- plumbing ---

    def _query(self, path: str, model: Any, params: Optional[dict] = None,
               on_401: OnUnauthorized = "throw"):
        params = {k: v for k, v in (params or {}).items() if v is not None}
        key = f"{path}?{urlencode(params)}" if params else path
        adapter = TypeAdapter(model)

        def fetch():
            response = self._http.get(path, params=params or None)
            if response.status_code == 401 and on_401 == "return_none":
                return None
            _raise_for_status(response)
            return adapter.validate_python(response.json())

        return self.cache.get_or_fetch(key, fetch)

    def _mutate(self, method: str, path: str, data: Optional[Payload] = None,
                invalidates: Iterable[str] = (), model: Optional[Type[T]] = None):
        response = self._http.request(method, path, json=_to_json(data) if data is not None else None)
        _raise_for_status(response)

        invalidates = tuple(invalidates)
        if invalidates:
            self.cache.invalidate(*invalidates)

        body = response.json() if response.content else None
        if model is not None and body is not None:
            return model.model_validate(body)
        return body

    # --- auth ---

    def register(self, username: str, password: str) -> UserRead:
        user = self._mutate("POST", "/api/register", {"username": username, "password": password}, model=UserRead)
        # Anything cached belonged to the previous identity
        self.cache.clear()
        return user

    def login(self, username: str, password: str) -> UserRead:
        user = self._mutate("POST", "/api/login", {"username": username, "password": password}, model=UserRead)
        self.cache.clear()
        return user

    def logout(self) -> None:
        self._mutate("POST", "/api/logout")
        self.cache.clear()

    def current_user(self) -> Optional[UserRead]:
        """None when logged out, rather than an error."""
        return self._query("/api/user", UserRead, on_401="return_none")

    # --- anime ---

    def list_anime(self, search: Optional[str] = None) -> List[AnimeRead]:
        return self._query("/api/anime", List[AnimeRead], params={"search": search or None})

    def get_anime(self, anime_id: int) -> AnimeRead:
        return self._query(f"/api/anime/{anime_id}", AnimeRead)

    def anime_episodes(self, anime_id: int) -> List[EpisodeRead]:
        return self._query(f"/api/anime/{anime_id}/episodes", List[EpisodeRead])

    def create_anime(self, data: Payload) -> AnimeRead:
        return self._mutate("POST", "/api/admin/anime", data, ("/api/anime", STATS_PATH), AnimeRead)

    def update_anime(self, anime_id: int, data: Payload) -> AnimeRead:
        return self._mutate("PUT", f"/api/admin/anime/{anime_id}", data, ("/api/anime", STATS_PATH), AnimeRead)

    def delete_anime(self, anime_id: int) -> dict:
        # Episodes and their sources go with the series
        return self._mutate("DELETE", f"/api/admin/anime/{anime_id}",
                            invalidates=("/api/anime", "/api/episodes", "/api/admin/sources", STATS_PATH))

    # --- movies ---

    def list_movies(self, search: Optional[str] = None) -> List[MovieRead]:
        return self._query("/api/movies", List[MovieRead], params={"search": search or None})

    def get_movie(self, movie_id: int) -> MovieRead:
        return self._query(f"/api/movies/{movie_id}", MovieRead)

    def movie_sources(self, movie_id: int) -> List[VideoSourceRead]:
        return self._query(f"/api/movies/{movie_id}/sources", List[VideoSourceRead])

    def create_movie(self, data: Payload) -> MovieRead:
        return self._mutate("POST", "/api/admin/movies", data, ("/api/movies", STATS_PATH), MovieRead)

    def update_movie(self, movie_id: int, data: Payload) -> MovieRead:
        return self._mutate("PUT", f"/api/admin/movies/{movie_id}", data, ("/api/movies", STATS_PATH), MovieRead)

    def delete_movie(self, movie_id: int) -> dict:
        return self._mutate("DELETE", f"/api/admin/movies/{movie_id}",
                            invalidates=("/api/movies", "/api/admin/sources", STATS_PATH))

    # --- episodes ---

    def list_episodes(self) -> List[EpisodeRead]:
        return self._query("/api/episodes", List[EpisodeRead])

    def get_episode(self, episode_id: int) -> EpisodeRead:
        return self._query(f"/api/episodes/{episode_id}", EpisodeRead)

    def episode_sources(self, episode_id: int) -> List[VideoSourceRead]:
        return self._query(f"/api/episodes/{episode_id}/sources", List[VideoSourceRead])

    def create_episode(self, data: Payload) -> EpisodeRead:
        # /api/anime covers every /api/anime/{id}/episodes list
        return self._mutate("POST", "/api/admin/episodes", data,
                            ("/api/episodes", "/api/anime", STATS_PATH), EpisodeRead)

    def update_episode(self, episode_id: int, data: Payload) -> EpisodeRead:
        return self._mutate("PUT", f"/api/admin/episodes/{episode_id}", data,
                            ("/api/episodes", "/api/anime", STATS_PATH), EpisodeRead)

    def delete_episode(self, episode_id: int) -> dict:
        return self._mutate("DELETE", f"/api/admin/episodes/{episode_id}",
                            invalidates=("/api/episodes", "/api/anime", "/api/admin/sources", STATS_PATH))

    # --- video sources ---

    def list_sources(self) -> List[VideoSourceRead]:
        return self._query("/api/admin/sources", List[VideoSourceRead])

    def create_source(self, data: Payload) -> VideoSourceRead:
        return self._mutate("POST", "/api/admin/sources", data, _SOURCE_PATHS, VideoSourceRead)

    def update_source(self, source_id: int, data: Payload) -> VideoSourceRead:
        return self._mutate("PUT", f"/api/admin/sources/{source_id}", data, _SOURCE_PATHS, VideoSourceRead)

    def delete_source(self, source_id: int) -> dict:
        return self._mutate("DELETE", f"/api/admin/sources/{source_id}", invalidates=_SOURCE_PATHS)

    # --- servers ---

    def list_servers(self) -> List[ServerRead]:
        return self._query("/api/servers", List[ServerRead])

    def create_server(self, data: Payload) -> ServerRead:
        return self._mutate("POST", "/api/admin/servers", data, ("/api/servers", STATS_PATH), ServerRead)

    def update_server(self, server_id: int, data: Payload) -> ServerRead:
        return self._mutate("PUT", f"/api/admin/servers/{server_id}", data, ("/api/servers", STATS_PATH), ServerRead)

    def delete_server(self, server_id: int) -> dict:
        return self._mutate("DELETE", f"/api/admin/servers/{server_id}", invalidates=("/api/servers", STATS_PATH))

    # --- admin ---

    def list_users(self) -> List[UserRead]:
        return self._query("/api/admin/users", List[UserRead])

    def stats(self) -> CatalogStatsResponse:
        return self._query(STATS_PATH, CatalogStatsResponse)


# Sources are listed under their episode or movie, so both trees go stale
_SOURCE_PATHS = ("/api/episodes", "/api/movies", "/api/admin/sources")


def _to_json(data: Payload) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return data


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return

    message = response.reason_phrase or "Request failed"
    errors: List[dict] = []
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message", message)
        errors = body.get("errors") or []

    logger.debug(f"{response.request.method} {response.request.url} failed with {response.status_code}: {message}")
    raise ApiError(response.status_code, message, errors)
