from typing import List

from aniex.schemas.anime import AnimeRead
from aniex.schemas.common import CamelModel
from aniex.schemas.episode import EpisodeRead


class CatalogStatsResponse(CamelModel):
    total_anime: int
    total_movies: int
    total_episodes: int
    total_servers: int
    online_servers: int
    total_users: int
    recent_anime: List[AnimeRead]
    recent_episodes: List[EpisodeRead]
