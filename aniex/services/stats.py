from sqlalchemy.orm import Session

from aniex.services.anime import AnimeStore
from aniex.services.episodes import EpisodeStore
from aniex.services.movies import MovieStore
from aniex.services.servers import ServerStore
from aniex.services.users import UserStore


class StatisticsService:
    """Dashboard numbers for the admin area."""

    RECENT_LIMIT = 5

    def __init__(self, db: Session):
        self.db = db

    def get_dashboard_payload(self) -> dict:
        anime_store = AnimeStore(self.db)
        episode_store = EpisodeStore(self.db)
        server_store = ServerStore(self.db)

        return {
            "total_anime": anime_store.count(),
            "total_movies": MovieStore(self.db).count(),
            "total_episodes": episode_store.count(),
            "total_servers": server_store.count(),
            "online_servers": server_store.count_online(),
            "total_users": UserStore(self.db).count(),
            "recent_anime": anime_store.latest(self.RECENT_LIMIT),
            "recent_episodes": episode_store.latest(self.RECENT_LIMIT),
        }
