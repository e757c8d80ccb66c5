from typing import List, Optional

from aniex.core.errors import InvalidData
from aniex.models.anime import AnimeSeries
from aniex.models.episode import Episode
from aniex.services.base import BaseStore


class EpisodeStore(BaseStore[Episode]):
    model = Episode
    entity_name = "episode"

    def by_anime(self, anime_id: int) -> List[Episode]:
        """Episodes of one series, by episode number (not insertion order)."""
        return (
            self.db.query(Episode)
            .filter(Episode.anime_id == anime_id)
            .order_by(Episode.episode_number.asc(), Episode.id.asc())
            .all()
        )

    def _validate(self, values: dict, current: Optional[Episode]) -> None:
        if "anime_id" in values and self.db.get(AnimeSeries, values["anime_id"]) is None:
            raise InvalidData.single("animeId", "Anime not found")
