from typing import List, Optional

from aniex.core.errors import InvalidData
from aniex.models.episode import Episode
from aniex.models.movie import Movie
from aniex.models.video_source import VideoSource
from aniex.services.base import BaseStore


class VideoSourceStore(BaseStore[VideoSource]):
    model = VideoSource
    entity_name = "video source"

    def _order_by(self) -> list:
        return [VideoSource.server_number.asc(), VideoSource.id.asc()]

    def by_episode(self, episode_id: int) -> List[VideoSource]:
        return (
            self.db.query(VideoSource)
            .filter(VideoSource.episode_id == episode_id)
            .order_by(*self._order_by())
            .all()
        )

    def by_movie(self, movie_id: int) -> List[VideoSource]:
        return (
            self.db.query(VideoSource)
            .filter(VideoSource.movie_id == movie_id)
            .order_by(*self._order_by())
            .all()
        )

    def _validate(self, values: dict, current: Optional[VideoSource]) -> None:
        # Check the row as it will look after the merge
        episode_id = values.get("episode_id", current.episode_id if current else None)
        movie_id = values.get("movie_id", current.movie_id if current else None)

        if episode_id is not None and movie_id is not None:
            raise InvalidData.single("movieId", "A source belongs to an episode or a movie, not both")
        if episode_id is None and movie_id is None:
            raise InvalidData.single("episodeId", "Either episodeId or movieId is required")

        if episode_id is not None and self.db.get(Episode, episode_id) is None:
            raise InvalidData.single("episodeId", "Episode not found")
        if movie_id is not None and self.db.get(Movie, movie_id) is None:
            raise InvalidData.single("movieId", "Movie not found")
