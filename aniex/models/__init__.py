# Import all models here so SQLAlchemy can set up relationships
from aniex.models.user import User
from aniex.models.session import UserSession
from aniex.models.anime import AnimeSeries, AnimeStatus
from aniex.models.movie import Movie
from aniex.models.episode import Episode
from aniex.models.video_source import VideoSource
from aniex.models.server import Server, ServerStatus

# This ensures all models are loaded before relationships are configured
__all__ = [
    'User', 'UserSession',
    'AnimeSeries', 'AnimeStatus',
    'Movie',
    'Episode',
    'VideoSource',
    'Server', 'ServerStatus',
]
