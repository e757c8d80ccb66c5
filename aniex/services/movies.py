from aniex.models.movie import Movie
from aniex.services.base import SearchableStore


class MovieStore(SearchableStore[Movie]):
    model = Movie
    entity_name = "movie"
