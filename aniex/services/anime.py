from aniex.models.anime import AnimeSeries
from aniex.services.base import SearchableStore


class AnimeStore(SearchableStore[AnimeSeries]):
    model = AnimeSeries
    entity_name = "anime"
