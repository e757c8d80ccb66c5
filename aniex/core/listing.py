"""
Filter / sort / paginate for every catalog listing page.

A Listing is configured once with field accessors and reused by each page,
so the anime grid, movie grid, search tabs and admin tables share one
implementation instead of each slicing lists on its own.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

TextAccessor = Callable[[Any], Union[str, Iterable[str], None]]


@dataclass(frozen=True)
class SortOption:
    key: str
    label: str
    sort_key: Callable[[Any], Any]
    reverse: bool = False


@dataclass
class Page(Generic[T]):
    items: List[T]
    page: int
    size: Optional[int]
    total: int
    total_pages: int
    query: str = ""
    sort: str = ""
    genre: str = ""

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def window(self) -> List[Optional[int]]:
        """Page numbers to render; None marks an ellipsis."""
        if self.total_pages <= 7:
            return list(range(1, self.total_pages + 1))

        pages: List[Optional[int]] = [1]
        if self.page > 3:
            pages.append(None)

        start = max(2, self.page - 1)
        end = min(self.total_pages - 1, self.page + 1)
        pages.extend(range(start, end + 1))

        if self.page < self.total_pages - 2:
            pages.append(None)
        pages.append(self.total_pages)
        return pages


# --- Common accessors / sort keys ---

def _created_desc_key(item: Any):
    created = getattr(item, "created_at", None)
    # Rows without a timestamp sink to the end
    return (created is not None, created or datetime.min, getattr(item, "id", 0))


def _title_key(item: Any) -> str:
    return (getattr(item, "title", "") or "").casefold()


def _year_key(item: Any) -> int:
    return getattr(item, "year", None) or 0


LATEST = SortOption("latest", "Latest", _created_desc_key, reverse=True)
OLDEST = SortOption("oldest", "Oldest", _created_desc_key)
A_TO_Z = SortOption("a-z", "A-Z", _title_key)
Z_TO_A = SortOption("z-a", "Z-A", _title_key, reverse=True)
YEAR = SortOption("year", "Year", _year_key, reverse=True)


def title_of(item: Any) -> Optional[str]:
    return getattr(item, "title", None)


def description_of(item: Any) -> Optional[str]:
    return getattr(item, "description", None)


def genres_of(item: Any) -> Iterable[str]:
    return getattr(item, "genres", None) or []


@dataclass
class Listing(Generic[T]):
    page_size: Optional[int]
    search_fields: Sequence[TextAccessor]
    sort_options: Sequence[SortOption] = field(default_factory=lambda: (LATEST, A_TO_Z, Z_TO_A))
    genre_field: Optional[Callable[[Any], Iterable[str]]] = None

    @property
    def default_sort(self) -> str:
        return self.sort_options[0].key

    def filter(self, items: Iterable[T], query: Optional[str] = None, genre: Optional[str] = None) -> List[T]:
        needle = (query or "").strip().casefold()
        wanted_genre = (genre or "").strip().casefold()

        result = []
        for item in items:
            if needle and not self._matches(item, needle):
                continue
            if wanted_genre and self.genre_field is not None:
                # Exact (case-insensitive) genre membership
                if wanted_genre not in {g.casefold() for g in self.genre_field(item)}:
                    continue
            result.append(item)
        return result

    def sort(self, items: Iterable[T], sort: Optional[str] = None) -> List[T]:
        option = self._sort_option(sort)
        return sorted(items, key=option.sort_key, reverse=option.reverse)

    def paginate(self, items: List[T], page: int = 1) -> Page[T]:
        total = len(items)
        if not self.page_size:
            return Page(items=list(items), page=1, size=None, total=total, total_pages=1)

        total_pages = max(1, math.ceil(total / self.page_size))
        page = min(max(1, page), total_pages)
        start = (page - 1) * self.page_size
        return Page(
            items=items[start:start + self.page_size],
            page=page,
            size=self.page_size,
            total=total,
            total_pages=total_pages,
        )

    def apply(self, items: Iterable[T], query: Optional[str] = None, sort: Optional[str] = None,
              page: int = 1, genre: Optional[str] = None) -> Page[T]:
        filtered = self.filter(items, query=query, genre=genre)
        result = self.paginate(self.sort(filtered, sort), page)
        result.query = query or ""
        result.sort = self._sort_option(sort).key
        result.genre = genre or ""
        return result

    def all_genres(self, items: Iterable[T]) -> List[str]:
        if self.genre_field is None:
            return []
        return sorted({g for item in items for g in self.genre_field(item)}, key=str.casefold)

    def _sort_option(self, sort: Optional[str]) -> SortOption:
        for option in self.sort_options:
            if option.key == sort:
                return option
        return self.sort_options[0]

    def _matches(self, item: Any, needle: str) -> bool:
        for accessor in self.search_fields:
            value = accessor(item)
            if value is None:
                continue
            if isinstance(value, str):
                if needle in value.casefold():
                    return True
            elif any(needle in str(v).casefold() for v in value):
                return True
        return False


# --- Page presets ---

ANIME_LISTING = Listing(page_size=15, search_fields=(title_of, genres_of))
MOVIE_LISTING = Listing(page_size=12, search_fields=(title_of, genres_of),
                        sort_options=(LATEST, A_TO_Z, Z_TO_A, YEAR))
SEARCH_LISTING = Listing(page_size=20, search_fields=(title_of, description_of), genre_field=genres_of)

ADMIN_ANIME_LISTING = Listing(page_size=None, search_fields=(title_of, description_of), genre_field=genres_of)
ADMIN_MOVIE_LISTING = Listing(page_size=None, search_fields=(title_of, description_of), genre_field=genres_of,
                              sort_options=(LATEST, A_TO_Z, Z_TO_A, YEAR))
ADMIN_SERVER_LISTING = Listing(page_size=None,
                               search_fields=(lambda s: s.name, lambda s: s.region),
                               sort_options=(SortOption("number", "Number", lambda s: s.number),))
ADMIN_EPISODE_LISTING = Listing(
    page_size=None,
    search_fields=(
        title_of,
        lambda ep: ep.anime.title if ep.anime else None,
        lambda ep: str(ep.episode_number),
    ),
    sort_options=(
        SortOption("newest", "Newest", _created_desc_key, reverse=True),
        OLDEST,
        SortOption("episode-asc", "Episode (Asc)", lambda ep: (ep.anime_id, ep.episode_number)),
        # Series stay grouped ascending; only the episode order flips
        SortOption("episode-desc", "Episode (Desc)", lambda ep: (ep.anime_id, -ep.episode_number)),
    ),
)
