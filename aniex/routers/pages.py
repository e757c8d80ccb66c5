from typing import Optional
from urllib.parse import urlsplit

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from aniex.api.deps import OptionalUser, SessionDep
from aniex.core.listing import ANIME_LISTING, MOVIE_LISTING, SEARCH_LISTING
from aniex.core.templates import templates
from aniex.services.anime import AnimeStore
from aniex.services.episodes import EpisodeStore
from aniex.services.movies import MovieStore
from aniex.services.video_sources import VideoSourceStore

router = APIRouter()

SEARCH_TABS = ("anime", "movies")


def parse_page(value: Optional[str]) -> int:
    """Page numbers come straight from the query string; junk means page 1."""
    try:
        return int(value) if value else 1
    except ValueError:
        return 1


def safe_next_url(value: Optional[str]) -> str:
    """Post-login target. Only same-site paths are kept; anything else falls back to /."""
    if not value:
        return "/"
    # Read the value the way a browser will: tabs and newlines dropped, backslash as slash
    normalized = "".join(ch for ch in value if ch not in "\t\r\n").replace("\\", "/")
    parts = urlsplit(normalized)
    if not normalized.startswith("/") or normalized.startswith("//") or parts.scheme or parts.netloc:
        return "/"
    return value


def pick_source(sources: list, source_id: Optional[str]):
    """The requested source if it belongs to this content, else the first one."""
    if not sources:
        return None
    for source in sources:
        if str(source.id) == source_id:
            return source
    return sources[0]


# Frontend routes
@router.get("/", response_class=HTMLResponse, name="home")
async def home(request: Request, db: SessionDep, user: OptionalUser):
    """Home page - featured series, latest anime, movies and episodes"""
    anime = AnimeStore(db).list()
    featured = next((a for a in anime if a.banner_image), anime[0] if anime else None)

    return templates.TemplateResponse(request=request, name="home.html", context={
        "user": user,
        "featured": featured,
        "trending_anime": anime[:10],
        "movies": MovieStore(db).latest(6),
        "latest_episodes": EpisodeStore(db).latest(8),
    })


@router.get("/anime", response_class=HTMLResponse, name="anime_list")
async def anime_list(request: Request, db: SessionDep, user: OptionalUser,
                     q: Optional[str] = None, sort: Optional[str] = None, page: Optional[str] = None):
    results = ANIME_LISTING.apply(AnimeStore(db).list(), query=q, sort=sort, page=parse_page(page))
    return templates.TemplateResponse(request=request, name="anime/list.html", context={
        "user": user,
        "results": results,
        "sort_options": ANIME_LISTING.sort_options,
    })


@router.get("/anime/{anime_id}", response_class=HTMLResponse, name="anime_detail")
async def anime_detail(request: Request, anime_id: int, db: SessionDep, user: OptionalUser):
    """Series page. Unknown ids render a not-found state rather than an error page."""
    anime = AnimeStore(db).get(anime_id)
    episodes = EpisodeStore(db).by_anime(anime_id) if anime else []

    return templates.TemplateResponse(request=request, name="anime/detail.html", context={
        "user": user,
        "anime": anime,
        "episodes": episodes,
    }, status_code=200 if anime else 404)


@router.get("/movies", response_class=HTMLResponse, name="movie_list")
async def movie_list(request: Request, db: SessionDep, user: OptionalUser,
                     q: Optional[str] = None, sort: Optional[str] = None, page: Optional[str] = None):
    results = MOVIE_LISTING.apply(MovieStore(db).list(), query=q, sort=sort, page=parse_page(page))
    return templates.TemplateResponse(request=request, name="movies/list.html", context={
        "user": user,
        "results": results,
        "sort_options": MOVIE_LISTING.sort_options,
    })


@router.get("/movies/{movie_id}", response_class=HTMLResponse, name="movie_detail")
async def movie_detail(request: Request, movie_id: int, db: SessionDep, user: OptionalUser):
    movie = MovieStore(db).get(movie_id)
    sources = VideoSourceStore(db).by_movie(movie_id) if movie else []

    return templates.TemplateResponse(request=request, name="movies/detail.html", context={
        "user": user,
        "movie": movie,
        "sources": sources,
    }, status_code=200 if movie else 404)


@router.get("/watch/{kind}/{content_id}", response_class=HTMLResponse, name="watch")
async def watch(request: Request, kind: str, content_id: int, db: SessionDep, user: OptionalUser,
                source: Optional[str] = None):
    """
    Player page for an episode or a movie.
    The chosen source's videoUrl goes into an iframe; episodes also get prev/next links.
    """
    context = {"user": user, "kind": kind, "anime": None, "episode": None, "movie": None,
               "prev_episode": None, "next_episode": None, "sources": [], "current_source": None}
    source_store = VideoSourceStore(db)
    found = False

    if kind == "episode":
        episode = EpisodeStore(db).get(content_id)
        if episode is not None:
            found = True
            siblings = EpisodeStore(db).by_anime(episode.anime_id)
            index = next(i for i, ep in enumerate(siblings) if ep.id == episode.id)
            context.update({
                "episode": episode,
                "anime": episode.anime,
                "prev_episode": siblings[index - 1] if index > 0 else None,
                "next_episode": siblings[index + 1] if index < len(siblings) - 1 else None,
                "sources": source_store.by_episode(episode.id),
            })
    elif kind == "movie":
        movie = MovieStore(db).get(content_id)
        if movie is not None:
            found = True
            context.update({"movie": movie, "sources": source_store.by_movie(movie.id)})

    context["current_source"] = pick_source(context["sources"], source)
    return templates.TemplateResponse(request=request, name="watch.html", context=context,
                                      status_code=200 if found else 404)


@router.get("/search", response_class=HTMLResponse, name="search")
async def search(request: Request, db: SessionDep, user: OptionalUser,
                 q: Optional[str] = None, genre: Optional[str] = None,
                 tab: Optional[str] = None, page: Optional[str] = None):
    """Search page: anime and movie tabs, title/description match plus an exact genre filter"""
    tab = tab if tab in SEARCH_TABS else SEARCH_TABS[0]
    anime = AnimeStore(db).list()
    movies = MovieStore(db).list()

    # Only the active tab follows the page parameter
    anime_page = parse_page(page) if tab == "anime" else 1
    movie_page = parse_page(page) if tab == "movies" else 1

    return templates.TemplateResponse(request=request, name="search.html", context={
        "user": user,
        "tab": tab,
        "query": q or "",
        "genre": genre or "",
        "genres": SEARCH_LISTING.all_genres(anime + movies),
        "anime_results": SEARCH_LISTING.apply(anime, query=q, genre=genre, page=anime_page),
        "movie_results": SEARCH_LISTING.apply(movies, query=q, genre=genre, page=movie_page),
    })


@router.get("/login", response_class=HTMLResponse, name="login")
async def login_page(request: Request, user: OptionalUser, next: Optional[str] = None):
    next_url = safe_next_url(next)
    return templates.TemplateResponse(request=request, name="login.html", context={
        "user": user,
        "next_url": next_url,
    })
