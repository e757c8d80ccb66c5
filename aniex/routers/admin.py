from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from aniex.api.deps import AdminUser, SessionDep
from aniex.config import settings
from aniex.core.listing import (ADMIN_ANIME_LISTING, ADMIN_EPISODE_LISTING, ADMIN_MOVIE_LISTING,
                                ADMIN_SERVER_LISTING)
from aniex.core.templates import templates
from aniex.models.anime import AnimeStatus
from aniex.models.server import ServerStatus
from aniex.services.anime import AnimeStore
from aniex.services.episodes import EpisodeStore
from aniex.services.movies import MovieStore
from aniex.services.servers import ServerStore
from aniex.services.stats import StatisticsService
from aniex.services.users import UserStore
from aniex.services.video_sources import VideoSourceStore

router = APIRouter()


@router.get("", response_class=HTMLResponse, name="admin_dashboard")
async def admin_dashboard(request: Request, db: SessionDep, user: AdminUser):
    """Admin Dashboard / Hub"""
    return templates.TemplateResponse(request=request, name="admin/dashboard.html", context={
        "user": user,
        "stats": StatisticsService(db).get_dashboard_payload(),
        "servers": ServerStore(db).list(),
    })


@router.get("/anime", response_class=HTMLResponse, name="admin_anime")
async def admin_anime_page(request: Request, db: SessionDep, user: AdminUser,
                           q: Optional[str] = None, genre: Optional[str] = None, sort: Optional[str] = None):
    anime = AnimeStore(db).list()
    return templates.TemplateResponse(request=request, name="admin/anime.html", context={
        "user": user,
        "results": ADMIN_ANIME_LISTING.apply(anime, query=q, genre=genre, sort=sort),
        "genres": ADMIN_ANIME_LISTING.all_genres(anime),
        "sort_options": ADMIN_ANIME_LISTING.sort_options,
        "statuses": list(AnimeStatus),
    })


@router.get("/movies", response_class=HTMLResponse, name="admin_movies")
async def admin_movies_page(request: Request, db: SessionDep, user: AdminUser,
                            q: Optional[str] = None, genre: Optional[str] = None, sort: Optional[str] = None):
    movies = MovieStore(db).list()
    return templates.TemplateResponse(request=request, name="admin/movies.html", context={
        "user": user,
        "results": ADMIN_MOVIE_LISTING.apply(movies, query=q, genre=genre, sort=sort),
        "genres": ADMIN_MOVIE_LISTING.all_genres(movies),
        "sort_options": ADMIN_MOVIE_LISTING.sort_options,
        "sources_by_movie": {m.id: m.sources for m in movies},
    })


@router.get("/episodes", response_class=HTMLResponse, name="admin_episodes")
async def admin_episodes_page(request: Request, db: SessionDep, user: AdminUser,
                              q: Optional[str] = None, sort: Optional[str] = None,
                              anime_id: Optional[str] = None):
    """Episode table, optionally narrowed to one series"""
    episodes = EpisodeStore(db).list()
    if anime_id and anime_id.isdigit():
        episodes = [ep for ep in episodes if ep.anime_id == int(anime_id)]

    return templates.TemplateResponse(request=request, name="admin/episodes.html", context={
        "user": user,
        "results": ADMIN_EPISODE_LISTING.apply(episodes, query=q, sort=sort),
        "sort_options": ADMIN_EPISODE_LISTING.sort_options,
        "anime": AnimeStore(db).list(),
        "anime_id": anime_id or "",
        "servers": ServerStore(db).list(),
    })


@router.get("/sources", response_class=HTMLResponse, name="admin_sources")
async def admin_sources_page(request: Request, db: SessionDep, user: AdminUser):
    return templates.TemplateResponse(request=request, name="admin/sources.html", context={
        "user": user,
        "sources": VideoSourceStore(db).list(),
        "servers": ServerStore(db).list(),
    })


@router.get("/servers", response_class=HTMLResponse, name="admin_servers")
async def admin_servers_page(request: Request, db: SessionDep, user: AdminUser, q: Optional[str] = None):
    return templates.TemplateResponse(request=request, name="admin/servers.html", context={
        "user": user,
        "results": ADMIN_SERVER_LISTING.apply(ServerStore(db).list(), query=q),
        "statuses": list(ServerStatus),
    })


@router.get("/users", response_class=HTMLResponse, name="admin_users")
async def admin_users_page(request: Request, db: SessionDep, user: AdminUser):
    """Serve the Admin User Management page"""
    return templates.TemplateResponse(request=request, name="admin/users.html", context={
        "user": user,
        "users": UserStore(db).list(),
    })


@router.get("/settings", response_class=HTMLResponse, name="admin_settings")
async def admin_settings_page(request: Request, user: AdminUser):
    """Read-only view of the running configuration (secrets excluded)"""
    return templates.TemplateResponse(request=request, name="admin/settings.html", context={
        "user": user,
        "config": {
            "Environment": settings.environment,
            "Log level": settings.log_level,
            "Session lifetime (days)": settings.session_max_age_days,
            "Seed admin configured": bool(settings.admin_username and settings.admin_password),
            "Seed default servers": settings.seed_default_servers,
            "Allowed origins": ", ".join(settings.allowed_origins),
        },
    })
