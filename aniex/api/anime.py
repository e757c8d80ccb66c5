from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from aniex.api.deps import SessionDep
from aniex.schemas.anime import AnimeCreate, AnimeRead, AnimeUpdate
from aniex.schemas.common import MessageResponse
from aniex.schemas.episode import EpisodeRead
from aniex.services.anime import AnimeStore
from aniex.services.episodes import EpisodeStore

router = APIRouter()
admin_router = APIRouter()


def get_anime_store(db: SessionDep) -> AnimeStore:
    return AnimeStore(db)


AnimeStoreDep = Annotated[AnimeStore, Depends(get_anime_store)]


@router.get("", response_model=List[AnimeRead])
async def list_anime(store: AnimeStoreDep, search: Annotated[Optional[str], Query()] = None):
    """All series, newest first. `search` filters by title, description or genre."""
    return store.search(search)


@router.get("/{anime_id}", response_model=AnimeRead)
async def get_anime(anime_id: int, store: AnimeStoreDep):
    anime = store.get(anime_id)
    if anime is None:
        raise HTTPException(status_code=404, detail="Anime not found")
    return anime


@router.get("/{anime_id}/episodes", response_model=List[EpisodeRead])
async def list_anime_episodes(anime_id: int, db: SessionDep):
    """Episodes ordered by episode number. Unknown series give an empty list."""
    return EpisodeStore(db).by_anime(anime_id)


# --- ADMIN ---

@admin_router.post("", response_model=AnimeRead, status_code=status.HTTP_201_CREATED)
async def create_anime(payload: AnimeCreate, store: AnimeStoreDep):
    return store.create(payload)


@admin_router.put("/{anime_id}", response_model=AnimeRead)
async def update_anime(anime_id: int, payload: AnimeUpdate, store: AnimeStoreDep):
    anime = store.update(anime_id, payload)
    if anime is None:
        raise HTTPException(status_code=404, detail="Anime not found")
    return anime


@admin_router.delete("/{anime_id}", response_model=MessageResponse)
async def delete_anime(anime_id: int, store: AnimeStoreDep):
    """Deletes the series together with its episodes and their sources."""
    if not store.delete(anime_id):
        raise HTTPException(status_code=404, detail="Anime not found")
    return {"message": "Anime deleted successfully"}
