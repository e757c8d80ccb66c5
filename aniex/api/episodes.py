from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from aniex.api.deps import SessionDep
from aniex.schemas.common import MessageResponse
from aniex.schemas.episode import EpisodeCreate, EpisodeRead, EpisodeUpdate
from aniex.schemas.video_source import VideoSourceRead
from aniex.services.episodes import EpisodeStore
from aniex.services.video_sources import VideoSourceStore

router = APIRouter()
admin_router = APIRouter()


def get_episode_store(db: SessionDep) -> EpisodeStore:
    return EpisodeStore(db)


EpisodeStoreDep = Annotated[EpisodeStore, Depends(get_episode_store)]


@router.get("", response_model=List[EpisodeRead])
async def list_episodes(store: EpisodeStoreDep):
    """Every episode across all series, newest first."""
    return store.list()


@router.get("/{episode_id}", response_model=EpisodeRead)
async def get_episode(episode_id: int, store: EpisodeStoreDep):
    episode = store.get(episode_id)
    if episode is None:
        raise HTTPException(status_code=404, detail="Episode not found")
    return episode


@router.get("/{episode_id}/sources", response_model=List[VideoSourceRead])
async def list_episode_sources(episode_id: int, db: SessionDep):
    return VideoSourceStore(db).by_episode(episode_id)


# --- ADMIN ---

@admin_router.post("", response_model=EpisodeRead, status_code=status.HTTP_201_CREATED)
async def create_episode(payload: EpisodeCreate, store: EpisodeStoreDep):
    return store.create(payload)


@admin_router.put("/{episode_id}", response_model=EpisodeRead)
async def update_episode(episode_id: int, payload: EpisodeUpdate, store: EpisodeStoreDep):
    episode = store.update(episode_id, payload)
    if episode is None:
        raise HTTPException(status_code=404, detail="Episode not found")
    return episode


@admin_router.delete("/{episode_id}", response_model=MessageResponse)
async def delete_episode(episode_id: int, store: EpisodeStoreDep):
    if not store.delete(episode_id):
        raise HTTPException(status_code=404, detail="Episode not found")
    return {"message": "Episode deleted successfully"}
