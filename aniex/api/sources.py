from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from aniex.api.deps import SessionDep
from aniex.schemas.common import MessageResponse
from aniex.schemas.video_source import VideoSourceCreate, VideoSourceRead, VideoSourceUpdate
from aniex.services.video_sources import VideoSourceStore

# Sources are only listed publicly through their episode or movie
admin_router = APIRouter()


def get_source_store(db: SessionDep) -> VideoSourceStore:
    return VideoSourceStore(db)


SourceStoreDep = Annotated[VideoSourceStore, Depends(get_source_store)]


@admin_router.get("", response_model=List[VideoSourceRead])
async def list_sources(store: SourceStoreDep):
    return store.list()


@admin_router.post("", response_model=VideoSourceRead, status_code=status.HTTP_201_CREATED)
async def create_source(payload: VideoSourceCreate, store: SourceStoreDep):
    return store.create(payload)


@admin_router.put("/{source_id}", response_model=VideoSourceRead)
async def update_source(source_id: int, payload: VideoSourceUpdate, store: SourceStoreDep):
    source = store.update(source_id, payload)
    if source is None:
        raise HTTPException(status_code=404, detail="Video source not found")
    return source


@admin_router.delete("/{source_id}", response_model=MessageResponse)
async def delete_source(source_id: int, store: SourceStoreDep):
    if not store.delete(source_id):
        raise HTTPException(status_code=404, detail="Video source not found")
    return {"message": "Video source deleted successfully"}
