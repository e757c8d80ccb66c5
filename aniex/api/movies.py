from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from aniex.api.deps import SessionDep
from aniex.schemas.common import MessageResponse
from aniex.schemas.movie import MovieCreate, MovieRead, MovieUpdate
from aniex.schemas.video_source import VideoSourceRead
from aniex.services.movies import MovieStore
from aniex.services.video_sources import VideoSourceStore

router = APIRouter()
admin_router = APIRouter()


def get_movie_store(db: SessionDep) -> MovieStore:
    return MovieStore(db)


MovieStoreDep = Annotated[MovieStore, Depends(get_movie_store)]


@router.get("", response_model=List[MovieRead])
async def list_movies(store: MovieStoreDep, search: Annotated[Optional[str], Query()] = None):
    return store.search(search)


@router.get("/{movie_id}", response_model=MovieRead)
async def get_movie(movie_id: int, store: MovieStoreDep):
    movie = store.get(movie_id)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@router.get("/{movie_id}/sources", response_model=List[VideoSourceRead])
async def list_movie_sources(movie_id: int, db: SessionDep):
    return VideoSourceStore(db).by_movie(movie_id)


# --- ADMIN ---

@admin_router.post("", response_model=MovieRead, status_code=status.HTTP_201_CREATED)
async def create_movie(payload: MovieCreate, store: MovieStoreDep):
    return store.create(payload)


@admin_router.put("/{movie_id}", response_model=MovieRead)
async def update_movie(movie_id: int, payload: MovieUpdate, store: MovieStoreDep):
    movie = store.update(movie_id, payload)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@admin_router.delete("/{movie_id}", response_model=MessageResponse)
async def delete_movie(movie_id: int, store: MovieStoreDep):
    if not store.delete(movie_id):
        raise HTTPException(status_code=404, detail="Movie not found")
    return {"message": "Movie deleted successfully"}
