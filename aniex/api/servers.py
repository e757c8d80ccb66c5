from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from aniex.api.deps import SessionDep
from aniex.schemas.common import MessageResponse
from aniex.schemas.server import ServerCreate, ServerRead, ServerUpdate
from aniex.services.servers import ServerStore

router = APIRouter()
admin_router = APIRouter()


def get_server_store(db: SessionDep) -> ServerStore:
    return ServerStore(db)


ServerStoreDep = Annotated[ServerStore, Depends(get_server_store)]


@router.get("", response_model=List[ServerRead])
async def list_servers(store: ServerStoreDep):
    """Servers ordered by number."""
    return store.list()


# --- ADMIN ---

@admin_router.post("", response_model=ServerRead, status_code=status.HTTP_201_CREATED)
async def create_server(payload: ServerCreate, store: ServerStoreDep):
    return store.create(payload)


@admin_router.put("/{server_id}", response_model=ServerRead)
async def update_server(server_id: int, payload: ServerUpdate, store: ServerStoreDep):
    server = store.update(server_id, payload)
    if server is None:
        raise HTTPException(status_code=404, detail="Server not found")
    return server


@admin_router.delete("/{server_id}", response_model=MessageResponse)
async def delete_server(server_id: int, store: ServerStoreDep):
    if not store.delete(server_id):
        raise HTTPException(status_code=404, detail="Server not found")
    return {"message": "Server deleted successfully"}
