from typing import List

from fastapi import APIRouter

from aniex.api.deps import SessionDep
from aniex.schemas.user import UserRead
from aniex.services.users import UserStore

admin_router = APIRouter()


@admin_router.get("", response_model=List[UserRead])
async def list_users(db: SessionDep):
    """All accounts. Password hashes never leave the store."""
    return UserStore(db).list()
