import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from aniex.api.deps import CurrentUser, SessionDep, get_session_token
from aniex.core.errors import InvalidData
from aniex.core.sessions import SessionStore, clear_session_cookie, set_session_cookie
from aniex.schemas.common import MessageResponse
from aniex.schemas.user import Credentials, UserRead
from aniex.services.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(credentials: Credentials, response: Response, db: SessionDep):
    """
    Create a regular account and log it in.
    Registration never grants admin; admins come from ADMIN_USERNAME or the CLI.
    """
    try:
        user = UserStore(db).create_user(credentials.username, credentials.password)
    except InvalidData as e:
        raise HTTPException(status_code=400, detail=e.errors[0]["message"])

    _, token = SessionStore(db).create(user)
    set_session_cookie(response, token)
    return user


@router.post("/login", response_model=UserRead)
async def login(credentials: Credentials, response: Response, db: SessionDep):
    user = UserStore(db).authenticate(credentials.username, credentials.password)
    if user is None:
        logger.info(f"Failed login for '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    _, token = SessionStore(db).create(user)
    set_session_cookie(response, token)
    return user


@router.post("/logout", response_model=MessageResponse)
async def logout(
        response: Response,
        db: SessionDep,
        token: Annotated[Optional[str], Depends(get_session_token)],
):
    """Drops the server-side session. Safe to call when already logged out."""
    SessionStore(db).destroy(token)
    clear_session_cookie(response)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserRead)
async def read_current_user(current_user: CurrentUser):
    return current_user
