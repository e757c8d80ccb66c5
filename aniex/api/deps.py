import logging
from typing import Annotated, Generator, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from aniex.config import settings
from aniex.core.sessions import SessionStore
from aniex.database import SessionLocal
from aniex.models.user import User

logger = logging.getLogger(__name__)


# 1. DATABASE DEPENDENCY
def get_db() -> Generator:
    try:
        db = SessionLocal()
        yield db
    finally:
        db.close()


SessionDep = Annotated[Session, Depends(get_db)]


# 2. AUTH DEPENDENCIES
def get_session_token(request: Request) -> Optional[str]:
    """The raw (signed) session cookie, if the browser sent one."""
    return request.cookies.get(settings.session_cookie_name)


async def get_optional_user(
        db: SessionDep,
        token: Annotated[Optional[str], Depends(get_session_token)],
) -> Optional[User]:
    return SessionStore(db).resolve(token)


async def get_current_user(
        user: Annotated[Optional[User], Depends(get_optional_user)],
) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


async def get_current_admin(
        current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Dependency that ensures the user is an admin.
    The /api/admin prefix is already gated by middleware; this covers the HTML admin pages.
    """
    if not current_user.is_admin:
        logger.warning(f"Non-admin user '{current_user.username}' denied admin page")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(get_current_admin)]
