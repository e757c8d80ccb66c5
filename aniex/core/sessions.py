import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Response
from sqlalchemy.orm import Session

from aniex.config import settings
from aniex.core.security import sign_session_id, unsign_session_id
from aniex.models.session import UserSession
from aniex.models.user import User

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    # Naive UTC: what SQLite hands back, so comparisons stay consistent
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SessionStore:
    """Server-side sessions. The cookie holds a signed session id and nothing else."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> Tuple[UserSession, str]:
        expires_at = utcnow() + timedelta(seconds=settings.session_max_age_seconds)
        user_session = UserSession(
            id=secrets.token_urlsafe(32),
            user_id=user.id,
            expires_at=expires_at,
        )
        self.db.add(user_session)
        self.db.commit()

        token = sign_session_id(user_session.id, expires_at.replace(tzinfo=timezone.utc))
        return user_session, token

    def resolve(self, token: Optional[str]) -> Optional[User]:
        """Return the user behind a cookie value, or None if it is unknown/expired."""
        if not token:
            return None

        session_id = unsign_session_id(token)
        if session_id is None:
            return None

        user_session = self.db.get(UserSession, session_id)
        if user_session is None:
            return None

        if user_session.expires_at <= utcnow():
            self.db.delete(user_session)
            self.db.commit()
            return None

        return user_session.user

    def destroy(self, token: Optional[str]) -> bool:
        session_id = unsign_session_id(token) if token else None
        if session_id is None:
            return False

        deleted = self.db.query(UserSession).filter(UserSession.id == session_id).delete()
        self.db.commit()
        return deleted > 0

    def prune_expired(self) -> int:
        deleted = self.db.query(UserSession).filter(UserSession.expires_at <= utcnow()).delete()
        self.db.commit()
        if deleted:
            logger.info(f"Pruned {deleted} expired session(s)")
        return deleted


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )
