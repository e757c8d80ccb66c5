import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from aniex.core.errors import InvalidData
from aniex.core.security import get_password_hash, verify_password
from aniex.core.sessions import utcnow
from aniex.models.user import User
from aniex.services.base import BaseStore

logger = logging.getLogger(__name__)


class UserStore(BaseStore[User]):
    model = User
    entity_name = "user"

    def _order_by(self) -> list:
        return [User.id.asc()]

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.username) == username.lower()).first()

    def create_user(self, username: str, password: str, is_admin: bool = False) -> User:
        """Registration path. Usernames are unique regardless of case."""
        if self.get_by_username(username):
            raise InvalidData.single("username", "Username already exists")

        user = User(
            username=username,
            password_hash=get_password_hash(password),
            is_admin=is_admin,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            self.db.rollback()
            raise InvalidData.single("username", "Username already exists")

        self.db.refresh(user)
        logger.info(f"Registered user '{user.username}' (admin={user.is_admin})")
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            return None

        user.last_login = utcnow()
        self._commit(f"record login for user #{user.id}")
        return user

    def ensure_admin(self, username: str, password: str) -> User:
        """
        Out-of-band admin provisioning (startup env vars or the CLI).
        Creates the account, or promotes it and resets its password.
        """
        user = self.get_by_username(username)
        if user is None:
            return self.create_user(username, password, is_admin=True)

        user.is_admin = True
        user.password_hash = get_password_hash(password)
        self._commit(f"promote user #{user.id}")
        logger.info(f"Ensured admin privileges for '{user.username}'")
        return user

    def admins(self) -> List[User]:
        return self.db.query(User).filter(User.is_admin.is_(True)).order_by(User.id).all()
