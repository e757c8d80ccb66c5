from datetime import datetime
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from aniex.config import settings

# pbkdf2 keeps hashing pure-python; no native bcrypt build needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(plain_password, password_hash)
    except (ValueError, TypeError):
        # Unrecognised hash format counts as a failed check
        return False


def sign_session_id(session_id: str, expires_at: datetime) -> str:
    """Wrap a session id in a signed token so the cookie can't be forged."""
    return jwt.encode(
        {"sid": session_id, "exp": expires_at},
        settings.secret_key,
        algorithm=settings.algorithm,
    )


def unsign_session_id(token: str) -> Optional[str]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None
