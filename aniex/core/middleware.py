import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from aniex.config import settings
from aniex.core.sessions import SessionStore

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/admin"


class AdminGateMiddleware(BaseHTTPMiddleware):
    """
    Blanket gate for every /api/admin route.
    Runs before routing, so body validation never happens for rejected callers.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path != ADMIN_API_PREFIX and not path.startswith(ADMIN_API_PREFIX + "/"):
            return await call_next(request)

        token = request.cookies.get(settings.session_cookie_name)
        session_factory = request.app.state.session_factory

        with session_factory() as db:
            user = SessionStore(db).resolve(token)
            if user is None:
                return JSONResponse(status_code=401, content={"message": "Not authenticated"})

            if not user.is_admin:
                logger.warning(f"Non-admin user '{user.username}' denied access to {request.method} {path}")
                return JSONResponse(status_code=403, content={"message": "Not authorized"})

            request.state.admin_user_id = user.id

        return await call_next(request)
