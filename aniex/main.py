import os
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import quote

import portalocker
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from aniex.config import settings
from aniex.core.errors import InvalidData, StoreError, format_validation_errors
from aniex.core.middleware import AdminGateMiddleware
from aniex.core.templates import templates
from aniex.database import Base, SessionLocal, engine
from aniex.logging import log_config
from aniex.services.scheduler import scheduler_service
from aniex.services.seed import SeedService

# Register every model on Base.metadata before create_all
import aniex.models  # noqa: F401

# API Routes
from aniex.api import anime, auth, episodes, movies, servers, sources, stats, users

# Frontend Routes (HTML)
from aniex.routers import pages, admin

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _is_api_path(path: str) -> bool:
    return path == "/api" or path.startswith("/api/")


@asynccontextmanager
async def lifespan(app: FastAPI):

    # --- 1. GLOBAL SETUP (Run on ALL Uvicorn Workers) ---
    # Each worker configures its own logger instance pointing to the same file.
    logger = log_config.setup_logging()

    if settings.credentialed_wildcard_cors:
        logger.warning("ALLOWED_ORIGINS is '*' in production: any site can make logged-in requests. "
                       "Set ALLOWED_ORIGINS to the frontend origins.")

    settings.cache_dir.mkdir(parents=True, exist_ok=True)

    # Safe to run on every worker: create_all skips existing tables and seeding is idempotent
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        SeedService(db).initialize_defaults()
    finally:
        db.close()

    worker_pid = os.getpid()
    logger.info(f"Worker process PID:{worker_pid} startup (Log Level: {settings.log_level})")

    # --- 2. SINGLETON SETUP (Run ONLY on one process) ---
    # Only one worker should run the maintenance scheduler.
    lock_file_path = settings.cache_dir / "scheduler.lock"
    lock_file = open(lock_file_path, "w")
    is_manager = False

    try:
        # LOCK_EX = Exclusive, LOCK_NB = Non-Blocking
        portalocker.lock(lock_file, portalocker.LOCK_EX | portalocker.LOCK_NB)
        is_manager = True

        logger.info(f"Worker {worker_pid} acquired Manager Lock. Starting Scheduler...")
        scheduler_service.start()
    except portalocker.exceptions.LockException:
        logger.info(f"Worker {worker_pid} could not acquire lock. Skipping scheduler.")

    yield

    # --- SHUTDOWN ---
    logger.info(f"Worker {worker_pid} shutting down...")

    if is_manager:
        scheduler_service.stop()
        portalocker.unlock(lock_file)

    lock_file.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    lifespan=lifespan,
)

# Sessions for middleware that runs outside dependency injection
app.state.session_factory = SessionLocal

app.add_middleware(AdminGateMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.trusted_proxies)

# Mount static files
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


# --- EXCEPTION HANDLERS ---

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):

    # API callers always get JSON with a plain message
    if _is_api_path(request.url.path):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Web UI: unauthenticated users are sent to the login page
    if exc.status_code == 401:
        return_url = request.url.path
        if request.url.query:
            return_url = f"{return_url}?{request.url.query}"
        return RedirectResponse(url=f"/login?next={quote(return_url)}", status_code=303)

    return templates.TemplateResponse(
        request=request,
        name="error.html",
        context={"status_code": exc.status_code, "detail": exc.detail},
        status_code=exc.status_code,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid data", "errors": format_validation_errors(exc.errors())},
    )


@app.exception_handler(InvalidData)
async def invalid_data_handler(request: Request, exc: InvalidData):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid data", "errors": exc.errors},
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    # Already logged with traceback by the store
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error"},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    if not _is_api_path(request.url.path):
        return templates.TemplateResponse(
            request=request,
            name="error.html",
            context={"status_code": 500, "detail": "Internal server error"},
            status_code=500,
        )
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error"},
    )


# --- ROUTER REGISTRATION ---

# 1. Public API Routers (JSON)
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(anime.router, prefix="/api/anime", tags=["anime"])
app.include_router(movies.router, prefix="/api/movies", tags=["movies"])
app.include_router(episodes.router, prefix="/api/episodes", tags=["episodes"])
app.include_router(servers.router, prefix="/api/servers", tags=["servers"])

# 2. Admin API Routers, gated as a block by AdminGateMiddleware
app.include_router(anime.admin_router, prefix="/api/admin/anime", tags=["admin"])
app.include_router(movies.admin_router, prefix="/api/admin/movies", tags=["admin"])
app.include_router(episodes.admin_router, prefix="/api/admin/episodes", tags=["admin"])
app.include_router(sources.admin_router, prefix="/api/admin/sources", tags=["admin"])
app.include_router(servers.admin_router, prefix="/api/admin/servers", tags=["admin"])
app.include_router(users.admin_router, prefix="/api/admin/users", tags=["admin"])
app.include_router(stats.admin_router, prefix="/api/admin/stats", tags=["admin"])

# 3. Frontend Routers (HTML)
app.include_router(pages.router, tags=["pages"])
app.include_router(admin.router, prefix="/admin", tags=["admin-pages"])


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "aniex"}
