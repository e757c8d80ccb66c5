import logging
from typing import Optional

from sqlalchemy.orm import Session

from aniex.config import settings
from aniex.services.servers import ServerStore
from aniex.services.users import UserStore

logger = logging.getLogger(__name__)

# Starter fleet shown on a fresh install
DEFAULT_SERVERS = [
    {"name": "Main Server", "number": 1, "region": "US East", "status": "online", "storage_used": 92, "total_storage": 100},
    {"name": "Backup Server", "number": 2, "region": "EU Central", "status": "online", "storage_used": 85, "total_storage": 100},
    {"name": "CDN Server", "number": 3, "region": "Asia Pacific", "status": "maintenance", "storage_used": 68, "total_storage": 100},
    {"name": "Stream Server", "number": 4, "region": "US West", "status": "online", "storage_used": 55, "total_storage": 100},
    {"name": "Mirror Server", "number": 5, "region": "South America", "status": "online", "storage_used": 42, "total_storage": 100},
    {"name": "Backup Mirror", "number": 6, "region": "Australia", "status": "offline", "storage_used": 30, "total_storage": 100},
    {"name": "Archive Server", "number": 7, "region": "Africa", "status": "online", "storage_used": 78, "total_storage": 100},
]


class SeedService:
    """First-run data. Every method is safe to call on each startup."""

    def __init__(self, db: Session):
        self.db = db

    def seed_admin(self, username: Optional[str] = None, password: Optional[str] = None):
        username = username or settings.admin_username
        password = password or settings.admin_password

        if not username or not password:
            logger.debug("No seed admin configured")
            return None

        return UserStore(self.db).ensure_admin(username, password)

    def seed_servers(self) -> int:
        store = ServerStore(self.db)
        if store.count() > 0:
            return 0

        for server in DEFAULT_SERVERS:
            store.create(server)

        logger.info(f"Seeded {len(DEFAULT_SERVERS)} default servers")
        return len(DEFAULT_SERVERS)

    def initialize_defaults(self):
        self.seed_admin()
        if settings.seed_default_servers:
            self.seed_servers()
