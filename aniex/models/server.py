import enum
from sqlalchemy import Column, Integer, String
from aniex.database import Base


class ServerStatus(str, enum.Enum):
    ONLINE = "online"
    MAINTENANCE = "maintenance"
    OFFLINE = "offline"


class Server(Base):
    """Administrative metadata about a streaming host. Not linked to sources."""
    __tablename__ = "servers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    number = Column(Integer, nullable=False, index=True)
    region = Column(String, nullable=True)
    status = Column(String, nullable=False, default=ServerStatus.ONLINE.value)

    storage_used = Column(Integer, default=0)
    total_storage = Column(Integer, default=100)
