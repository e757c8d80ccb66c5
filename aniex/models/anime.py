import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from aniex.database import Base


class AnimeStatus(str, enum.Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    NEW = "new"
    HOT = "hot"


class AnimeSeries(Base):
    __tablename__ = "anime_series"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    cover_image = Column(String, nullable=True)
    banner_image = Column(String, nullable=True)

    # Ordered for display only; filtering treats it as a set
    genres = Column(JSON, nullable=False, default=list)

    status = Column(String, nullable=False, default=AnimeStatus.ONGOING.value, index=True)
    year = Column(Integer, nullable=True)
    rating = Column(String, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    # Deleting a series takes its episodes (and their sources) with it
    episodes = relationship(
        "Episode",
        back_populates="anime",
        cascade="all, delete-orphan",
        order_by="Episode.episode_number",
    )
