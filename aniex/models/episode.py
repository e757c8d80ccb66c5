from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from aniex.database import Base


class Episode(Base):
    __tablename__ = "episodes"

    id = Column(Integer, primary_key=True, index=True)
    anime_id = Column(Integer, ForeignKey("anime_series.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    episode_number = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    thumbnail = Column(String, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    anime = relationship("AnimeSeries", back_populates="episodes")
    sources = relationship(
        "VideoSource",
        back_populates="episode",
        cascade="all, delete-orphan",
        order_by="VideoSource.server_number",
    )
