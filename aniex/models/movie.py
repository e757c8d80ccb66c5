from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from aniex.database import Base


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    cover_image = Column(String, nullable=True)
    banner_image = Column(String, nullable=True)
    genres = Column(JSON, nullable=False, default=list)

    duration = Column(Integer, nullable=True)  # minutes
    year = Column(Integer, nullable=True)
    rating = Column(String, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    sources = relationship(
        "VideoSource",
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="VideoSource.server_number",
    )
