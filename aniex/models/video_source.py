from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from aniex.database import Base


class VideoSource(Base):
    """An external player URL for one episode or one movie, never both."""
    __tablename__ = "video_sources"

    __table_args__ = (
        CheckConstraint(
            "(episode_id IS NULL) <> (movie_id IS NULL)",
            name="ck_video_sources_single_parent",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    episode_id = Column(Integer, ForeignKey("episodes.id", ondelete="CASCADE"), nullable=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=True, index=True)

    server_name = Column(String, nullable=False)
    # Display/sort key only; duplicates are allowed
    server_number = Column(Integer, nullable=False)
    video_url = Column(String, nullable=False)
    quality = Column(String, nullable=True)

    episode = relationship("Episode", back_populates="sources")
    movie = relationship("Movie", back_populates="sources")
