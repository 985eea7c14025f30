import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from studio.db import Base


class StudioEpisode(Base):
    __tablename__ = "studio_episodes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    show_id = Column(String(36), ForeignKey("studio_shows.id"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    scheduled_time = Column(String(19), nullable=True)  # local wall clock, YYYY-MM-DDTHH:MM:SS
    end_time = Column(String(19), nullable=True)
    broadcast_date = Column(String(10), nullable=True)  # YYYY-MM-DD
    is_active = Column(Boolean, nullable=False, default=True)
    is_vod_available = Column(Boolean, nullable=False, default=True)
    is_live = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=True)  # seconds
    thumbnail_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    tags = Column(String, nullable=True)
    category = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
