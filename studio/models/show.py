import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Text

from studio.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StudioShow(Base):
    __tablename__ = "studio_shows"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    schedule_pattern = Column(String(16), nullable=True)  # daily | weekdays | weekly | custom
    time_slot_start = Column(String(5), nullable=True)  # HH:MM
    time_slot_end = Column(String(5), nullable=True)  # HH:MM
    days_of_week = Column(String, nullable=True)  # CSV: monday,wednesday,friday
    is_vod_available = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
