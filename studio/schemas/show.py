from pydantic import BaseModel, Field
from datetime import datetime


class ShowDefinition(BaseModel):
    """Recurrence input for the schedule generator."""

    title: str = Field(..., min_length=1)
    schedule_pattern: str | None = None
    time_slot_start: str | None = None
    time_slot_end: str | None = None
    days_of_week: list[str] | str | None = None
    is_vod_available: bool | None = None


class EpisodeSlot(BaseModel):
    broadcast_date: str
    scheduled_time: str
    end_time: str
    title: str


class ShowIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    category: str | None = None
    thumbnail_url: str | None = None
    video_url: str | None = None
    schedule_pattern: str | None = None
    time_slot_start: str | None = None
    time_slot_end: str | None = None
    days_of_week: list[str] | str | None = None
    is_vod_available: bool = True
    is_active: bool = True


class ShowUpdateIn(BaseModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    thumbnail_url: str | None = None
    video_url: str | None = None
    schedule_pattern: str | None = None
    time_slot_start: str | None = None
    time_slot_end: str | None = None
    days_of_week: list[str] | str | None = None
    is_vod_available: bool | None = None
    is_active: bool | None = None


class ShowOut(BaseModel):
    id: str
    title: str
    description: str | None = None
    category: str | None = None
    thumbnail_url: str | None = None
    video_url: str | None = None
    schedule_pattern: str | None = None
    time_slot_start: str | None = None
    time_slot_end: str | None = None
    days_of_week: list[str] = []
    is_vod_available: bool
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
