from pydantic import BaseModel
from datetime import datetime


class EpisodeOut(BaseModel):
    id: str
    show_id: str
    show_title: str | None = None
    show_thumbnail: str | None = None
    title: str
    description: str | None = None
    duration: int | None = None
    thumbnail_url: str | None = None
    video_url: str | None = None
    views: int = 0
    scheduled_time: str | None = None
    end_time: str | None = None
    broadcast_date: str | None = None
    created_at: datetime | None = None
    is_live: bool = False
    is_active: bool = True
    is_vod_available: bool = True
    tags: str | None = None
    category: str | None = None
    show_category: str | None = None


class EpisodeListOut(BaseModel):
    episodes: list[EpisodeOut]
    has_more: bool


class GenerateResultOut(BaseModel):
    inserted: int
