from datetime import date, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from studio.db import get_db
from studio.models.episode import StudioEpisode
from studio.models.show import StudioShow
from studio.schemas.episode import EpisodeListOut, EpisodeOut

router = APIRouter(prefix="/shows", tags=["episodes"])

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
RECENT_DAYS = 7

SORT_COLUMNS = {
    "newest": (StudioEpisode.created_at, "desc"),
    "oldest": (StudioEpisode.created_at, "asc"),
    "most-viewed": (StudioEpisode.views, "desc"),
    "longest": (StudioEpisode.duration, "desc"),
    "shortest": (StudioEpisode.duration, "asc"),
}


def _page_window(page: int, limit: int) -> tuple[int, int]:
    page = max(1, page)
    limit = min(max(1, limit), MAX_PAGE_SIZE)
    return limit, (page - 1) * limit


def _apply_sort(query: Query, sort: str | None) -> Query:
    column, direction = SORT_COLUMNS.get(sort or "", SORT_COLUMNS["newest"])
    ordered = column.desc() if direction == "desc" else column.asc()
    return query.order_by(ordered, StudioEpisode.id.asc())


def _apply_search(query: Query, search: str | None) -> Query:
    term = (search or "").strip()
    if not term:
        return query
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return query.filter(
        or_(
            StudioEpisode.title.ilike(pattern, escape="\\"),
            StudioEpisode.description.ilike(pattern, escape="\\"),
        )
    )


def _shows_by_id(db: Session, show_ids: set[str]) -> dict[str, StudioShow]:
    if not show_ids:
        return {}
    rows = db.query(StudioShow).filter(StudioShow.id.in_(list(show_ids))).all()
    return {row.id: row for row in rows}


def _to_out(episode: StudioEpisode, show: StudioShow | None) -> EpisodeOut:
    return EpisodeOut(
        id=episode.id,
        show_id=episode.show_id,
        show_title=show.title if show else None,
        show_thumbnail=show.thumbnail_url if show else None,
        title=episode.title or "",
        description=episode.description,
        duration=episode.duration,
        thumbnail_url=episode.thumbnail_url,
        video_url=episode.video_url or (show.video_url if show else None),
        views=episode.views or 0,
        scheduled_time=episode.scheduled_time,
        end_time=episode.end_time,
        broadcast_date=episode.broadcast_date,
        created_at=episode.created_at,
        is_live=bool(episode.is_live),
        is_active=bool(episode.is_active),
        is_vod_available=bool(episode.is_vod_available),
        tags=episode.tags,
        category=episode.category,
        show_category=show.category if show else None,
    )


@router.get("/past/all", response_model=EpisodeListOut)
def list_past_episodes(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "newest",
    filter: str = "all",
    search: str | None = None,
    db: Session = Depends(get_db),
):
    limit, offset = _page_window(page, limit)
    # scheduled_time is local wall clock text, so compare against local now in the same format.
    now_local = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")

    query = db.query(StudioEpisode).filter(
        StudioEpisode.is_active.is_(True),
        StudioEpisode.is_live.is_(False),
        or_(StudioEpisode.scheduled_time.is_(None), StudioEpisode.scheduled_time <= now_local),
    )
    if filter == "recent":
        since = (date.today() - timedelta(days=RECENT_DAYS)).isoformat()
        query = query.filter(StudioEpisode.broadcast_date >= since)
    query = _apply_search(query, search)
    episodes = _apply_sort(query, sort).offset(offset).limit(limit).all()

    shows = _shows_by_id(db, {episode.show_id for episode in episodes})
    items = [_to_out(episode, shows.get(episode.show_id)) for episode in episodes]
    return EpisodeListOut(episodes=items, has_more=len(items) == limit)


@router.get("/{show_id}/episodes", response_model=EpisodeListOut)
def list_show_episodes(
    show_id: str,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "newest",
    search: str | None = None,
    db: Session = Depends(get_db),
):
    show = db.query(StudioShow).filter(StudioShow.id == show_id).first()
    if not show:
        raise HTTPException(status_code=404, detail="Show not found")

    limit, offset = _page_window(page, limit)
    query = db.query(StudioEpisode).filter(
        StudioEpisode.show_id == show_id,
        StudioEpisode.is_active.is_(True),
    )
    query = _apply_search(query, search)
    episodes = _apply_sort(query, sort).offset(offset).limit(limit).all()

    items = [_to_out(episode, show) for episode in episodes]
    return EpisodeListOut(episodes=items, has_more=len(items) == limit)
