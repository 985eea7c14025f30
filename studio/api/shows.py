import logging
import os

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from studio.db import get_db
from studio.models.episode import StudioEpisode
from studio.models.show import StudioShow
from studio.schemas.episode import GenerateResultOut
from studio.schemas.show import EpisodeSlot, ShowIn, ShowOut, ShowUpdateIn
from studio.services.schedule_generator import (
    SCHEDULE_PATTERNS,
    WEEKDAY_NAMES,
    EpisodePersistenceError,
    SqlEpisodeStore,
    compute_episode_slots,
    generate_episodes_for_show,
    show_definition,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/shows", tags=["shows"])

DEFAULT_DAYS_AHEAD = int(os.getenv("STUDIO_DEFAULT_DAYS_AHEAD", "7"))
MAX_DAYS_AHEAD = int(os.getenv("STUDIO_MAX_DAYS_AHEAD", "60"))


def _normalize_pattern(value: str | None) -> str | None:
    pattern = (value or "").strip().lower()
    if not pattern:
        return None
    if pattern not in SCHEDULE_PATTERNS:
        raise HTTPException(
            status_code=400,
            detail=f"schedule_pattern must be one of: {', '.join(SCHEDULE_PATTERNS)}",
        )
    return pattern


def _normalize_hhmm(value: str | None, field_name: str) -> str | None:
    raw = (value or "").strip()
    if not raw:
        return None
    parts = raw.split(":")
    if len(parts) != 2:
        raise HTTPException(status_code=400, detail=f"{field_name} must be HH:MM")
    try:
        hour = int(parts[0])
        minute = int(parts[1])
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} value") from exc
    if hour < 0 or hour > 23 or minute < 0 or minute > 59:
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} range")
    return f"{hour:02d}:{minute:02d}"


def _normalize_days_csv(value: list[str] | str | None) -> str | None:
    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else value
    days: set[str] = set()
    for item in items:
        day = str(item).strip().lower()
        if not day:
            continue
        if day not in WEEKDAY_NAMES:
            raise HTTPException(status_code=400, detail=f"days_of_week contains unknown day: {item}")
        days.add(day)
    if not days:
        return None
    return ",".join(day for day in WEEKDAY_NAMES if day in days)


def _split_days(csv: str | None) -> list[str]:
    return [item for item in (csv or "").split(",") if item]


def _find_show_or_404(db: Session, show_id: str) -> StudioShow:
    show = db.query(StudioShow).filter(StudioShow.id == show_id).first()
    if not show:
        raise HTTPException(status_code=404, detail="Show not found")
    return show


def _to_out(show: StudioShow) -> ShowOut:
    return ShowOut(
        id=show.id,
        title=show.title,
        description=show.description,
        category=show.category,
        thumbnail_url=show.thumbnail_url,
        video_url=show.video_url,
        schedule_pattern=show.schedule_pattern,
        time_slot_start=show.time_slot_start,
        time_slot_end=show.time_slot_end,
        days_of_week=_split_days(show.days_of_week),
        is_vod_available=bool(show.is_vod_available),
        is_active=bool(show.is_active),
        created_at=show.created_at,
        updated_at=show.updated_at,
    )


def _generate(db: Session, show: StudioShow, days_ahead: int) -> dict[str, int]:
    try:
        return generate_episodes_for_show(
            show.id,
            show_definition(show),
            days_ahead,
            store=SqlEpisodeStore(db),
        )
    except EpisodePersistenceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("", response_model=ShowOut)
def create_show(
    payload: ShowIn,
    generate_days_ahead: int | None = Query(None, ge=0, le=MAX_DAYS_AHEAD),
    db: Session = Depends(get_db),
):
    title = payload.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="title is required")
    show = StudioShow(
        title=title,
        description=(payload.description or "").strip() or None,
        category=(payload.category or "").strip() or None,
        thumbnail_url=payload.thumbnail_url,
        video_url=payload.video_url,
        schedule_pattern=_normalize_pattern(payload.schedule_pattern),
        time_slot_start=_normalize_hhmm(payload.time_slot_start, "time_slot_start"),
        time_slot_end=_normalize_hhmm(payload.time_slot_end, "time_slot_end"),
        days_of_week=_normalize_days_csv(payload.days_of_week),
        is_vod_available=payload.is_vod_available,
        is_active=payload.is_active,
    )
    db.add(show)
    db.commit()
    db.refresh(show)
    logger.info("created show %s (%s)", show.id, show.title)

    if generate_days_ahead:
        try:
            _generate(db, show, generate_days_ahead)
        except HTTPException:
            # The client gets no id back, so drop the show rather than leave an orphan.
            logger.warning("removing show %s after failed episode generation", show.id)
            db.delete(show)
            db.commit()
            raise
        db.refresh(show)
    return _to_out(show)


@router.get("", response_model=list[ShowOut])
def list_shows(active_only: bool = False, db: Session = Depends(get_db)):
    query = db.query(StudioShow)
    if active_only:
        query = query.filter(StudioShow.is_active.is_(True))
    return [_to_out(show) for show in query.order_by(StudioShow.created_at.desc()).all()]


@router.get("/{show_id}", response_model=ShowOut)
def get_show(show_id: str, db: Session = Depends(get_db)):
    return _to_out(_find_show_or_404(db, show_id))


@router.put("/{show_id}", response_model=ShowOut)
def update_show(show_id: str, payload: ShowUpdateIn, db: Session = Depends(get_db)):
    show = _find_show_or_404(db, show_id)
    fields = payload.model_dump(exclude_unset=True)

    if "title" in fields:
        title = (fields["title"] or "").strip()
        if not title:
            raise HTTPException(status_code=400, detail="title is required")
        show.title = title
    if "description" in fields:
        show.description = (fields["description"] or "").strip() or None
    if "category" in fields:
        show.category = (fields["category"] or "").strip() or None
    if "thumbnail_url" in fields:
        show.thumbnail_url = fields["thumbnail_url"]
    if "video_url" in fields:
        show.video_url = fields["video_url"]
    if "schedule_pattern" in fields:
        show.schedule_pattern = _normalize_pattern(fields["schedule_pattern"])
    if "time_slot_start" in fields:
        show.time_slot_start = _normalize_hhmm(fields["time_slot_start"], "time_slot_start")
    if "time_slot_end" in fields:
        show.time_slot_end = _normalize_hhmm(fields["time_slot_end"], "time_slot_end")
    if "days_of_week" in fields:
        show.days_of_week = _normalize_days_csv(fields["days_of_week"])
    if fields.get("is_vod_available") is not None:
        show.is_vod_available = fields["is_vod_available"]
    if fields.get("is_active") is not None:
        show.is_active = fields["is_active"]

    db.commit()
    db.refresh(show)
    return _to_out(show)


@router.delete("/{show_id}")
def delete_show(show_id: str, db: Session = Depends(get_db)):
    show = _find_show_or_404(db, show_id)
    removed = (
        db.query(StudioEpisode)
        .filter(StudioEpisode.show_id == show_id)
        .delete(synchronize_session=False)
    )
    db.delete(show)
    db.commit()
    return {"ok": True, "episodes_deleted": removed}


@router.get("/{show_id}/slots", response_model=list[EpisodeSlot])
def preview_slots(
    show_id: str,
    days_ahead: int = Query(DEFAULT_DAYS_AHEAD, ge=0, le=MAX_DAYS_AHEAD),
    db: Session = Depends(get_db),
):
    show = _find_show_or_404(db, show_id)
    return compute_episode_slots(show_definition(show), days_ahead)


@router.post("/{show_id}/generate-episodes", response_model=GenerateResultOut)
def generate_episodes(
    show_id: str,
    days_ahead: int = Query(DEFAULT_DAYS_AHEAD, ge=0, le=MAX_DAYS_AHEAD),
    db: Session = Depends(get_db),
):
    show = _find_show_or_404(db, show_id)
    return _generate(db, show, days_ahead)
