"""
Recurring broadcast schedule generator.

Expands a show's recurrence pattern (daily, weekdays, weekly with explicit
days, or ad-hoc) into concrete dated slots over a rolling window of days,
and bulk-inserts those slots as episode rows for the show.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studio.models.episode import StudioEpisode
from studio.models.show import StudioShow
from studio.schemas.show import EpisodeSlot, ShowDefinition

logger = logging.getLogger(__name__)

# Fixed English names so matching does not depend on the host locale.
WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
WORKING_DAYS = frozenset(WEEKDAY_NAMES[:5])
SCHEDULE_PATTERNS = ("daily", "weekdays", "weekly", "custom")

DEFAULT_START = "00:00"
DEFAULT_END = "00:30"


class EpisodePersistenceError(RuntimeError):
    """Bulk insert of generated episodes failed."""


class EpisodeStore(Protocol):
    def bulk_insert_episodes(self, records: list[dict[str, Any]]) -> int | None:
        ...


def normalize_days(value: Iterable[str] | str | None) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(part.strip().lower() for part in value.split(","))
    return tuple(str(day).lower() for day in value)


def show_definition(show: StudioShow) -> ShowDefinition:
    days = [item for item in (show.days_of_week or "").split(",") if item]
    return ShowDefinition(
        title=show.title,
        schedule_pattern=show.schedule_pattern,
        time_slot_start=show.time_slot_start,
        time_slot_end=show.time_slot_end,
        days_of_week=days,
        is_vod_available=show.is_vod_available,
    )


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def short_date(day: date) -> str:
    return f"{day.month}/{day.day}/{day.year}"


def _airs_on(pattern: str, days: tuple[str, ...], has_start: bool, day_name: str) -> bool:
    if pattern == "daily":
        return True
    if pattern == "weekdays":
        return day_name in WORKING_DAYS
    if pattern == "weekly":
        return not days or day_name in days
    if days:
        return day_name in days
    # No pattern and no days: a show with a start time airs every day in the window.
    return has_start


def compute_episode_slots(
    show: ShowDefinition,
    days_ahead: int = 7,
    today: date | None = None,
) -> list[EpisodeSlot]:
    """
    Expand ``show`` into one slot per airing day, starting at ``today``.

    Time strings are not validated here; whatever is stored on the show is
    composed into the timestamps as-is.
    """
    if days_ahead < 0:
        raise ValueError("days_ahead must be a non-negative integer")

    pattern = (show.schedule_pattern or "").lower()
    days = normalize_days(show.days_of_week)
    start = show.time_slot_start or DEFAULT_START
    end = show.time_slot_end or show.time_slot_start or DEFAULT_END
    base = today or date.today()

    slots: list[EpisodeSlot] = []
    for offset in range(days_ahead):
        day = base + timedelta(days=offset)
        if not _airs_on(pattern, days, bool(show.time_slot_start), weekday_name(day)):
            continue
        broadcast_date = day.isoformat()
        slots.append(
            EpisodeSlot(
                broadcast_date=broadcast_date,
                scheduled_time=f"{broadcast_date}T{start}:00",
                end_time=f"{broadcast_date}T{end}:00",
                title=f"{show.title} - {short_date(day)}",
            )
        )
    return slots


def generate_episodes_for_show(
    show_id: str,
    show: ShowDefinition,
    days_ahead: int = 7,
    *,
    store: EpisodeStore,
    today: date | None = None,
) -> dict[str, int]:
    slots = compute_episode_slots(show, days_ahead, today=today)
    if not slots:
        logger.info("show %s: no slots in the next %s day(s), nothing to insert", show_id, days_ahead)
        return {"inserted": 0}

    now = datetime.now(timezone.utc)
    records = [
        {
            "show_id": show_id,
            "title": slot.title,
            "scheduled_time": slot.scheduled_time,
            "end_time": slot.end_time,
            "is_active": True,
            "broadcast_date": slot.broadcast_date,
            "is_vod_available": show.is_vod_available is not False,
            "created_at": now,
            "updated_at": now,
        }
        for slot in slots
    ]

    try:
        inserted = store.bulk_insert_episodes(records)
    except Exception:
        logger.error("show %s: inserting %s episode(s) failed", show_id, len(records))
        raise
    logger.info("show %s: generated %s slot(s), inserted %s episode(s)", show_id, len(slots), inserted or 0)
    return {"inserted": inserted or 0}


class SqlEpisodeStore:
    def __init__(self, db: Session) -> None:
        self._db = db

    def bulk_insert_episodes(self, records: list[dict[str, Any]]) -> int:
        try:
            self._db.add_all([StudioEpisode(**record) for record in records])
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise EpisodePersistenceError(f"Failed to insert episodes: {exc}") from exc
        return len(records)
