import logging

from sqlalchemy.orm import Session
from studio.db import SessionLocal, Base, engine
from studio.models.episode import StudioEpisode  # noqa: F401
from studio.models.show import StudioShow
from studio.services.schedule_generator import SqlEpisodeStore, generate_episodes_for_show, show_definition

logger = logging.getLogger(__name__)

SAMPLE_SHOWS = [
    {
        "title": "Mic'd Podcast Breakfast",
        "category": "talk",
        "schedule_pattern": "weekdays",
        "time_slot_start": "08:00",
        "time_slot_end": "11:00",
    },
    {
        "title": "Fanalysis",
        "category": "sports",
        "schedule_pattern": "daily",
        "time_slot_start": "11:30",
        "time_slot_end": "12:00",
    },
    {
        "title": "Mid-day groove",
        "category": "music",
        "schedule_pattern": "daily",
        "time_slot_start": "12:00",
        "time_slot_end": "14:00",
    },
    {
        "title": "Perspective",
        "category": "talk",
        "schedule_pattern": "weekly",
        "days_of_week": "monday,wednesday,friday",
        "time_slot_start": "18:00",
        "time_slot_end": "20:00",
    },
]


def seed(days_ahead: int = 7) -> None:
    Base.metadata.create_all(bind=engine)
    db: Session = SessionLocal()
    try:
        store = SqlEpisodeStore(db)
        for values in SAMPLE_SHOWS:
            show = StudioShow(**values)
            db.add(show)
            db.commit()
            db.refresh(show)
            result = generate_episodes_for_show(show.id, show_definition(show), days_ahead, store=store)
            logger.info("%s: %s episode(s)", show.title, result["inserted"])
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
