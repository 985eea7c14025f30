from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy import text
import os

DATABASE_URL = os.getenv("STUDIO_DATABASE_URL", "sqlite:///./studio.db").strip()

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_sqlite_schema():
    """
    Lightweight runtime schema patching for SQLite.

    Adds indexes `Base.metadata.create_all()` does not declare, without
    requiring Alembic.
    """
    if not DATABASE_URL.startswith("sqlite"):
        return

    with engine.begin() as conn:
        # Lookup only; duplicates for a (show, date) pair are allowed.
        conn.execute(
            text(
                "CREATE INDEX IF NOT EXISTS ix_studio_episodes_show_date "
                "ON studio_episodes(show_id, broadcast_date)"
            )
        )
