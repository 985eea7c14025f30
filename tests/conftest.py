import os
import tempfile
import uuid
from datetime import date

import pytest

# Point the service at a throw-away database before studio.db is imported.
_DB_DIR = tempfile.mkdtemp(prefix="studio-tests-")
os.environ["STUDIO_DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'studio.db')}"
os.environ.pop("STUDIO_API_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402

from studio.db import SessionLocal  # noqa: E402
from studio.main import app  # noqa: E402

# 2026-10-19 is a Monday.
MONDAY = date(2026, 10, 19)
SATURDAY = date(2026, 10, 24)


def unique_title(prefix: str = "Show") -> str:
    """Generate a show title that no other test uses."""
    return f"{prefix} {uuid.uuid4().hex[:8]}"


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
