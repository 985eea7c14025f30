import os
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from studio.db import Base, engine, ensure_sqlite_schema
from studio.api import shows, episodes

Base.metadata.create_all(bind=engine)
ensure_sqlite_schema()

API_KEY = os.getenv("STUDIO_API_KEY", "").strip()
LOG_LEVEL = os.getenv("STUDIO_LOG_LEVEL", "INFO").strip().upper() or "INFO"
QUIET_ACCESS_LOG = os.getenv("STUDIO_QUIET_ACCESS_LOG", "1").strip().lower() in {"1", "true", "yes", "on"}

logging.getLogger("studio").setLevel(LOG_LEVEL)

if QUIET_ACCESS_LOG:
    # Keep warning/error lines, suppress normal access noise (200/201 etc).
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

app = FastAPI(title="studio-api")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {
        "ok": True,
        "service": "studio-api",
        "time_utc": datetime.now(timezone.utc).isoformat(),
        "docs": "/docs",
    }


@app.get("/healthz")
def healthz():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error("database health check failed: %s", exc)
        return JSONResponse({"ok": False, "database": "unreachable"}, status_code=503)
    return {"ok": True, "database": "ok"}


@app.middleware("http")
async def api_key_middleware(request: Request, call_next):
    if not API_KEY:
        return await call_next(request)
    path = request.url.path
    if path in {"/", "/healthz"} or path.startswith("/docs") or path.startswith("/openapi.json") or path.startswith("/redoc"):
        return await call_next(request)
    if request.headers.get("X-API-Key") != API_KEY:
        return JSONResponse({"detail": "Unauthorized"}, status_code=401)
    return await call_next(request)


app.include_router(episodes.router)
app.include_router(shows.router)
