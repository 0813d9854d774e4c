# ironlog/main.py
import logging
import threading
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from ironlog.routers.session import router as session_router
from ironlog.routers.workouts import router as workouts_router
from ironlog.routers.posts import router as posts_router
from ironlog.routers.templates import router as templates_router
from ironlog.routers.stats import router as stats_router
from ironlog.db import SessionLocal, init_db  # for healthz DB check
from ironlog.deps.session import build_session
from ironlog.repositories.gateway import SqlGateway
from ironlog.settings import get_settings

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL.upper())
log = logging.getLogger("uvicorn")

init_db()

app = FastAPI(
    title="IronLog API",
    openapi_tags=[
        {"name": "session", "description": "Live workout session"},
        {"name": "workouts", "description": "Workout history"},
        {"name": "posts", "description": "Activity feed, likes & comments"},
        {"name": "templates", "description": "Reusable workout plans"},
        {"name": "stats", "description": "Levels, streaks, volume & PRs"},
    ],
)

# one workout session per process, shared by every request under the lock
app.state.session_lock = threading.Lock()
app.state.workout_session = build_session()
app.state.gateway = SqlGateway(SessionLocal)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "IronLog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(session_router)
app.include_router(workouts_router)
app.include_router(posts_router)
app.include_router(templates_router)
app.include_router(stats_router)
