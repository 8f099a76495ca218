"""FastAPI application entry point."""
import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from chapterhub.config import settings
from chapterhub.database import Base, engine

# Import routers
from chapterhub.routers import account, events, admin

# Import all models so Base.metadata knows about them
from chapterhub.models.user import User                        # noqa: F401
from chapterhub.models.event import Event                      # noqa: F401
from chapterhub.models.registration import EventRegistration   # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Chapter Hub",
    description="Membership and event registration backend for a high school engineering chapter",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(account.router, prefix="/api", tags=["Account"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}


def serve():
    """Console entry point (``chapterhub-api``)."""
    uvicorn.run("chapterhub.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
