"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from upfor import models  # noqa: F401  (registers every table with Base.metadata)
from upfor.config import settings
from upfor.database import Base, engine
from upfor.errors import request_validation_handler
from upfor.routers import calendar, events, friends, status, users

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
        logger.info("SQLite schema ensured at %s", settings.DATABASE_URL)
    yield


app = FastAPI(
    title="Up For Something",
    description="Friends share when they are up for plans, host events and respond to invitations",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(friends.router, prefix="/api/friends", tags=["Friends"])
app.include_router(status.router, prefix="/api/status", tags=["Status"])
app.include_router(calendar.router, prefix="/api/calendar", tags=["Calendar"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
