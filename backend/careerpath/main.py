"""
Career Guidance API - Main Application Entry Point

This module initializes the FastAPI application with:
- Logging configuration
- Database schema initialization
- CORS, request logging, timeout and metrics middleware
- Error handlers for the application exception taxonomy
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup/shutdown)
    ├── Middleware (CORS, timeout, request log, Prometheus)
    └── API Router (/api)
        ├── /auth - Sign-in, sign-out, current user
        ├── /profile - Onboarding profile
        ├── /assessments - Psychometric assessments
        ├── /skills, /user-skills - Skill catalog and user levels
        ├── /career-recommendations - Recommendations and bookmarks
        └── /courses, /user-courses - Course catalog and enrollments
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from careerpath import __version__
from careerpath.config import get_settings
from careerpath.database import init_db
from careerpath.api import api_router
from careerpath.exceptions import register_exception_handlers
from careerpath.middleware import setup_metrics, RequestLoggingMiddleware, RequestTimeoutMiddleware

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Create any missing tables

    Yields:
        Control to the application during its runtime
    """
    await init_db()
    logger.info(f"Career guidance API v{__version__} started ({settings.recommendation_strategy} recommendations)")
    yield
    logger.info("Shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Career Guidance API",
        description="Profiles, assessments and career/course recommendations",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(RequestLoggingMiddleware)
    setup_metrics(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
