import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .config import settings
from .database import init_db, dispose_engine
from .core.errors import register_exception_handlers
from .api import (
    auth,
    users,
    teachers,
    students,
    courses,
    modules,
    enrollments,
    assignments,
    submissions,
    blog,
    hero,
    features,
    statistics,
    charters,
    about,
    site_settings,
    dashboard,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Bilingual (German/Farsi) language school backend",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(teachers.router)
app.include_router(students.router)
app.include_router(courses.router)
app.include_router(modules.router)
app.include_router(enrollments.router)
app.include_router(assignments.router)
app.include_router(submissions.router)
app.include_router(blog.router)
app.include_router(hero.router)
app.include_router(features.router)
app.include_router(statistics.router)
app.include_router(charters.router)
app.include_router(about.router)
app.include_router(site_settings.router)
app.include_router(dashboard.router)


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("%s started", settings.app_name)


@app.on_event("shutdown")
def on_shutdown():
    dispose_engine()


@app.get("/api/health")
def health_check():
    return {"status": "healthy"}
