"""FastAPI application entry point."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feynman.api import concepts, courses, lectures, reviews
from feynman.core.config import CORS_ORIGINS
from feynman.core.logging import setup_logging
from feynman.persistence.db import init_db

# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
app = FastAPI(
    title="Super Feynman API",
    description="Learn by teaching: lecture ingestion, Socratic review sessions and feedback",
    version="1.0.0",
)

# CORS: allow everything for local dev unless CORS_ORIGINS narrows it
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------
# Startup: logging + DB schema
# ------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    setup_logging()
    init_db()


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(courses.router)
app.include_router(lectures.router)
app.include_router(concepts.router)
app.include_router(reviews.router)
