"""
FastAPI application entry point for the Movie Catalog API.

Run: uvicorn catalog.api.main:app --host 0.0.0.0 --port 5000
  or: python -m catalog.api.main  (API_HOST / API_PORT from the environment)
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api.config import (
    get_api_host, get_api_port, get_cors_origins, get_database_path, get_log_level, get_log_file
)
from catalog.api.errors import register_exception_handlers
from catalog.api.routers import movies, system
from catalog.database.init_db import init_database
from catalog.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Movie Catalog API",
    description="REST API for browsing, searching and administering a movie catalog",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(movies.router)
app.include_router(system.router)


@app.on_event("startup")
def startup_event():
    configure_api_logging(level=get_log_level(), log_file=get_log_file())
    logger.info("Starting Movie Catalog API...")
    init_database(db_path=get_database_path())
    logger.info("Movie Catalog API ready")


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "success": True,
        "message": "Movie App API is running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_api_host(), port=get_api_port())
