"""FastAPI application entry point.

This module wires together the API routers, configures middleware and
startup tasks, maps scoring errors to HTTP responses and exposes the ASGI
application object used by the server.
"""

import os
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from portal.routes import (
    auth,
    users,
    admin,
    catalog,
    quiz,
    dashboard,
    manager,
    progress,
)
from portal.database import create_db_and_tables, async_session
from portal.crud import ensure_training_content
from portal.errors import ScoringError

# The log level can be controlled with an environment variable so
# deployments can adjust verbosity without code changes.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

app = FastAPI(title="Training Portal API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    """Create tables and seed the training catalog."""

    await create_db_and_tables()
    async with async_session() as session:
        await ensure_training_content(session)
    logger.info("Training catalog ready")


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(admin.router)
app.include_router(catalog.router)
app.include_router(quiz.router)
app.include_router(dashboard.router)
app.include_router(manager.router)
app.include_router(progress.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.exception_handler(ScoringError)
async def scoring_exception_handler(request: Request, exc: ScoringError):
    """Render scoring failures so clients can tell them apart by ``code``."""
    if exc.status_code >= 500:
        logger.error("Scoring failure during %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler that logs the stack trace once."""
    logger.exception("Unhandled error during request %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "code": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
