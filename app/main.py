"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.router import api_router
from app.config import get_settings
from app.db.engine import create_tables, engine
from app.domain.errors import IllegalStateError, NotFoundError
from app.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().logging.level)
    await create_tables()
    logger.info("QC photo documentation service started")
    yield
    await engine.dispose()


app = FastAPI(
    title="QC Photo Docs",
    description="Quality-control photo documentation: photo review, order readiness and QC reports.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(api_router)


# Domain errors surface as HTTP status codes. Routers raise HTTPException
# only for lookups and request-shape problems.

@app.exception_handler(IllegalStateError)
async def illegal_state_handler(request: Request, exc: IllegalStateError):
    return JSONResponse(
        status_code=409,
        content={"detail": exc.message, "current_state": exc.current_state_name},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/api/health")
async def health():
    return {"status": "ok"}
