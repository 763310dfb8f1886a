import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.concurrency import run_in_threadpool

from navhistory.api.routers import create_history_router, create_systems_router
from navhistory.services.history_store import HistoryStore

logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("GET", "/api/health"),
    ("GET", "/api/current"),
    ("GET", "/api/history"),
    ("POST", "/api/visit"),
    ("POST", "/api/back"),
    ("POST", "/api/forward"),
    ("DELETE", "/api/clear"),
]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _log_banner(history_store: HistoryStore) -> None:
    state = history_store.state
    current = state.current
    lines = ["Browser History Manager backend ready", "API endpoints:"]
    lines.extend(f"  {method:<6} {path}" for method, path in ENDPOINTS)
    lines.append(f"History: {state.total} pages")
    lines.append(f"Current: {current.address if current is not None else 'None'}")
    logger.info("\n".join(lines))


def create_app(history_store: HistoryStore, cors_origins: Optional[list[str]] = None) -> FastAPI:
    """Build the HTTP API around an already constructed store.

    The store is initialized from its snapshot on startup and given a final
    save on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await run_in_threadpool(history_store.init)
        _log_banner(history_store)
        yield
        logger.info("Shutting down server...")
        await run_in_threadpool(history_store.shutdown)

    app = FastAPI(title="NavHistory", lifespan=lifespan)

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET", "POST", "DELETE"],
            allow_headers=["*"],
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods are both reported as unknown endpoints.
        if exc.status_code in (404, 405):
            return _error(404, "Endpoint not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request body for %s: %s", request.url.path, exc.errors())
        return _error(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "Internal server error")

    app.include_router(create_systems_router(history_store))
    app.include_router(create_history_router(history_store))
    return app
