"""FastAPI application factory, middleware, and error handlers."""

import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware import Middleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from app import config
from app.errors import WorldAPIError, error_response
from app.logging_config import logger
from app.metrics import observe_request, route_template
from app.routes import api_router, router
from app.world_db.database import connect


async def error_envelope_handler(request: Request, exc: Exception):
    """Convert any error into the JSON error envelope.

    World database errors were logged where they were detected, so only
    errors nobody handled are logged here.

    Args:
        request: Incoming HTTP request.
        exc: Raised error.

    Returns:
        A JSON response built by ``error_response``.
    """
    status_code, body = error_response(exc)
    if status_code >= 500 and not isinstance(exc, WorldAPIError):
        logger.error(
            "REQUEST_FAILED",
            path=request.url.path,
            error_type=exc.__class__.__name__,
            error=body["error"],
        )
    return JSONResponse(status_code=status_code, content=body)


async def request_context(request: Request, call_next):
    """Tag the request with an ID, log it, and record metrics.

    Errors that escape every route handler are turned into the error
    envelope here, so the response still passes back through CORS.

    Args:
        request: Incoming HTTP request.
        call_next: Handler for the next middleware/app.

    Returns:
        The downstream response, carrying an ``x-request-id`` header.
    """
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    bind_contextvars(request_id=request_id)
    start = time.perf_counter()
    try:
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await error_envelope_handler(request, exc)
        response.headers["x-request-id"] = request_id
        duration_s = time.perf_counter() - start
        logger.info(
            "HTTP_REQUEST",
            method=request.method,
            path=request.url.path,
            route=route_template(request),
            status_code=response.status_code,
            duration_ms=round(duration_s * 1000, 2),
        )
        observe_request(request, response.status_code, duration_s)
        return response
    finally:
        clear_contextvars()


def build_middleware(cors_origins: list[str]) -> list[Middleware]:
    """Return the middleware chain, outermost first.

    Args:
        cors_origins: Origins allowed by the CORS middleware.
    """
    return [
        Middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["x-request-id"],
        ),
        Middleware(BaseHTTPMiddleware, dispatch=request_context),
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Only a database opened here is closed here; injected ones belong to the caller.
    owns_database = app.state.database is None
    if owns_database:
        app.state.database = await connect(config.DATABASE_URL)
    try:
        yield
    finally:
        if owns_database:
            await app.state.database.close()
            app.state.database = None


def create_app(database=None, cors_origins: list[str] | None = None) -> FastAPI:
    """Build the World API application.

    Args:
        database: Open database handle to serve from. When omitted the
            application connects to ``config.DATABASE_URL`` on startup and
            refuses to start if that fails.
        cors_origins: Origins allowed by CORS, defaults to the configured list.

    Returns:
        The configured FastAPI application.
    """
    app = FastAPI(
        title="World API",
        lifespan=lifespan,
        middleware=build_middleware(cors_origins or config.CORS_ALLOW_ORIGINS),
    )
    app.state.database = database

    for exc_class in (
        WorldAPIError,
        StarletteHTTPException,
        RequestValidationError,
        Exception,
    ):
        app.add_exception_handler(exc_class, error_envelope_handler)

    app.include_router(router)
    app.include_router(api_router)

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Expose Prometheus metrics for scraping."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()


def run():
    """Serve the application until the process is terminated."""
    logger.info("SERVER_STARTING", host=config.HOST, port=config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
