"""
Application factory - builds FastAPI app with all middleware and routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docpress import __version__
from docpress.config import Settings, get_settings
from docpress.modules.health.router import router as health_router
from docpress.modules.render.browser import get_browser_handle
from docpress.modules.render.router import router as render_router
from docpress.shared.errors import DocPressError, ValidationError
from docpress.shared.ids import generate_request_id
from docpress.shared.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)
from docpress.shared.types import RequestContext

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()

    setup_logging(settings.log_level)
    logger.info("Starting DocPress...")

    handle = get_browser_handle()
    if settings.launch_browser_on_startup:
        await handle.acquire()

    logger.info("DocPress started")

    yield

    logger.info("Shutting down DocPress...")
    await handle.aclose()
    logger.info("DocPress stopped")


def _validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into per-field problems."""
    errors = []
    for err in exc.errors():
        # Drop the leading "body"/"query" location segment
        loc = [str(part) for part in err.get("loc", ())[1:]]
        errors.append({
            "field": ".".join(loc) or "body",
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        })
    return errors


def _error_response(request: Request, exc: DocPressError) -> JSONResponse:
    ctx = getattr(request.state, "context", None)
    content: dict[str, Any] = {
        "error": exc.to_dict(),
        "request_id": getattr(ctx, "request_id", None),
    }
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.http_status, content=content)


def build_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="DocPress",
        description="HTML and Markdown to PDF conversion service",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and tracing."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID") or generate_request_id(),
            client=request.client.host if request.client else None,
        )
        request.state.context = ctx
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    @app.exception_handler(DocPressError)
    async def docpress_error_handler(request: Request, exc: DocPressError) -> JSONResponse:
        """Handle DocPressError with consistent JSON response."""
        if exc.http_status >= 500:
            logger.error(f"{exc.code}: {exc.message}")
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report body validation problems as a 400 with per-field errors."""
        return _error_response(request, ValidationError(_validation_errors(exc)))

    app.include_router(health_router, tags=["health"])
    app.include_router(render_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"service": "DocPress", "version": __version__}

    return app
