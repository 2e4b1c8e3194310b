"""Health module routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from docpress import __version__
from docpress.modules.render.browser import get_browser_handle

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    backend: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Report service liveness and the rendering backend lifecycle state.

    The backend is launched lazily, so ``uninitialized`` is a healthy state.
    """
    return HealthResponse(version=__version__, backend=get_browser_handle().state.value)
