"""Health module - liveness and backend status."""

from .router import router

__all__ = ["router"]
