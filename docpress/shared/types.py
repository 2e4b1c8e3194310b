"""Shared types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Per-request metadata attached for logging and tracing."""

    request_id: str
    client: str | None = None
