"""Identifier helpers."""

import uuid


def generate_id(prefix: str) -> str:
    """Generate a short prefixed identifier, e.g. ``req_1a2b3c4d5e6f7a8b``."""
    return f"{prefix}_{uuid.uuid4().hex[:16]}"


def generate_request_id() -> str:
    return generate_id("req")
