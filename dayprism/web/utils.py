"""Web helpers."""

from fastapi import Request


def get_request_id(request: Request) -> str | None:
    """Return the ``X-Request-ID`` header, if any."""
    return request.headers.get("X-Request-ID")
