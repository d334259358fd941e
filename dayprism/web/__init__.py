"""
Web API module: FastAPI service.
"""

from dayprism.web.app import create_app
from dayprism.web.models import APIResponse, ErrorResponse
from dayprism.web.routes import health_router, intraday_router

__all__ = ["create_app", "health_router", "intraday_router", "APIResponse", "ErrorResponse"]
