"""
Web API routes.
"""

from dayprism.web.metrics import router as metrics_router
from dayprism.web.routes.health_routes import router as health_router
from dayprism.web.routes.intraday_routes import router as intraday_router

__all__ = ["health_router", "intraday_router", "metrics_router"]
