"""
Web service entry point.
"""

import uvicorn

from dayprism.core.config import ConfigManager


def main() -> None:
    """Start the FastAPI web service."""

    web = ConfigManager().get_config().web
    uvicorn.run(
        "dayprism.web.app:create_app",
        factory=True,
        host=web.host,
        port=web.port,
        reload=web.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
