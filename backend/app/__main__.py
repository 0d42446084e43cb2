"""
Trainer API Backend: Command-Line Entry Point
==============================================

Usage (from the backend/ directory, next to mongo.json):
    python -m app

Runs uvicorn on BACKEND_HOST:BACKEND_PORT (default 0.0.0.0:8080).
"""

import uvicorn

from app.config import settings


def main() -> None:
    """Serve the application until the process is killed."""
    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
