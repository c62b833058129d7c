"""Entry point for the travel map records API.

This script launches the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker or a process manager, where you only specify a single Python
file to run.

Configuration such as ``DATA_DIR``, ``HOST``, ``PORT`` and
``LOG_LEVEL`` is read from environment variables; see
``travel_map_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from travel_map_api.app.core.config import settings
from travel_map_api.app.main import app


async def run_api() -> None:
    """Serve the API on ``settings.host``/``settings.port`` until stopped."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    logging.getLogger(__name__).info("Starting API on %s:%s", settings.host, settings.port)
    asyncio.run(run_api())


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
