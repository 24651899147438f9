"""Entry point for serving the Tamil Names API.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``3000``, the port the web
front-end expects).

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from tamil_names_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    logging.getLogger(__name__).info("Tamil Names API listening on http://%s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
