"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application starts without any environment at all; in a deployment
you override them via the environment (or a ``.env`` loader of your
choice) before the app is imported.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Tamil Names API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path or connection string for the SQLite database.  A relative
    # path is resolved against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "tamil_names.db")

    # Optional static token guarding the admin routes.  When empty the
    # admin routes are open, which matches how the site has always been
    # run behind a private admin page.
    admin_token: str = os.getenv("ADMIN_TOKEN", "")

    # Number of votes after which a pending name is approved without
    # waiting for a moderator.
    auto_approve_threshold: int = int(os.getenv("AUTO_APPROVE_THRESHOLD", "25"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
