"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started without any configuration at all; in a deployment
you should at least point ``DATA_DIR`` at a persistent volume.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Travel Map Records API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Directory holding one JSON file per collection.  If a relative
    # path is provided, it is resolved relative to the project root by
    # the ``store`` module.
    data_dir: str = os.getenv("DATA_DIR", "data")

    # Number of audit log entries kept; older entries are evicted.
    audit_log_limit: int = int(os.getenv("AUDIT_LOG_LIMIT", "500"))

    # Comma-separated list of allowed CORS origins.  ``*`` allows all.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Requests declaring a larger body are rejected with HTTP 413.
    max_body_bytes: int = int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024)))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should therefore be set before importing this module.
settings = Settings()
