"""Environment-driven configuration for the tolerant-csv service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass


@dataclass(slots=True)
class Settings:
    """Runtime settings loaded from environment variables."""

    max_upload_bytes: int
    log_level: str

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables with sensible defaults."""

        max_upload_bytes = int(os.getenv("TOLERANT_CSV_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
        log_level = os.getenv("LOG_LEVEL", "INFO")
        return cls(max_upload_bytes=max_upload_bytes, log_level=log_level)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
