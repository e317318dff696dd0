"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from box_optimizer.catalog import STANDARD_BOXES, load_catalog
from box_optimizer.models import BoxTemplate

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    catalog_path: Optional[str] = None
    log_level: str = "INFO"
    cors_origin_regex: str = ".*"

    def catalog(self) -> tuple[BoxTemplate, ...]:
        """Box catalog to pack with: the configured file, else the built-in boxes."""
        if self.catalog_path:
            return load_catalog(self.catalog_path)
        return STANDARD_BOXES


def get_settings() -> Settings:
    # .env only fills in what the environment does not already set
    load_dotenv(override=False)
    return Settings(
        catalog_path=os.getenv("BOX_OPTIMIZER_CATALOG") or None,
        log_level=os.getenv("BOX_OPTIMIZER_LOG_LEVEL", "INFO").upper(),
        cors_origin_regex=os.getenv("BOX_OPTIMIZER_CORS_ORIGIN_REGEX", ".*"),
    )


def configure_logging(level: str = "INFO") -> None:
    # No-op when the root logger already has handlers (uvicorn, pytest).
    logging.basicConfig(level=level, format=LOG_FORMAT)
