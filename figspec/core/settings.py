from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv


@dataclass
class Settings:
    log_level: str
    max_upload_bytes: int
    preview_rows: int
    cors_origins: List[str]


def _origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings(
        log_level=os.getenv("FIGSPEC_LOG_LEVEL", "INFO").upper(),
        max_upload_bytes=int(os.getenv("FIGSPEC_MAX_UPLOAD_BYTES", str(20 * 1024 * 1024))),
        preview_rows=int(os.getenv("FIGSPEC_PREVIEW_ROWS", "20")),
        cors_origins=_origins(os.getenv("FIGSPEC_CORS_ORIGINS", "*")),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
