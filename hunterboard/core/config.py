"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


# Database -------------------------------------------------------------------
# Absence is tolerated; the service starts and reports "DB error" per request.
DATABASE_URL = _env_str("DATABASE_URL")

# One of "strict", "relaxed", "disabled". Unset means derive it from the host.
DB_SSL_MODE = _env_str("DB_SSL_MODE")

DB_POOL_SIZE = _env_int("DB_POOL_SIZE", 3)
DB_CONNECT_TIMEOUT = _env_int("DB_CONNECT_TIMEOUT", 5)
DB_RETRY_ATTEMPTS = _env_int("DB_RETRY_ATTEMPTS", 3)
DB_RETRY_BACKOFF_MS = _env_int("DB_RETRY_BACKOFF_MS", 300)


# HTTP -----------------------------------------------------------------------
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 3000)

STATIC_DIR = Path(os.getenv("STATIC_DIR", "public"))
INDEX_FILE = os.getenv("INDEX_FILE", "index.html")


# Runtime behaviour ----------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


__all__ = [
    "DATABASE_URL",
    "DB_CONNECT_TIMEOUT",
    "DB_POOL_SIZE",
    "DB_RETRY_ATTEMPTS",
    "DB_RETRY_BACKOFF_MS",
    "DB_SSL_MODE",
    "HOST",
    "INDEX_FILE",
    "LOG_LEVEL",
    "PORT",
    "STATIC_DIR",
]
