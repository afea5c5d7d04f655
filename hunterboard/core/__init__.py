"""Core configuration and infrastructure helpers."""

from .config import (
    DATABASE_URL,
    DB_CONNECT_TIMEOUT,
    DB_POOL_SIZE,
    DB_RETRY_ATTEMPTS,
    DB_RETRY_BACKOFF_MS,
    DB_SSL_MODE,
    HOST,
    INDEX_FILE,
    LOG_LEVEL,
    PORT,
    STATIC_DIR,
)
from .database import build_engine, normalize_database_url, resolve_ssl_mode
from .log import setup_logging
from .retry import with_retry

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
    "build_engine",
    "normalize_database_url",
    "resolve_ssl_mode",
    "setup_logging",
    "with_retry",
]
