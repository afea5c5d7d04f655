"""Database engine construction and connection-security policy."""

from __future__ import annotations

import ipaddress
from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine, make_url
from sqlmodel import create_engine

SSL_STRICT = "strict"
SSL_RELAXED = "relaxed"
SSL_DISABLED = "disabled"
SSL_MODES = (SSL_STRICT, SSL_RELAXED, SSL_DISABLED)

# libpq sslmode for each setting. "require" encrypts without verifying the
# server certificate.
_LIBPQ_SSLMODE = {
    SSL_STRICT: "verify-full",
    SSL_RELAXED: "require",
    SSL_DISABLED: "disable",
}

_PRIVATE_SUFFIXES = (".internal", ".local", ".localdomain")


def normalize_database_url(url: str) -> str:
    """Rewrite Heroku/Railway style ``postgres://`` URLs for SQLAlchemy."""

    url = url.strip()
    if url.startswith("postgres://"):
        return "postgresql+psycopg2://" + url[len("postgres://"):]
    return url


def is_private_host(host: Optional[str]) -> bool:
    if not host:
        return False
    host = host.strip().lower()
    if host == "localhost" or host.endswith(_PRIVATE_SUFFIXES):
        return True
    try:
        addr = ipaddress.ip_address(host)
    except ValueError:
        return False
    return addr.is_private or addr.is_loopback


def resolve_ssl_mode(url: str, explicit: Optional[str] = None) -> str:
    """Pick the connection-security setting for ``url``.

    An explicit setting always wins. Otherwise private network hosts connect
    without TLS and everything else uses TLS without certificate validation.
    """

    if explicit:
        mode = explicit.strip().lower()
        if mode not in SSL_MODES:
            raise ValueError(
                f"Unknown DB_SSL_MODE {explicit!r}; expected one of {', '.join(SSL_MODES)}"
            )
        return mode
    host = make_url(normalize_database_url(url)).host
    return SSL_DISABLED if is_private_host(host) else SSL_RELAXED


def build_engine(
    url: str,
    *,
    ssl_mode: Optional[str] = None,
    pool_size: int = 3,
    connect_timeout: int = 5,
) -> Engine:
    """Create the process-wide engine and its bounded connection pool."""

    url = normalize_database_url(url)
    backend = make_url(url).get_backend_name()

    if backend == "sqlite":
        return create_engine(url, connect_args={"check_same_thread": False})

    connect_args: Dict[str, Any] = {"connect_timeout": connect_timeout}
    if backend == "postgresql":
        connect_args["sslmode"] = _LIBPQ_SSLMODE[resolve_ssl_mode(url, ssl_mode)]

    return create_engine(
        url,
        connect_args=connect_args,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=connect_timeout,
        pool_pre_ping=True,
    )


__all__ = [
    "SSL_DISABLED",
    "SSL_MODES",
    "SSL_RELAXED",
    "SSL_STRICT",
    "build_engine",
    "is_private_host",
    "normalize_database_url",
    "resolve_ssl_mode",
]
