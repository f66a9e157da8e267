"""Connection settings for the PostgreSQL vehicle store."""

from __future__ import annotations

import os

DRIVER_SCHEME = "postgresql+psycopg://"
_BARE_SCHEMES = ("postgres://", "postgresql://")


def database_configured() -> bool:
    return bool(os.getenv("DATABASE_URL"))


def database_url() -> str:
    """DATABASE_URL with the psycopg driver pinned.

    Hosted PostgreSQL providers hand out ``postgres://`` connection strings,
    which SQLAlchemy does not resolve to a driver on its own.
    """
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set; the PostgreSQL vehicle store needs it")

    for scheme in _BARE_SCHEMES:
        if url.startswith(scheme):
            return DRIVER_SCHEME + url[len(scheme):]
    return url
