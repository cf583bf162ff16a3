import os
from typing import Optional

from config.settings import _get_env_int

POSTGRES_POOL_MIN_SIZE = _get_env_int("POSTGRES_POOL_MIN_SIZE", 1) or 1
POSTGRES_POOL_MAX_SIZE = _get_env_int("POSTGRES_POOL_MAX_SIZE", 5) or 5


def get_postgres_dsn() -> Optional[str]:
    """Postgres DSN for the watchlist stores, or None to use in-memory stores.

    `.env` loading is centralized in `config.settings`; only environment
    variables are read here.
    """

    dsn = (os.getenv("POSTGRES_DSN") or "").strip()
    if dsn:
        return dsn

    host = (os.getenv("POSTGRES_HOST") or "").strip()
    if not host:
        return None

    port = _get_env_int("POSTGRES_PORT", 5432)
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db = os.getenv("POSTGRES_DB", "watchlist")
    return f"postgresql://{user}:{password}@{host}:{port}/{db}"
