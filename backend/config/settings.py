import os

from dotenv import load_dotenv

# Service-side settings for the watchlist core.
# Connection details live in `config/database.py`.
load_dotenv(override=True)


def _get_env_int(key: str, default: int) -> int:
    """读取整型环境变量，未设置时返回默认值"""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"环境变量 {key} 需要整数值，但实际为 {raw}") from exc


def _get_env_bool(key: str, default: bool) -> bool:
    """读取布尔型环境变量，支持 true/false/1/0 等表达"""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    return raw.lower() in {"1", "true", "y", "yes", "on"}


# ===== Watchlist 一致性开关 =====

# Serialise add/remove/update/move per user inside one process.
WATCHLIST_SERIALIZE_PER_USER = _get_env_bool("WATCHLIST_SERIALIZE_PER_USER", True)
# Delete the series state record once remove has detached it from its category.
WATCHLIST_PURGE_REMOVED_ENTRIES = _get_env_bool("WATCHLIST_PURGE_REMOVED_ENTRIES", True)
# Reject updates that would point an entry at a series tracked by another entry.
WATCHLIST_STRICT_UPDATE = _get_env_bool("WATCHLIST_STRICT_UPDATE", True)

# Catalogue table consulted for series existence / expansion.
SERIES_CATALOG_TABLE = os.getenv("SERIES_CATALOG_TABLE", "series").strip() or "series"
