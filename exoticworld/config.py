from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from exoticworld.constants import DEFAULT_BASE_URL

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../exoticworld-client
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


def _get_bool(*keys: str, default: bool = False) -> bool:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return v.lower() in ("1", "true", "yes", "on")


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    bot_token: str
    admin_id: int
    api_base_url: str
    connect_timeout: float
    read_timeout: float
    prefs_db_path: str
    currency: str
    decimals: int
    log_level: str
    http_log_bodies: bool


settings = Settings(
    bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
    admin_id=_get_int("ADMIN_ID", "ADMIN_TG_ID", default=0) or 0,
    api_base_url=_get_env("API_BASE_URL", default=DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
    connect_timeout=_get_float("CONNECT_TIMEOUT", default=30.0),
    read_timeout=_get_float("READ_TIMEOUT", default=60.0),
    prefs_db_path=_get_path("PREFS_DB_PATH", "DB_PATH", default=str(ROOT_DIR / "data" / "prefs.db")),
    currency=_get_env("CURRENCY", default="CLP") or "CLP",
    decimals=_get_int("DECIMALS", default=0),
    log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    http_log_bodies=_get_bool("HTTP_LOG_BODIES", default=False),
)


def validate_settings() -> None:
    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN is empty. Set BOT_TOKEN in .env")
    if not settings.admin_id:
        raise RuntimeError("ADMIN_ID is empty. Set ADMIN_ID (or ADMIN_TG_ID) in .env")
