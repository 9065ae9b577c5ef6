"""Configuration centralisée.

Charge le .env une seule fois et expose un objet Settings typé pour le
reste du code. Les valeurs sont lues dans l'environnement au moment de
get_settings(), pas à l'import du module.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

DEFAULT_API_URL = "https://jsonplaceholder.typicode.com/users"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 10.0
    # la collection de démo accepte POST/PUT/DELETE mais ne conserve rien
    persist_writes: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=(os.getenv("CLIENTS_API_URL") or DEFAULT_API_URL).rstrip("/"),
            request_timeout=_env_float("CLIENTS_API_TIMEOUT", 10.0),
            persist_writes=_env_bool("CLIENTS_API_PERSISTS_WRITES", False),
            log_level=(os.getenv("CLIENT_DIRECTORY_LOG_LEVEL") or "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
