"""
Runtime settings read from the environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    currency_symbol: str = "$"


def _split_origins(raw: str) -> List[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Build settings from POLICYSCAN_* environment variables.

    Cached; call `get_settings.cache_clear()` after changing the environment.
    """
    return Settings(
        log_level=os.getenv("POLICYSCAN_LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_origins(os.getenv("POLICYSCAN_CORS_ORIGINS", "*")),
        currency_symbol=os.getenv("POLICYSCAN_CURRENCY_SYMBOL", "$"),
    )


__all__ = ["Settings", "get_settings"]
