from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class SupabaseSettings:
    url: str
    key: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    table: str = "vehicles"

    @property
    def rest_url(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1"


def store_timeout() -> float:
    raw = os.getenv("VEHICLE_STORE_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"VEHICLE_STORE_TIMEOUT must be a number of seconds, got {raw!r}")


def supabase_settings() -> SupabaseSettings | None:
    """Settings for the hosted vehicle store, or None when not configured."""
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")

    if not url and not key:
        return None
    if not url or not key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set together")

    return SupabaseSettings(url=url, key=key, timeout=store_timeout())
