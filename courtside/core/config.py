# courtside/core/config.py
from __future__ import annotations

import os
from typing import Dict, List


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return max(1, int(raw)) if raw else default
    except ValueError:
        return default


# ------------ Upstream (ESPN site API, no key required) ------------
ESPN_BASE_URL = os.getenv(
    "ESPN_BASE_URL",
    "https://site.api.espn.com/apis/site/v2/sports/basketball",
).rstrip("/")
ESPN_TIMEOUT_SECONDS = _float_env("ESPN_TIMEOUT_SECONDS", 10.0)
ESPN_MAX_TRIES = _int_env("ESPN_MAX_TRIES", 2)
# summary fetches in flight at once for the first-points board
ESPN_SUMMARY_CONCURRENCY = _int_env("ESPN_SUMMARY_CONCURRENCY", 8)

HEADERS = {"User-Agent": "Mozilla/5.0", "Accept": "application/json"}

# league tag -> ESPN path segment + extra scoreboard params
LEAGUE_CONFIG: Dict[str, Dict] = {
    "nba": {
        "path": "nba",
        "params": {},
    },
    # Men's college basketball, Division I (groups=50 matches ESPN UI)
    "ncaa_mb": {
        "path": "mens-college-basketball",
        "params": {"groups": 50, "limit": 500},
    },
}

# ------------ App ------------
LOG_LEVEL = os.getenv("COURTSIDE_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS: List[str] = [
    o.strip() for o in os.getenv("COURTSIDE_CORS_ORIGINS", "*").split(",") if o.strip()
] or ["*"]


def describe() -> Dict[str, object]:
    """Effective non-secret configuration, for /status."""
    return {
        "espn_base_url": ESPN_BASE_URL,
        "espn_timeout_seconds": ESPN_TIMEOUT_SECONDS,
        "espn_max_tries": ESPN_MAX_TRIES,
        "espn_summary_concurrency": ESPN_SUMMARY_CONCURRENCY,
        "leagues": sorted(LEAGUE_CONFIG),
        "log_level": LOG_LEVEL,
        "cors_origins": CORS_ORIGINS,
    }
