# courtside/services/espn_common.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
from zoneinfo import ZoneInfo

from courtside.core import config

logger = logging.getLogger("courtside.espn_common")


class UpstreamUnavailable(RuntimeError):
    """ESPN could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# -----------------------------------------------------------
# Shared HTTP helper with retries
# -----------------------------------------------------------
async def _get_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    max_tries: Optional[int] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """
    Shared helper for ESPN JSON fetch with basic retry + logging.

    Client errors (4xx other than 429) are not retried: a missing summary
    stays missing no matter how often we ask.
    """
    tries = max_tries or config.ESPN_MAX_TRIES
    last: Optional[Exception] = None
    status_code: Optional[int] = None

    async with httpx.AsyncClient(
        timeout=config.ESPN_TIMEOUT_SECONDS,
        headers=config.HEADERS,
        transport=transport,
    ) as client:
        for attempt in range(1, tries + 1):
            try:
                r = await client.get(url, params=params)
                r.raise_for_status()
                return r.json()
            except httpx.HTTPStatusError as e:
                last = e
                status_code = e.response.status_code
                logger.warning(
                    "espn_common _get_json attempt %s failed: HTTP %s for %s",
                    attempt,
                    status_code,
                    url,
                )
                if 400 <= status_code < 500 and status_code != 429:
                    break
            except (httpx.HTTPError, ValueError) as e:
                # ValueError: body was not JSON
                last = e
                status_code = None
                logger.warning(
                    "espn_common _get_json attempt %s failed: %s",
                    attempt,
                    repr(e),
                )

    logger.error(
        "espn_common _get_json giving up on %s params=%s: %s",
        url,
        params,
        repr(last),
    )
    raise UpstreamUnavailable(f"ESPN request failed: {url}", status_code) from last


# -----------------------------------------------------------
# Date normalization helper (NY-local “today” by default)
# -----------------------------------------------------------
def normalize_date_param(date: Optional[str]) -> str:
    """
    Normalize a date for ESPN's `dates` param.

    Accepts:
      - None            -> today's date in America/New_York, YYYYMMDD
      - 'YYYYMMDD'      -> returned unchanged
      - 'YYYY-MM-DD'    -> dashes removed
      - anything else   -> ValueError
    """
    if date:
        s = date.strip()
        if len(s) == 8 and s.isdigit():
            return s
        if len(s) == 10 and "-" in s:
            parts = s.split("-")
            if len(parts) == 3 and all(p.isdigit() for p in parts):
                return "".join(parts)
        raise ValueError(f"date must be YYYYMMDD or YYYY-MM-DD, got {date!r}")

    now = datetime.now(ZoneInfo("America/New_York"))
    return now.strftime("%Y%m%d")


def league_url(league: str, endpoint: str) -> str:
    cfg = config.LEAGUE_CONFIG.get(league)
    if not cfg:
        raise ValueError(f"Unsupported league: {league}")
    return f"{config.ESPN_BASE_URL}/{cfg['path']}/{endpoint}"
