# courtside/services/espn_basketball.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from courtside.core import config
from courtside.services import espn_common
from courtside.services.espn_common import UpstreamUnavailable, league_url, normalize_date_param

logger = logging.getLogger("courtside.espn_basketball")


async def get_scoreboard_events(league: str, date: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Load the ESPN scoreboard for one league and date.
    - league: 'nba' or 'ncaa_mb'
    - date: 'YYYYMMDD' or 'YYYY-MM-DD' or None (today in NY)

    Raises UpstreamUnavailable when ESPN cannot be reached.
    """
    url = league_url(league, "scoreboard")
    params: Dict[str, Any] = dict(config.LEAGUE_CONFIG[league]["params"])
    params["dates"] = normalize_date_param(date)
    logger.info("%s get_scoreboard_events params=%s", league, params)

    data = await espn_common._get_json(url, params)
    events = data.get("events") if isinstance(data, dict) else None
    if not isinstance(events, list):
        return []

    logger.info("%s scoreboard %s -> %d events", league, params["dates"], len(events))
    return events


async def get_game_summary(league: str, event_id: str) -> Optional[Dict[str, Any]]:
    """
    Per-game summary (plays, leaders, boxscore).

    Returns None instead of raising: a summary that is not published yet is a
    normal state for a game that just tipped off.
    """
    url = league_url(league, "summary")
    try:
        data = await espn_common._get_json(url, {"event": event_id})
    except UpstreamUnavailable as e:
        logger.info("%s summary unavailable for event=%s (status=%s)", league, event_id, e.status_code)
        return None
    return data if isinstance(data, dict) else None
