# courtside/services/games.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from courtside.models.types import Game, GameStatus, Linescores, TeamSide

logger = logging.getLogger("courtside.games")

NO_NETWORK = "—"

# ESPN's curatedRank.current for unranked teams
UNRANKED = 99

_STATE_TO_STATUS = {
    "pre": GameStatus.SCHEDULED,
    "in": GameStatus.LIVE,
    "post": GameStatus.FINAL,
}


# -----------------------------------------------------------
# Small tolerant accessors shared by every normalizer
# -----------------------------------------------------------
def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def first_dict(value: Any) -> Dict[str, Any]:
    items = as_list(value)
    return as_dict(items[0]) if items else {}


def to_int(value: Any) -> Optional[int]:
    """
    ESPN sends numbers as ints, numeric strings, or {"value": .., "displayValue": ..}.
    Anything unparseable is None (never 0).
    """
    if isinstance(value, dict):
        value = value.get("value", value.get("displayValue"))
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if not isinstance(value, (float, str)):
        return None
    try:
        # NaN / inf ("Infinity", "1e400") are not scores
        return int(float(value))
    except (ValueError, OverflowError):
        return None


def to_str(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def period_label(period: int) -> str:
    """0 -> PRE, 1..4 -> Q1..Q4, 5+ -> OT1.."""
    if period <= 0:
        return "PRE"
    if period > 4:
        return f"OT{period - 4}"
    return f"Q{period}"


def _to_ts(dt_str: Any) -> Optional[datetime]:
    if not isinstance(dt_str, str) or not dt_str:
        return None
    # ESPN dates are ISO with a trailing Z and often no seconds
    try:
        return datetime.fromisoformat(dt_str.replace("Z", "+00:00")).astimezone(timezone.utc)
    except ValueError:
        return None


# -----------------------------------------------------------
# Teams
# -----------------------------------------------------------
def _team_rank(competitor: Dict[str, Any]) -> Optional[int]:
    team = as_dict(competitor.get("team"))
    r = as_dict(competitor.get("curatedRank")).get("current")
    if r is None:
        r = team.get("rank")
    rank = to_int(r)
    if rank is None or rank <= 0 or rank >= UNRANKED:
        return None
    return rank


def _team_side(competitor: Dict[str, Any], has_score: bool) -> TeamSide:
    team = as_dict(competitor.get("team"))
    record = first_dict(competitor.get("records")).get("summary")
    team_id = competitor.get("id") or team.get("id")
    return TeamSide(
        team_id=to_str(team_id) or None,
        display_name=to_str(team.get("displayName")),
        short_name=to_str(team.get("shortDisplayName") or team.get("displayName")),
        abbreviation=to_str(team.get("abbreviation")),
        logo_url=to_str(team.get("logo")),
        score=to_int(competitor.get("score")) if has_score else None,
        record=to_str(record),
        rank=_team_rank(competitor),
    )


def _pick_side(competitors: List[Any], side: str) -> Dict[str, Any]:
    for c in competitors:
        c = as_dict(c)
        if c.get("homeAway") == side:
            return c
    return {}


# -----------------------------------------------------------
# Status
# -----------------------------------------------------------
def _resolve_status(state: Any) -> GameStatus:
    status = _STATE_TO_STATUS.get(state)
    if status is None:
        logger.debug("unknown status state %r, treating as scheduled", state)
        return GameStatus.SCHEDULED
    return status


def _first_present(*values: Any) -> Any:
    for v in values:
        if v is not None and v != "":
            return v
    return None


def _networks(comp: Dict[str, Any]) -> List[str]:
    names: List[str] = []
    for b in as_list(comp.get("broadcasts")):
        for n in as_list(as_dict(b).get("names")):
            if isinstance(n, str) and n:
                names.append(n)
    return names or [NO_NETWORK]


# -----------------------------------------------------------
# Public API
# -----------------------------------------------------------
def normalize_game(raw_event: Any, league: str) -> Optional[Game]:
    """
    Normalize one ESPN scoreboard event into a Game.

    Returns None when the event carries no competition record. Missing
    competitors degrade to empty TeamSide values instead of raising.
    """
    ev = as_dict(raw_event)
    comp = first_dict(ev.get("competitions"))
    if not comp:
        logger.debug("event %s has no competition, skipping", ev.get("id"))
        return None

    ev_status = as_dict(ev.get("status"))
    comp_status = as_dict(comp.get("status"))
    stype = as_dict(ev_status.get("type")) or as_dict(comp_status.get("type"))

    status = _resolve_status(stype.get("state"))
    has_score = status is not GameStatus.SCHEDULED

    # event-level first, then competition-level, then the status type itself
    period = to_int(_first_present(ev_status.get("period"), comp_status.get("period"), stype.get("period"))) or 0
    clock = to_str(_first_present(
        ev_status.get("displayClock"), comp_status.get("displayClock"), stype.get("displayClock")
    ))

    competitors = as_list(comp.get("competitors"))
    home = _team_side(_pick_side(competitors, "home"), has_score)
    away = _team_side(_pick_side(competitors, "away"), has_score)

    odds = first_dict(comp.get("odds")).get("details")

    return Game(
        id=to_str(ev.get("id")) or None,
        league=league,
        name=to_str(ev.get("name")),
        short_name=to_str(ev.get("shortName") or ev.get("name")),
        date=_to_ts(ev.get("date") or comp.get("date")),
        status=status,
        status_text=to_str(stype.get("shortDetail") or stype.get("description")),
        period=max(period, 0),
        clock=clock,
        venue=to_str(as_dict(comp.get("venue")).get("fullName")),
        networks=_networks(comp),
        odds=odds if isinstance(odds, str) and odds else None,
        home=home,
        away=away,
    )


def normalize_games(raw_events: Any, league: str) -> List[Game]:
    games: List[Game] = []
    for ev in as_list(raw_events):
        g = normalize_game(ev, league)
        if g is not None:
            games.append(g)
    return games


def normalize_linescores(raw_event: Any) -> Optional[Linescores]:
    """
    Per-period scores for both teams, e.g. headers ["Q1".."Q4", "OT1"].
    A period one side is missing shows as None for that side.
    """
    comp = first_dict(as_dict(raw_event).get("competitions"))
    competitors = as_list(comp.get("competitors"))
    home = _pick_side(competitors, "home")
    away = _pick_side(competitors, "away")
    if not home or not away:
        return None

    home_lines = [to_int(as_dict(ls).get("value")) for ls in as_list(home.get("linescores"))]
    away_lines = [to_int(as_dict(ls).get("value")) for ls in as_list(away.get("linescores"))]
    n = max(len(home_lines), len(away_lines))
    if n == 0:
        return None

    def _pad(lines: List[Optional[int]]) -> List[Optional[int]]:
        return lines + [None] * (n - len(lines))

    return Linescores(
        headers=[period_label(i + 1) for i in range(n)],
        home=_pad(home_lines),
        away=_pad(away_lines),
    )
