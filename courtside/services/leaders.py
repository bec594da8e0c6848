# courtside/services/leaders.py
"""
Statistical leaders.

ESPN hands out leaders in two shapes:

  flat (scoreboard competitions):
    [{name, displayName, leaders: [{athlete, displayValue}]}]

  team-grouped (game summary):
    [{team, leaders: [{name, displayName, leaders: [{athlete, displayValue}]}]}]

Both converge to the same flat list of LeaderEntry.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from courtside.models.types import LeaderEntry, LeadersShape
from courtside.services.games import as_dict, as_list, to_str

logger = logging.getLogger("courtside.leaders")


def detect_leaders_shape(raw_leaders: Any) -> LeadersShape:
    """Classify the raw value by the presence of a `team` key on the outer items."""
    if raw_leaders is None or raw_leaders == []:
        return LeadersShape.EMPTY
    items = [i for i in as_list(raw_leaders) if isinstance(i, dict)]
    if not items:
        return LeadersShape.UNKNOWN
    if any("team" in i for i in items):
        return LeadersShape.TEAM_GROUPED
    if any("leaders" in i for i in items):
        return LeadersShape.FLAT
    return LeadersShape.UNKNOWN


def _entry(category: Dict[str, Any], leader: Dict[str, Any], team_abbr: str) -> Optional[LeaderEntry]:
    athlete = as_dict(leader.get("athlete"))
    name = to_str(athlete.get("displayName") or athlete.get("fullName"))
    if not name:
        return None
    headshot = as_dict(athlete.get("headshot")).get("href")
    return LeaderEntry(
        player_name=name,
        team_abbreviation=team_abbr,
        statistic_name=to_str(category.get("displayName") or category.get("name")),
        display_value=to_str(leader.get("displayValue")),
        headshot_url=headshot if isinstance(headshot, str) and headshot else None,
    )


def _iter_flat(raw_leaders: List[Any]) -> Iterator[Optional[LeaderEntry]]:
    for cat in as_list(raw_leaders):
        cat = as_dict(cat)
        for leader in as_list(cat.get("leaders")):
            leader = as_dict(leader)
            team = as_dict(as_dict(leader.get("athlete")).get("team")) or as_dict(leader.get("team"))
            yield _entry(cat, leader, to_str(team.get("abbreviation")))


def _iter_team_grouped(raw_leaders: List[Any]) -> Iterator[Optional[LeaderEntry]]:
    for group in as_list(raw_leaders):
        group = as_dict(group)
        team_abbr = to_str(as_dict(group.get("team")).get("abbreviation"))
        for cat in as_list(group.get("leaders")):
            cat = as_dict(cat)
            for leader in as_list(cat.get("leaders")):
                yield _entry(cat, as_dict(leader), team_abbr)


def normalize_leaders(raw_leaders: Any) -> List[LeaderEntry]:
    """
    Flatten either leaders shape into LeaderEntry rows, in upstream order.
    Entries without a player name are dropped. No cap is applied here.
    """
    shape = detect_leaders_shape(raw_leaders)
    if shape is LeadersShape.TEAM_GROUPED:
        entries = _iter_team_grouped(raw_leaders)
    elif shape is LeadersShape.FLAT:
        entries = _iter_flat(raw_leaders)
    else:
        if shape is LeadersShape.UNKNOWN:
            logger.debug("unrecognized leaders payload: %r", type(raw_leaders).__name__)
        return []

    out = [e for e in entries if e is not None]
    logger.debug("normalize_leaders shape=%s -> %d entries", shape.value, len(out))
    return out
