# courtside/routers/game_routes.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, HTTPException, Path, Query, Request, Response

from courtside.models.types import Game, GameDetail, Play
from courtside.routers.scoreboard_routes import LEAGUE_PATTERN
from courtside.services import espn_basketball
from courtside.services.boxscore import normalize_box_scores, top_performers
from courtside.services.espn_common import UpstreamUnavailable
from courtside.services.games import as_dict, first_dict, normalize_game, normalize_linescores
from courtside.services.leaders import normalize_leaders
from courtside.services.plays import group_plays_by_period
from courtside.services.summary import summary_play_feed

logger = logging.getLogger("courtside.game")
router = APIRouter(tags=["Game"])

ORDER_PATTERN = "^(oldest|newest)$"


async def _load_event_and_summary(
    league: str, game_id: str
) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
    """
    Scoreboard + summary in parallel. A failed scoreboard is tolerated when
    the summary header can stand in for the event.
    """
    events, summary = await asyncio.gather(
        espn_basketball.get_scoreboard_events(league),
        espn_basketball.get_game_summary(league, game_id),
        return_exceptions=True,
    )
    if isinstance(summary, BaseException):
        raise summary
    if isinstance(events, UpstreamUnavailable):
        logger.warning("scoreboard unavailable while loading game %s/%s", league, game_id)
        if summary is None:
            raise HTTPException(status_code=503, detail="data_unavailable")
        events = []
    elif isinstance(events, BaseException):
        raise events

    event = next((e for e in events if isinstance(e, dict) and str(e.get("id")) == game_id), None)
    if event is None and summary is not None:
        # not on today's scoreboard (other date): the summary header has the same shape
        header = as_dict(summary.get("header"))
        if header.get("competitions"):
            event = header
    return event, summary


def _order(plays: List[Play], order: str) -> List[Play]:
    return list(reversed(plays)) if order == "newest" else plays


@router.get("/{league}/games/{game_id}", response_model=GameDetail)
async def game_detail(
    request: Request,
    response: Response,
    league: str = Path(..., pattern=LEAGUE_PATTERN),
    game_id: str = Path(...),
    order: str = Query("oldest", pattern=ORDER_PATTERN),
):
    """
    Everything the game page needs. Summary pieces (plays, leaders, box score)
    are empty until ESPN publishes the summary.
    """
    event, summary = await _load_event_and_summary(league, game_id)
    game: Optional[Game] = normalize_game(event, league) if event else None
    if game is None:
        raise HTTPException(status_code=404, detail="game_not_found")
    request.app.state.status_watch.observe(game)

    data = summary or {}
    feed = summary_play_feed(data, game)

    leaders = normalize_leaders(data.get("leaders"))
    if not leaders:
        # scoreboard competitions carry the flat shape
        comp = first_dict(as_dict(event).get("competitions"))
        leaders = normalize_leaders(comp.get("leaders"))

    box = normalize_box_scores(as_dict(data.get("boxscore")).get("players"))

    response.headers["Cache-Control"] = "no-store"
    return {
        "game": game,
        "plays": _order(feed.plays, order),
        "snapshots": feed.snapshots,
        "firstScorer": feed.first_scorer,
        "leaders": leaders,
        "boxScore": box,
        "spotlight": top_performers([p for team in box for p in team.players]),
        "linescores": normalize_linescores(event),
    }


@router.get("/{league}/games/{game_id}/plays")
async def game_plays_by_period(
    response: Response,
    league: str = Path(..., pattern=LEAGUE_PATTERN),
    game_id: str = Path(...),
    order: str = Query("newest", pattern=ORDER_PATTERN),
):
    """
    Play-by-play grouped under PRE / Q1..Q4 / OT1.. labels.
    """
    summary = await espn_basketball.get_game_summary(league, game_id)
    feed = summary_play_feed(summary)
    groups = group_plays_by_period(feed.plays, newest_first=(order == "newest"))

    response.headers["Cache-Control"] = "no-store"
    return {
        "gameId": game_id,
        "order": order,
        "available": summary is not None,
        "periods": {
            label: [p.model_dump(by_alias=True, mode="json") for p in plays]
            for label, plays in groups.items()
        },
    }
