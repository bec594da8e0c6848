# courtside/routers/scoreboard_routes.py
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Path, Query, Request, Response

from courtside.core import config
from courtside.models.types import FirstPointsRow, Game
from courtside.services import espn_basketball
from courtside.services.espn_common import UpstreamUnavailable
from courtside.services.games import normalize_games
from courtside.services.summary import summary_play_feed

logger = logging.getLogger("courtside.scoreboard")
router = APIRouter(tags=["Scoreboard"])

LEAGUE_PATTERN = "^(nba|ncaa_mb)$"


async def load_games(league: str, date: Optional[str]) -> List[Game]:
    try:
        events = await espn_basketball.get_scoreboard_events(league, date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamUnavailable:
        logger.exception("scoreboard failed for league=%s date=%s", league, date)
        raise HTTPException(status_code=503, detail="data_unavailable")
    return normalize_games(events, league)


# -------------------------
# 🏀  Scoreboard
# -------------------------
@router.get("/{league}/scoreboard", response_model=List[Game])
async def scoreboard(
    request: Request,
    response: Response,
    league: str = Path(..., pattern=LEAGUE_PATTERN),
    date: Optional[str] = Query(None, description="YYYY-MM-DD or YYYYMMDD; default = today (America/New_York)"),
):
    """
    All games for a league and date, normalized.
    """
    games = await load_games(league, date)
    request.app.state.status_watch.observe_all(games)
    response.headers["Cache-Control"] = "public, max-age=60"
    return games


# -------------------------
# ⚡  First points
# -------------------------
@router.get("/{league}/first-points", response_model=List[FirstPointsRow])
async def first_points(
    request: Request,
    response: Response,
    league: str = Path(..., pattern=LEAGUE_PATTERN),
    date: Optional[str] = Query(None, description="YYYY-MM-DD or YYYYMMDD; default = today (America/New_York)"),
):
    """
    Scoreboard rows with who scored first in each game. Scheduled games and
    games whose summary is not out yet carry firstScorer = null (pending).
    """
    games = await load_games(league, date)
    request.app.state.status_watch.observe_all(games)

    sem = asyncio.Semaphore(config.ESPN_SUMMARY_CONCURRENCY)

    async def _with_scorer(game: Game) -> FirstPointsRow:
        if game.is_scheduled or not game.id:
            return {"game": game, "firstScorer": None}
        async with sem:
            summary = await espn_basketball.get_game_summary(league, game.id)
        return {"game": game, "firstScorer": summary_play_feed(summary, game).first_scorer}

    rows = await asyncio.gather(*(_with_scorer(g) for g in games))
    response.headers["Cache-Control"] = "public, max-age=60"
    return list(rows)
