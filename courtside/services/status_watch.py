# courtside/services/status_watch.py
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Iterable, Optional

from courtside.models.types import Game, GameStatus

logger = logging.getLogger("courtside.status_watch")

_ORDER = {
    GameStatus.SCHEDULED: 0,
    GameStatus.LIVE: 1,
    GameStatus.FINAL: 2,
}


class StatusWatch:
    """
    Remembers the last status seen per game id and logs when ESPN moves a
    game backwards (e.g. final -> live). Games are passed through untouched;
    normalization stays stateless.
    """

    def __init__(self, max_games: int = 2000):
        self.max_games = max_games
        self._last: "OrderedDict[str, GameStatus]" = OrderedDict()

    def observe(self, game: Game) -> Optional[GameStatus]:
        """Record `game.status`; returns the previous status when it regressed."""
        if not game.id:
            return None
        key = f"{game.league}:{game.id}"
        previous = self._last.pop(key, None)
        self._last[key] = game.status
        while len(self._last) > self.max_games:
            self._last.popitem(last=False)

        if previous is not None and _ORDER[game.status] < _ORDER[previous]:
            logger.warning(
                "STATUS REGRESSION %s %s: %s -> %s (passing through)",
                game.league,
                game.id,
                previous.value,
                game.status.value,
            )
            return previous
        return None

    def observe_all(self, games: Iterable[Game]) -> None:
        for g in games:
            self.observe(g)
