from typing import Any

from pitch_count_markov.domain.game import EMPTY_ROSTER, Play, Roster
from pitch_count_markov.ingest.payloads import parse_play_by_play


def plays_from_json(all_plays: list[dict[str, Any]]) -> tuple[Play, ...]:
    return parse_play_by_play({"allPlays": all_plays})


class FakeGateway:
    """In-memory gateway; unknown ids resolve to the same empty defaults as the real one."""

    def __init__(
        self,
        rosters: dict[int, Roster] | None = None,
        season_games: dict[int, set[int]] | None = None,
        plays: dict[int, tuple[Play, ...]] | None = None,
    ) -> None:
        self._rosters = rosters or {}
        self._season_games = season_games or {}
        self._plays = plays or {}
        self.boxscore_calls: list[int] = []
        self.season_game_calls: list[tuple[int, int]] = []
        self.play_by_play_calls: list[int] = []

    async def fetch_boxscore(self, game_id: int) -> Roster:
        self.boxscore_calls.append(game_id)
        return self._rosters.get(game_id, EMPTY_ROSTER)

    async def fetch_play_by_play(self, game_id: int) -> tuple[Play, ...]:
        self.play_by_play_calls.append(game_id)
        return self._plays.get(game_id, ())

    async def fetch_player_season_games(self, player_id: int, season: int) -> frozenset[int]:
        self.season_game_calls.append((player_id, season))
        return frozenset(self._season_games.get(player_id, set()))
