from typing import Protocol, runtime_checkable

from pitch_count_markov.domain.game import Play, Roster


@runtime_checkable
class StatsGateway(Protocol):
    async def fetch_boxscore(self, game_id: int) -> Roster: ...

    async def fetch_play_by_play(self, game_id: int) -> tuple[Play, ...]: ...

    async def fetch_player_season_games(self, player_id: int, season: int) -> frozenset[int]: ...
