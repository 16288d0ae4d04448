"""Season-wide aggregation of pitch-count transitions for a game's starters.

A run resolves the starting players of one game, gathers every game any of
them appeared in that season (the coverage set), fetches play-by-play for the
whole coverage set, and only then extracts and tallies transitions per
pitcher. Both fetch batches are fan-out/fan-in: every request settles before
the next stage runs. Failed requests arrive as empty values from the gateway;
a gateway that raises instead is logged and treated the same way.
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from pitch_count_markov.domain.count_state import StateSpace, default_state_space
from pitch_count_markov.domain.game import Play
from pitch_count_markov.domain.outcome import CountOutcomeDistribution, PitchRecord
from pitch_count_markov.domain.pitch_calls import PitchCallRules
from pitch_count_markov.domain.transition import TransitionLog, TransitionMatrix
from pitch_count_markov.ingest.protocols import StatsGateway
from pitch_count_markov.services.pitch_extractor import extract_transitions
from pitch_count_markov.services.pitch_outcomes import build_count_outcome_distribution, extract_pitch_records
from pitch_count_markov.services.transition_matrix import build_transition_matrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeasonGames:
    starting_players: frozenset[int]
    games: Mapping[int, tuple[Play, ...]]

    def pitchers_in(self, game_id: int) -> list[int]:
        """Starting players who pitched in *game_id*, in order of first appearance."""
        seen: dict[int, None] = {}
        for play in self.games[game_id]:
            if play.pitcher_id is not None and play.pitcher_id in self.starting_players:
                seen.setdefault(play.pitcher_id, None)
        return list(seen)


class SeasonAggregator:
    def __init__(
        self,
        gateway: StatsGateway,
        space: StateSpace | None = None,
        rules: PitchCallRules | None = None,
    ) -> None:
        self._gateway = gateway
        self._space = space or default_state_space()
        self._rules = rules or PitchCallRules()

    @property
    def space(self) -> StateSpace:
        return self._space

    async def starting_players(self, game_id: int) -> frozenset[int]:
        try:
            roster = await self._gateway.fetch_boxscore(game_id)
        except Exception as e:
            _log_failure("boxscore", game_id, e)
            return frozenset()
        return roster.player_ids()

    async def coverage_set(self, player_ids: Iterable[int], season: int) -> frozenset[int]:
        players = sorted(player_ids)
        results = await asyncio.gather(
            *(self._gateway.fetch_player_season_games(player_id, season) for player_id in players),
            return_exceptions=True,
        )
        by_player = {
            player_id: _settled("gameLog", player_id, result, frozenset())
            for player_id, result in zip(players, results, strict=True)
        }
        for player_id, game_ids in by_player.items():
            logger.debug("Player %d: %d games in %d", player_id, len(game_ids), season)
        return frozenset().union(*by_player.values())

    async def fetch_games(self, game_ids: Iterable[int]) -> dict[int, tuple[Play, ...]]:
        ordered = sorted(game_ids)
        results = await asyncio.gather(
            *(self._gateway.fetch_play_by_play(game_id) for game_id in ordered), return_exceptions=True
        )
        empty: tuple[Play, ...] = ()
        return {
            game_id: _settled("playByPlay", game_id, result, empty)
            for game_id, result in zip(ordered, results, strict=True)
        }

    async def season_games(self, initial_game_id: int, season: int) -> SeasonGames | None:
        """Run both fetch batches; ``None`` when there is nothing to aggregate."""
        starters = await self.starting_players(initial_game_id)
        if not starters:
            logger.warning("No starting players found for game %d", initial_game_id)
            return None
        logger.info("Game %d: %d starting players", initial_game_id, len(starters))

        coverage = await self.coverage_set(starters, season)
        if not coverage:
            logger.warning("No games found for starting players in season %d", season)
            return None
        logger.info("Fetching play-by-play for %d games", len(coverage))

        games = await self.fetch_games(coverage)
        return SeasonGames(starting_players=starters, games=games)

    def collect_transition_logs(self, season_games: SeasonGames) -> dict[int, TransitionLog]:
        logs: dict[int, TransitionLog] = {player_id: [] for player_id in season_games.starting_players}
        for game_id, plays in season_games.games.items():
            for pitcher_id in season_games.pitchers_in(game_id):
                logs[pitcher_id].extend(extract_transitions(plays, pitcher_id, self._space, self._rules))
        return logs

    def collect_pitch_records(self, season_games: SeasonGames) -> dict[int, list[PitchRecord]]:
        records: dict[int, list[PitchRecord]] = {player_id: [] for player_id in season_games.starting_players}
        for game_id, plays in season_games.games.items():
            for pitcher_id in season_games.pitchers_in(game_id):
                records[pitcher_id].extend(extract_pitch_records(plays, pitcher_id, game_id, self._rules))
        return records

    async def compute_matrices(self, initial_game_id: int, season: int) -> dict[int, TransitionMatrix]:
        """Transition matrix per starting player of *initial_game_id*.

        Players without any observed transition are left out. An empty mapping
        means there was not enough data, not that the run failed.
        """
        season_games = await self.season_games(initial_game_id, season)
        if season_games is None:
            return {}

        matrices: dict[int, TransitionMatrix] = {}
        for player_id, log in sorted(self.collect_transition_logs(season_games).items()):
            if not log:
                logger.warning("No pitch events found for player %d", player_id)
                continue
            matrices[player_id] = build_transition_matrix(log, self._space)
        logger.info("Built %d transition matrices", len(matrices))
        return matrices

    async def compute_outcome_distributions(
        self, initial_game_id: int, season: int
    ) -> dict[int, CountOutcomeDistribution]:
        season_games = await self.season_games(initial_game_id, season)
        if season_games is None:
            return {}

        distributions: dict[int, CountOutcomeDistribution] = {}
        for player_id, records in sorted(self.collect_pitch_records(season_games).items()):
            if not records:
                logger.warning("No classified pitches found for player %d", player_id)
                continue
            distributions[player_id] = build_count_outcome_distribution(records, self._space)
        return distributions


def _log_failure(endpoint: str, resource_id: int, error: Exception) -> None:
    logger.warning("Error fetching %s for %d: %s: %s", endpoint, resource_id, type(error).__name__, error)


def _settled[V](endpoint: str, resource_id: int, result: V | BaseException, empty: V) -> V:
    if isinstance(result, Exception):
        _log_failure(endpoint, resource_id, result)
        return empty
    if isinstance(result, BaseException):
        raise result
    return result
