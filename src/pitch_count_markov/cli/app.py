import asyncio
from typing import Annotated

import typer

from pitch_count_markov.cli._logging import configure_logging
from pitch_count_markov.cli._output import (
    print_error,
    print_insufficient_data,
    print_matrices,
    print_outcome_distributions,
    print_state_space,
)
from pitch_count_markov.cli.factory import build_aggregator
from pitch_count_markov.config import Settings, create_config, load_settings
from pitch_count_markov.domain.outcome import CountOutcomeDistribution
from pitch_count_markov.domain.transition import TransitionMatrix

app = typer.Typer(name="pcm", help="Pitch-count Markov transition matrices from MLB play-by-play")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Pitch-count Markov transition matrices from MLB play-by-play."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_GameArg = Annotated[int, typer.Argument(help="Game id (gamePk) whose starters are analysed")]
_SeasonOpt = Annotated[int, typer.Option("--season", help="Season to gather games from")]
_PlayerOpt = Annotated[list[int] | None, typer.Option("--player", help="Only show these player ids (repeatable)")]
_ConfigOpt = Annotated[str, typer.Option("--config", help="Path to a YAML config file")]
_BaseUrlOpt = Annotated[str | None, typer.Option("--base-url", help="Override the stats API base URL")]


def _settings(config_path: str, base_url: str | None) -> Settings:
    try:
        return load_settings(create_config(yaml_path=config_path, base_url=base_url))
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


async def _compute_matrices(settings: Settings, game_id: int, season: int) -> dict[int, TransitionMatrix]:
    async with build_aggregator(settings) as aggregator:
        return await aggregator.compute_matrices(game_id, season)


async def _compute_outcomes(settings: Settings, game_id: int, season: int) -> dict[int, CountOutcomeDistribution]:
    async with build_aggregator(settings) as aggregator:
        return await aggregator.compute_outcome_distributions(game_id, season)


def _select[V](results: dict[int, V], players: list[int] | None) -> dict[int, V]:
    if not players:
        return results
    wanted = set(players)
    return {player_id: value for player_id, value in results.items() if player_id in wanted}


@app.command()
def matrices(
    game_id: _GameArg,
    season: _SeasonOpt,
    player: _PlayerOpt = None,
    config: _ConfigOpt = "pcm.yaml",
    base_url: _BaseUrlOpt = None,
) -> None:
    """Print transition matrices for every starter of a game as JSON."""
    settings = _settings(config, base_url)
    results = _select(asyncio.run(_compute_matrices(settings, game_id, season)), player)
    if not results:
        print_insufficient_data(game_id, season)
        return
    print_matrices(results)


@app.command()
def outcomes(
    game_id: _GameArg,
    season: _SeasonOpt,
    player: _PlayerOpt = None,
    config: _ConfigOpt = "pcm.yaml",
    base_url: _BaseUrlOpt = None,
) -> None:
    """Print per-count ball/strike/in-play distributions as JSON."""
    settings = _settings(config, base_url)
    results = _select(asyncio.run(_compute_outcomes(settings, game_id, season)), player)
    if not results:
        print_insufficient_data(game_id, season)
        return
    print_outcome_distributions(results)


@app.command()
def states(config: _ConfigOpt = "pcm.yaml") -> None:
    """Show the configured count-state space."""
    print_state_space(_settings(config, None).space)
