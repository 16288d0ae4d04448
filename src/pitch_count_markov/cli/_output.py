import json
from collections.abc import Mapping

from rich.console import Console
from rich.table import Table

from pitch_count_markov.domain.count_state import StateSpace
from pitch_count_markov.domain.outcome import CountOutcomeDistribution
from pitch_count_markov.domain.transition import TransitionMatrix

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_insufficient_data(game_id: int, season: int) -> None:
    console.print(f"[yellow]Insufficient data[/yellow] for game {game_id} in season {season}")


def print_matrices(matrices: Mapping[int, TransitionMatrix]) -> None:
    payload = {str(player_id): matrix.to_dict() for player_id, matrix in matrices.items()}
    console.print_json(json.dumps(payload))


def print_outcome_distributions(distributions: Mapping[int, CountOutcomeDistribution]) -> None:
    payload = {str(player_id): dist.to_dict() for player_id, dist in distributions.items()}
    console.print_json(json.dumps(payload))


def print_state_space(space: StateSpace) -> None:
    console.print(f"State space ({len(space)} states)")
    table = Table()
    table.add_column("Index", justify="right")
    table.add_column("State")
    for index, state in enumerate(space):
        table.add_row(str(index), state.key)
    console.print(table)
