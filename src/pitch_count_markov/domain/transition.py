from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
import pandas as pd

from pitch_count_markov.domain.count_state import CountState


@dataclass(frozen=True, slots=True)
class Transition:
    before: CountState
    after: CountState


type TransitionLog = list[Transition]


@dataclass(frozen=True, eq=False)
class TransitionMatrix:
    """Row-stochastic next-state probabilities over a state space.

    Rows with no observed transitions are all zero rather than a distribution.
    """

    matrix: npt.NDArray[np.float64]
    row_labels: tuple[CountState, ...]
    col_labels: tuple[CountState, ...]

    def __post_init__(self) -> None:
        if self.matrix.shape != (len(self.row_labels), len(self.col_labels)):
            expected = (len(self.row_labels), len(self.col_labels))
            msg = f"Matrix shape {self.matrix.shape} does not match labels {expected}"
            raise ValueError(msg)

    def _row_index(self, state: CountState) -> int:
        return self.row_labels.index(state)

    def probability(self, before: CountState, after: CountState) -> float:
        return float(self.matrix[self._row_index(before), self.col_labels.index(after)])

    def row(self, state: CountState) -> dict[CountState, float]:
        values = self.matrix[self._row_index(state)]
        return {label: float(value) for label, value in zip(self.col_labels, values, strict=True)}

    def observed_states(self) -> tuple[CountState, ...]:
        """Row states with at least one observed outgoing transition."""
        sums = self.matrix.sum(axis=1)
        return tuple(label for label, total in zip(self.row_labels, sums, strict=True) if total > 0)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.matrix,
            index=pd.Index([s.key for s in self.row_labels], name="from"),
            columns=pd.Index([s.key for s in self.col_labels], name="to"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "matrix": self.matrix.tolist(),
            "rowLabels": [s.key for s in self.row_labels],
            "colLabels": [s.key for s in self.col_labels],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionMatrix):
            return NotImplemented
        return (
            self.row_labels == other.row_labels
            and self.col_labels == other.col_labels
            and np.array_equal(self.matrix, other.matrix)
        )

