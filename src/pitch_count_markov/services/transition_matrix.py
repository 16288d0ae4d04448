from collections.abc import Iterable

import numpy as np

from pitch_count_markov.domain.count_state import StateSpace
from pitch_count_markov.domain.transition import Transition, TransitionMatrix


def count_transitions(transitions: Iterable[Transition], space: StateSpace) -> np.ndarray:
    """Tally transitions into a square grid; unregistered states are dropped."""
    n = len(space)
    counts = np.zeros((n, n), dtype=np.float64)
    for transition in transitions:
        i = space.index_of(transition.before)
        j = space.index_of(transition.after)
        if i is None or j is None:
            continue
        counts[i, j] += 1
    return counts


def build_transition_matrix(transitions: Iterable[Transition], space: StateSpace) -> TransitionMatrix:
    counts = count_transitions(transitions, space)
    row_sums = counts.sum(axis=1, keepdims=True)
    # Rows without data stay all zero.
    probabilities = np.divide(counts, row_sums, out=np.zeros_like(counts), where=row_sums > 0)
    probabilities.setflags(write=False)
    return TransitionMatrix(matrix=probabilities, row_labels=space.states, col_labels=space.states)
