"""Extraction, matrix construction and season aggregation."""

from pitch_count_markov.services.pitch_extractor import extract_transitions
from pitch_count_markov.services.season_aggregator import SeasonAggregator
from pitch_count_markov.services.transition_matrix import build_transition_matrix

__all__ = [
    "SeasonAggregator",
    "build_transition_matrix",
    "extract_transitions",
]
