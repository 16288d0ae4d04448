from dataclasses import dataclass

from pitch_count_markov.domain.count_state import Count
from pitch_count_markov.domain.pitch_calls import PitchOutcome


@dataclass(frozen=True)
class PitchRecord:
    player_id: int
    game_id: int
    at_bat_index: int
    before: Count
    outcome: PitchOutcome
    description: str


@dataclass(frozen=True)
class OutcomeCounts:
    ball: int = 0
    strike: int = 0
    in_play: int = 0

    @property
    def total(self) -> int:
        return self.ball + self.strike + self.in_play

    def probabilities(self) -> dict[PitchOutcome, float]:
        total = self.total
        if total == 0:
            return {outcome: 0.0 for outcome in PitchOutcome}
        return {
            PitchOutcome.BALL: self.ball / total,
            PitchOutcome.STRIKE: self.strike / total,
            PitchOutcome.IN_PLAY: self.in_play / total,
        }


@dataclass(frozen=True)
class CountOutcomeDistribution:
    """Ball/strike/in-play tallies for every registered count."""

    counts: dict[Count, OutcomeCounts]

    def probabilities(self, count: Count) -> dict[PitchOutcome, float]:
        return self.counts.get(count, OutcomeCounts()).probabilities()

    def to_dict(self) -> dict[str, dict[str, dict[str, float | int]]]:
        return {
            count.key: {
                "eventCounts": {"ball": tally.ball, "strike": tally.strike, "in_play": tally.in_play},
                "probabilities": {outcome.value: p for outcome, p in tally.probabilities().items()},
            }
            for count, tally in self.counts.items()
        }
