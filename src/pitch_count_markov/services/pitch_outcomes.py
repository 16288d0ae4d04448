from collections import defaultdict
from collections.abc import Iterable, Sequence

from pitch_count_markov.domain.count_state import Count, StateSpace
from pitch_count_markov.domain.game import Play
from pitch_count_markov.domain.outcome import CountOutcomeDistribution, OutcomeCounts, PitchRecord
from pitch_count_markov.domain.pitch_calls import PitchCallRules, PitchOutcome


def is_in_play(description: str, rules: PitchCallRules) -> bool:
    return any(description.startswith(prefix) for prefix in rules.in_play_prefixes)


def classify_pitch(description: str, rules: PitchCallRules) -> PitchOutcome | None:
    """Map a recorded pitch call to ball, strike or in-play."""
    if is_in_play(description, rules):
        return PitchOutcome.IN_PLAY
    if description in rules.ball_events:
        return PitchOutcome.BALL
    if description in rules.strike_events:
        return PitchOutcome.STRIKE
    return None


def extract_pitch_records(
    plays: Sequence[Play],
    pitcher_id: int,
    game_id: int,
    rules: PitchCallRules,
) -> list[PitchRecord]:
    records: list[PitchRecord] = []
    for play in plays:
        if play.pitcher_id != pitcher_id:
            continue
        for event in play.events:
            if not event.is_pitch or event.count is None:
                continue
            outcome = classify_pitch(event.description, rules)
            if outcome is None:
                continue
            records.append(
                PitchRecord(
                    player_id=pitcher_id,
                    game_id=game_id,
                    at_bat_index=play.at_bat_index,
                    before=event.count,
                    outcome=outcome,
                    description=event.description,
                )
            )
    return records


def build_count_outcome_distribution(records: Iterable[PitchRecord], space: StateSpace) -> CountOutcomeDistribution:
    tallies: dict[Count, dict[PitchOutcome, int]] = defaultdict(lambda: dict.fromkeys(PitchOutcome, 0))
    for record in records:
        if record.before not in space:
            continue
        tallies[record.before][record.outcome] += 1

    counts: dict[Count, OutcomeCounts] = {}
    for state in space:
        if not isinstance(state, Count):
            continue
        tally = tallies.get(state, {})
        counts[state] = OutcomeCounts(
            ball=tally.get(PitchOutcome.BALL, 0),
            strike=tally.get(PitchOutcome.STRIKE, 0),
            in_play=tally.get(PitchOutcome.IN_PLAY, 0),
        )
    return CountOutcomeDistribution(counts=counts)
