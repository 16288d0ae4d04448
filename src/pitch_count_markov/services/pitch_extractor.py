"""Turn one game's plays into count-state transitions for a single pitcher.

Each pitch event records the count before it was thrown. A pitch that ends
the plate appearance moves to the terminal state; any other pitch moves to
the count recorded on the next pitch of the same play. When the play has no
later pitch with a recorded count, the after-state is derived from the
pitch call applied to the before-count.
"""

import logging
from collections.abc import Sequence

from pitch_count_markov.domain.count_state import TERMINAL, Count, CountState, StateSpace
from pitch_count_markov.domain.game import PitchEvent, Play
from pitch_count_markov.domain.pitch_calls import PitchCallRules, PitchOutcome
from pitch_count_markov.domain.transition import Transition
from pitch_count_markov.services.pitch_outcomes import classify_pitch, is_in_play

logger = logging.getLogger(__name__)


def is_terminal_event(event: PitchEvent, rules: PitchCallRules) -> bool:
    if event.event_type is not None and event.event_type in rules.terminal_event_types:
        return True
    return is_in_play(event.description, rules)


def advance_count(
    count: Count, event: PitchEvent, space: StateSpace, rules: PitchCallRules
) -> CountState | None:
    """Count after *event*, inferred from its pitch call alone."""
    match classify_pitch(event.description, rules):
        case PitchOutcome.BALL:
            if event.description.startswith(rules.hit_by_pitch_events) or count.balls >= space.max_balls:
                return TERMINAL
            return Count(count.balls + 1, count.strikes)
        case PitchOutcome.STRIKE:
            if count.strikes < space.max_strikes:
                return Count(count.balls, count.strikes + 1)
            if event.description in rules.foul_events:
                return count
            return TERMINAL
        case PitchOutcome.IN_PLAY:
            return TERMINAL
        case _:
            return None


def extract_transitions(
    plays: Sequence[Play],
    pitcher_id: int,
    space: StateSpace,
    rules: PitchCallRules,
) -> list[Transition]:
    transitions: list[Transition] = []
    for play in plays:
        if play.pitcher_id != pitcher_id:
            continue
        pitches = [event for event in play.events if event.is_pitch]
        for position, event in enumerate(pitches):
            if event.count is None:
                logger.debug("Pitch %d of at-bat %d has no count", position, play.at_bat_index)
                continue
            after = _after_state(event.count, pitches, position, space, rules)
            if after is None:
                logger.debug("Dropped unclassifiable pitch %r in at-bat %d", event.description, play.at_bat_index)
                continue
            transitions.append(Transition(event.count, after))
    return transitions


def _after_state(
    before: Count,
    pitches: Sequence[PitchEvent],
    position: int,
    space: StateSpace,
    rules: PitchCallRules,
) -> CountState | None:
    event = pitches[position]
    if is_terminal_event(event, rules):
        return TERMINAL
    if position + 1 < len(pitches):
        following = pitches[position + 1].count
        if following is not None:
            return following
    return advance_count(before, event, space, rules)
