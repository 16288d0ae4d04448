from typing import Any

import pytest

from pitch_count_markov.domain.count_state import TERMINAL, Count, StateSpace
from pitch_count_markov.domain.game import PitchEvent
from pitch_count_markov.domain.pitch_calls import PitchCallRules
from pitch_count_markov.domain.transition import Transition
from pitch_count_markov.services.pitch_extractor import advance_count, extract_transitions, is_terminal_event
from tests.fakes.gateway import plays_from_json

RULES = PitchCallRules()


@pytest.fixture
def space() -> StateSpace:
    return StateSpace.build()


def _event(balls: int, strikes: int, description: str, type_description: str | None = None) -> dict[str, Any]:
    details: dict[str, Any] = {"description": description}
    if type_description is not None:
        details["type"] = {"description": type_description}
    return {"count": {"balls": balls, "strikes": strikes}, "details": details}


def _play(pitcher_id: int, events: list[dict[str, Any]], at_bat_index: int = 0) -> dict[str, Any]:
    return {"atBatIndex": at_bat_index, "matchup": {"pitcher": {"id": pitcher_id}}, "playEvents": events}


class TestIsTerminalEvent:
    @pytest.mark.parametrize("event_type", ["In play", "Batter Interference", "Walk", "Strikeout"])
    def test_terminal_types(self, event_type: str) -> None:
        assert is_terminal_event(PitchEvent(count=Count(0, 0), description="x", event_type=event_type), RULES)

    def test_in_play_prefix(self) -> None:
        assert is_terminal_event(PitchEvent(count=Count(0, 0), description="In play, run(s)"), RULES)

    def test_regular_pitch(self) -> None:
        assert not is_terminal_event(PitchEvent(count=Count(0, 0), description="Ball", event_type="Slider"), RULES)


class TestAdvanceCount:
    def test_ball(self, space: StateSpace) -> None:
        assert advance_count(Count(1, 1), PitchEvent(Count(1, 1), "Ball"), space, RULES) == Count(2, 1)

    def test_fourth_ball_ends_plate_appearance(self, space: StateSpace) -> None:
        assert advance_count(Count(3, 1), PitchEvent(Count(3, 1), "Ball"), space, RULES) is TERMINAL

    def test_hit_by_pitch(self, space: StateSpace) -> None:
        assert advance_count(Count(0, 0), PitchEvent(Count(0, 0), "Hit By Pitch"), space, RULES) is TERMINAL

    def test_strike(self, space: StateSpace) -> None:
        assert advance_count(Count(0, 1), PitchEvent(Count(0, 1), "Called Strike"), space, RULES) == Count(0, 2)

    def test_third_strike(self, space: StateSpace) -> None:
        assert advance_count(Count(2, 2), PitchEvent(Count(2, 2), "Swinging Strike"), space, RULES) is TERMINAL

    def test_two_strike_foul_keeps_count(self, space: StateSpace) -> None:
        assert advance_count(Count(1, 2), PitchEvent(Count(1, 2), "Foul"), space, RULES) == Count(1, 2)

    def test_two_strike_foul_bunt_is_strikeout(self, space: StateSpace) -> None:
        assert advance_count(Count(1, 2), PitchEvent(Count(1, 2), "Foul Bunt"), space, RULES) is TERMINAL

    def test_unknown_call(self, space: StateSpace) -> None:
        assert advance_count(Count(0, 0), PitchEvent(Count(0, 0), "Pickoff Attempt 1B"), space, RULES) is None

    def test_hit_by_pitch_vocabulary_is_configurable(self, space: StateSpace) -> None:
        rules = PitchCallRules(hit_by_pitch_events=())
        event = PitchEvent(Count(0, 0), "Hit By Pitch")
        assert advance_count(Count(0, 0), event, space, rules) == Count(1, 0)

    def test_custom_hit_by_pitch_call(self, space: StateSpace) -> None:
        rules = PitchCallRules(ball_events=(*RULES.ball_events, "Hit Batter"), hit_by_pitch_events=("Hit Batter",))
        assert advance_count(Count(1, 1), PitchEvent(Count(1, 1), "Hit Batter"), space, rules) is TERMINAL


class TestExtractTransitions:
    def test_reference_game(self, space: StateSpace) -> None:
        plays = plays_from_json(
            [
                _play(
                    123,
                    [
                        _event(0, 0, "Ball"),
                        _event(1, 0, "Called Strike"),
                        _event(1, 1, "Foul"),
                        _event(1, 2, "In play, out(s)", "In play"),
                    ],
                ),
                _play(456, [_event(0, 0, "Ball")], at_bat_index=1),
            ]
        )

        transitions = extract_transitions(plays, 123, space, RULES)

        assert transitions == [
            Transition(Count(0, 0), Count(1, 0)),
            Transition(Count(1, 0), Count(1, 1)),
            Transition(Count(1, 1), Count(1, 2)),
            Transition(Count(1, 2), TERMINAL),
        ]

    def test_other_pitcher_contributes_nothing(self, space: StateSpace) -> None:
        plays = plays_from_json([_play(456, [_event(0, 0, "Ball"), _event(1, 0, "In play, no out")])])
        assert extract_transitions(plays, 123, space, RULES) == []

    def test_no_plays(self, space: StateSpace) -> None:
        assert extract_transitions((), 123, space, RULES) == []

    def test_last_pitch_without_successor_uses_call(self, space: StateSpace) -> None:
        plays = plays_from_json([_play(123, [_event(0, 0, "Ball"), _event(1, 0, "Called Strike")])])
        assert extract_transitions(plays, 123, space, RULES) == [
            Transition(Count(0, 0), Count(1, 0)),
            Transition(Count(1, 0), Count(1, 1)),
        ]

    def test_walk_event_type(self, space: StateSpace) -> None:
        plays = plays_from_json([_play(123, [_event(3, 1, "Ball", "Walk")])])
        assert extract_transitions(plays, 123, space, RULES) == [Transition(Count(3, 1), TERMINAL)]

    def test_non_pitch_events_skipped(self, space: StateSpace) -> None:
        pickoff = {
            "count": {"balls": 1, "strikes": 0},
            "details": {"description": "Pickoff Attempt 1B"},
            "isPitch": False,
        }
        plays = plays_from_json(
            [_play(123, [_event(0, 0, "Ball"), pickoff, _event(1, 0, "In play, out(s)")])]
        )
        assert extract_transitions(plays, 123, space, RULES) == [
            Transition(Count(0, 0), Count(1, 0)),
            Transition(Count(1, 0), TERMINAL),
        ]

    def test_event_without_count_is_skipped(self, space: StateSpace) -> None:
        plays = plays_from_json(
            [_play(123, [{"details": {"description": "Ball"}}, _event(1, 0, "In play, out(s)")])]
        )
        assert extract_transitions(plays, 123, space, RULES) == [Transition(Count(1, 0), TERMINAL)]

    def test_successor_without_count_falls_back_to_call(self, space: StateSpace) -> None:
        plays = plays_from_json(
            [_play(123, [_event(0, 0, "Swinging Strike"), {"details": {"description": "In play, out(s)"}}])]
        )
        assert extract_transitions(plays, 123, space, RULES)[0] == Transition(Count(0, 0), Count(0, 1))

    def test_unclassifiable_trailing_pitch_dropped(self, space: StateSpace) -> None:
        plays = plays_from_json([_play(123, [_event(0, 0, "Mystery Call")])])
        assert extract_transitions(plays, 123, space, RULES) == []

    def test_plays_are_independent(self, space: StateSpace) -> None:
        plays = plays_from_json(
            [
                _play(123, [_event(0, 0, "Ball"), _event(1, 0, "In play, out(s)")], at_bat_index=0),
                _play(123, [_event(0, 0, "Called Strike"), _event(0, 1, "In play, run(s)")], at_bat_index=1),
            ]
        )
        assert extract_transitions(plays, 123, space, RULES) == [
            Transition(Count(0, 0), Count(1, 0)),
            Transition(Count(1, 0), TERMINAL),
            Transition(Count(0, 0), Count(0, 1)),
            Transition(Count(0, 1), TERMINAL),
        ]

    def test_custom_in_play_prefix(self, space: StateSpace) -> None:
        rules = PitchCallRules(in_play_prefixes=("Hit into play",))
        plays = plays_from_json([_play(123, [_event(0, 0, "Hit into play")])])
        assert extract_transitions(plays, 123, space, rules) == [Transition(Count(0, 0), TERMINAL)]
