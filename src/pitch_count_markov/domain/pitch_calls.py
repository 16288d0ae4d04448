import enum
from dataclasses import dataclass

TERMINAL_EVENT_TYPES: tuple[str, ...] = ("In play", "Batter Interference", "Walk", "Strikeout")

IN_PLAY_PREFIXES: tuple[str, ...] = ("In play",)

BALL_EVENTS: tuple[str, ...] = (
    "Ball",
    "Ball In Dirt",
    "Hit By Pitch",
    "Intent Ball",
    "Pitchout",
    "Automatic Ball",
    "Automatic Ball - Pitcher Pitch Timer Violation",
    "Automatic Ball - Intentional",
)

STRIKE_EVENTS: tuple[str, ...] = (
    "Called Strike",
    "Swinging Strike",
    "Swinging Strike (Blocked)",
    "Foul",
    "Foul Tip",
    "Foul Pitchout",
    "Missed Bunt",
    "Swinging Pitchout",
    "Foul Bunt",
    "Foul Tip Bunt",
    "Bunt Foul Tip",
    "Bunt Foul",
    "Strike",
    "Automatic Strike",
    "Automatic Strike - Batter Pitch Timer Violation",
)

# Strike calls that leave a two-strike count unchanged.
FOUL_EVENTS: tuple[str, ...] = ("Foul", "Foul Pitchout")

# Ball calls that award first base regardless of the count.
HIT_BY_PITCH_EVENTS: tuple[str, ...] = ("Hit By Pitch",)


class PitchOutcome(enum.StrEnum):
    BALL = "ball"
    STRIKE = "strike"
    IN_PLAY = "in_play"


@dataclass(frozen=True)
class PitchCallRules:
    """Vocabulary used to classify recorded pitch events."""

    terminal_event_types: tuple[str, ...] = TERMINAL_EVENT_TYPES
    in_play_prefixes: tuple[str, ...] = IN_PLAY_PREFIXES
    ball_events: tuple[str, ...] = BALL_EVENTS
    strike_events: tuple[str, ...] = STRIKE_EVENTS
    foul_events: tuple[str, ...] = FOUL_EVENTS
    hit_by_pitch_events: tuple[str, ...] = HIT_BY_PITCH_EVENTS
