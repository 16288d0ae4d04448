from dataclasses import dataclass

from pitch_count_markov.domain.count_state import Count


@dataclass(frozen=True)
class Roster:
    home_pitchers: tuple[int, ...] = ()
    home_batters: tuple[int, ...] = ()
    away_pitchers: tuple[int, ...] = ()
    away_batters: tuple[int, ...] = ()

    def player_ids(self) -> frozenset[int]:
        return frozenset((*self.home_pitchers, *self.away_pitchers, *self.home_batters, *self.away_batters))

    @property
    def is_empty(self) -> bool:
        return not self.player_ids()


EMPTY_ROSTER = Roster()


@dataclass(frozen=True)
class PitchEvent:
    count: Count | None
    description: str = ""
    event_type: str | None = None
    is_pitch: bool = True


@dataclass(frozen=True)
class Play:
    at_bat_index: int
    pitcher_id: int | None
    batter_id: int | None = None
    events: tuple[PitchEvent, ...] = ()
