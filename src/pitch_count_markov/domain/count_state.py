"""Pitch-count states and the ordered state space used to index matrices."""

import enum
import functools
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

MAX_BALLS = 3
MAX_STRIKES = 2


@dataclass(frozen=True, order=True, slots=True)
class Count:
    balls: int
    strikes: int

    @property
    def key(self) -> str:
        return f"{self.balls}-{self.strikes}"

    def __str__(self) -> str:
        return self.key


class Terminal(enum.Enum):
    """End of the plate appearance."""

    X = "X"

    @property
    def key(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


TERMINAL = Terminal.X

type CountState = Count | Terminal


def parse_state(key: str) -> CountState:
    """Parse a ``"b-s"`` count key (or ``"X"``) back into a state."""
    text = key.strip()
    if text.upper() == TERMINAL.key:
        return TERMINAL
    balls, sep, strikes = text.partition("-")
    if not sep:
        balls, sep, strikes = text.partition(",")
    if not sep or not balls.strip().isdigit() or not strikes.strip().isdigit():
        msg = f"Invalid count state: {key!r}. Expected 'balls-strikes' or 'X'."
        raise ValueError(msg)
    return Count(int(balls), int(strikes))


@dataclass(frozen=True)
class StateSpace:
    """Ordered count states followed by the terminal state.

    The same order labels matrix rows and columns. Build instances with
    :meth:`build`; the index map is derived from ``states`` and never mutated.
    """

    states: tuple[CountState, ...]
    max_balls: int = MAX_BALLS
    max_strikes: int = MAX_STRIKES
    _index: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {state.key: position for position, state in enumerate(self.states)}
        if len(index) != len(self.states):
            msg = "State space contains duplicate states"
            raise ValueError(msg)
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def build(
        cls,
        max_balls: int = MAX_BALLS,
        max_strikes: int = MAX_STRIKES,
        excluded: Iterable[Count] = (),
    ) -> "StateSpace":
        skip = frozenset(excluded)
        counts: list[CountState] = [
            Count(balls, strikes)
            for balls in range(max_balls + 1)
            for strikes in range(max_strikes + 1)
            if Count(balls, strikes) not in skip
        ]
        return cls(states=(*counts, TERMINAL), max_balls=max_balls, max_strikes=max_strikes)

    def index_of(self, state: CountState) -> int | None:
        """Position of *state*, or ``None`` when it was never registered."""
        return self._index.get(state.key)

    def state_at(self, index: int) -> CountState:
        if not 0 <= index < len(self.states):
            msg = f"State index {index} out of range for {len(self.states)} states"
            raise IndexError(msg)
        return self.states[index]

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(state.key for state in self.states)

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[CountState]:
        return iter(self.states)

    def __contains__(self, state: object) -> bool:
        return isinstance(state, Count | Terminal) and state.key in self._index


@functools.cache
def default_state_space() -> StateSpace:
    return StateSpace.build()
