from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[T, E] = Ok[T] | Err[E]


def unwrap_or[T, E](result: Result[T, E], default: T, on_error: Callable[[E], object] | None = None) -> T:
    """Value of *result*, or *default* after handing the error to *on_error*."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            if on_error is not None:
                on_error(error)
            return default
