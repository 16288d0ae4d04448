from __future__ import annotations

from dataclasses import dataclass

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from pitch_count_markov.domain.count_state import Count, StateSpace, parse_state
from pitch_count_markov.domain.pitch_calls import (
    BALL_EVENTS,
    FOUL_EVENTS,
    HIT_BY_PITCH_EVENTS,
    IN_PLAY_PREFIXES,
    STRIKE_EVENTS,
    TERMINAL_EVENT_TYPES,
    PitchCallRules,
)
from pitch_count_markov.ingest.mlb_stats_gateway import DEFAULT_BASE_URL

_DEFAULTS: dict[str, object] = {
    "stats_api": {
        "base_url": DEFAULT_BASE_URL,
    },
    "state_space": {
        "max_balls": 3,
        "max_strikes": 2,
        "excluded_counts": [],
    },
    "pitch_calls": {
        "terminal_event_types": list(TERMINAL_EVENT_TYPES),
        "in_play_prefixes": list(IN_PLAY_PREFIXES),
        "ball_events": list(BALL_EVENTS),
        "strike_events": list(STRIKE_EVENTS),
        "foul_events": list(FOUL_EVENTS),
        "hit_by_pitch_events": list(HIT_BY_PITCH_EVENTS),
    },
}


@dataclass(frozen=True)
class Settings:
    base_url: str
    timeout: float | None
    space: StateSpace
    rules: PitchCallRules


def create_config(
    yaml_path: str = "pcm.yaml",
    env_prefix: str = "PITCH_MARKOV",
    defaults: dict[str, object] | None = None,
    *,
    base_url: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if base_url is not None:
        layers.insert(0, config_from_dict({"stats_api": {"base_url": base_url}}))

    return ConfigurationSet(*layers)


def _as_strings(raw: object) -> tuple[str, ...]:
    # env vars arrive as a single comma-separated string
    if isinstance(raw, str):
        return tuple(part.strip() for part in raw.split(",") if part.strip())
    if isinstance(raw, (list, tuple)):
        return tuple(str(item) for item in raw)
    msg = f"Expected a list of strings, got {raw!r}"
    raise ValueError(msg)


def _parse_excluded(raw: object) -> tuple[Count, ...]:
    excluded: list[Count] = []
    for key in _as_strings(raw):
        state = parse_state(key)
        if not isinstance(state, Count):
            msg = f"Only ball-strike counts can be excluded, got {key!r}"
            raise ValueError(msg)
        excluded.append(state)
    return tuple(excluded)


def _parse_timeout(raw: object) -> float | None:
    if raw is None or str(raw).strip().lower() in ("", "none"):
        return None
    timeout = float(str(raw))
    if timeout < 0:
        msg = f"Timeout must be non-negative, got {timeout}"
        raise ValueError(msg)
    return timeout if timeout > 0 else None


def load_settings(cfg: ConfigurationSet | None = None) -> Settings:
    if cfg is None:
        cfg = create_config()
    max_balls = int(str(cfg["state_space.max_balls"]))
    max_strikes = int(str(cfg["state_space.max_strikes"]))
    if max_balls < 0 or max_strikes < 0:
        msg = "state_space.max_balls and state_space.max_strikes must be non-negative"
        raise ValueError(msg)
    space = StateSpace.build(
        max_balls=max_balls,
        max_strikes=max_strikes,
        excluded=_parse_excluded(cfg.get("state_space.excluded_counts", [])),
    )
    rules = PitchCallRules(
        terminal_event_types=_as_strings(cfg["pitch_calls.terminal_event_types"]),
        in_play_prefixes=_as_strings(cfg["pitch_calls.in_play_prefixes"]),
        ball_events=_as_strings(cfg["pitch_calls.ball_events"]),
        strike_events=_as_strings(cfg["pitch_calls.strike_events"]),
        foul_events=_as_strings(cfg["pitch_calls.foul_events"]),
        hit_by_pitch_events=_as_strings(cfg["pitch_calls.hit_by_pitch_events"]),
    )
    return Settings(
        base_url=str(cfg["stats_api.base_url"]),
        timeout=_parse_timeout(cfg.get("stats_api.timeout")),
        space=space,
        rules=rules,
    )
