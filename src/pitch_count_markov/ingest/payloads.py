"""Validate raw MLB Stats API JSON into domain records.

Only the top-level shape is mandatory. Individual plays, events or splits
that are malformed are skipped so that one bad record does not cost the
rest of the game.
"""

import logging
from typing import Any

from pitch_count_markov.domain.count_state import Count
from pitch_count_markov.domain.game import PitchEvent, Play, Roster

logger = logging.getLogger(__name__)


class MalformedPayloadError(ValueError):
    pass


def _as_id(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _id_list(team: Any, key: str) -> tuple[int, ...]:
    if not isinstance(team, dict):
        return ()
    raw = team.get(key)
    if not isinstance(raw, list):
        return ()
    return tuple(pid for pid in (_as_id(v) for v in raw) if pid is not None)


def _nested_id(container: Any, key: str) -> int | None:
    if not isinstance(container, dict):
        return None
    person = container.get(key)
    if not isinstance(person, dict):
        return None
    return _as_id(person.get("id"))


def parse_boxscore(data: Any) -> Roster:
    if not isinstance(data, dict) or not isinstance(data.get("teams"), dict):
        raise MalformedPayloadError("boxscore payload has no 'teams' object")
    teams = data["teams"]
    home = teams.get("home")
    away = teams.get("away")
    return Roster(
        home_pitchers=_id_list(home, "pitchers"),
        home_batters=_id_list(home, "batters"),
        away_pitchers=_id_list(away, "pitchers"),
        away_batters=_id_list(away, "batters"),
    )


def _parse_count(raw: Any) -> Count | None:
    if not isinstance(raw, dict):
        return None
    balls = _as_id(raw.get("balls"))
    strikes = _as_id(raw.get("strikes"))
    if balls is None or strikes is None:
        return None
    return Count(balls, strikes)


def parse_pitch_event(raw: Any) -> PitchEvent | None:
    if not isinstance(raw, dict):
        return None
    details = raw.get("details")
    if not isinstance(details, dict):
        details = {}
    description = details.get("description")
    event_type = details.get("type")
    type_description = event_type.get("description") if isinstance(event_type, dict) else None
    is_pitch = raw.get("isPitch", True)
    return PitchEvent(
        count=_parse_count(raw.get("count")),
        description=description if isinstance(description, str) else "",
        event_type=type_description if isinstance(type_description, str) else None,
        is_pitch=is_pitch if isinstance(is_pitch, bool) else True,
    )


def parse_play(raw: Any, position: int) -> Play | None:
    if not isinstance(raw, dict):
        return None
    matchup = raw.get("matchup")
    raw_events = raw.get("playEvents")
    if not isinstance(raw_events, list):
        raw_events = []
    events = tuple(event for event in (parse_pitch_event(e) for e in raw_events) if event is not None)
    if len(events) != len(raw_events):
        logger.debug("Skipped %d malformed events in play %d", len(raw_events) - len(events), position)
    at_bat_index = _as_id(raw.get("atBatIndex"))
    return Play(
        at_bat_index=at_bat_index if at_bat_index is not None else position,
        pitcher_id=_nested_id(matchup, "pitcher"),
        batter_id=_nested_id(matchup, "batter"),
        events=events,
    )


def parse_play_by_play(data: Any) -> tuple[Play, ...]:
    if not isinstance(data, dict) or not isinstance(data.get("allPlays"), list):
        raise MalformedPayloadError("play-by-play payload has no 'allPlays' list")
    plays: list[Play] = []
    for position, raw in enumerate(data["allPlays"]):
        play = parse_play(raw, position)
        if play is None:
            logger.debug("Skipped malformed play at position %d", position)
            continue
        plays.append(play)
    return tuple(plays)


def parse_season_game_ids(data: Any) -> frozenset[int]:
    if not isinstance(data, dict) or not isinstance(data.get("stats"), list):
        raise MalformedPayloadError("game log payload has no 'stats' list")
    stats = data["stats"]
    if not stats or not isinstance(stats[0], dict):
        return frozenset()
    splits = stats[0].get("splits")
    if not isinstance(splits, list):
        return frozenset()
    game_ids: set[int] = set()
    for split in splits:
        game_id = _game_pk(split)
        if game_id is not None:
            game_ids.add(game_id)
    return frozenset(game_ids)


def _game_pk(split: Any) -> int | None:
    if not isinstance(split, dict):
        return None
    game = split.get("game")
    if not isinstance(game, dict):
        return None
    return _as_id(game.get("gamePk"))
