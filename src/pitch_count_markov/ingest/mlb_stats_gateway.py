import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

import httpx

from pitch_count_markov.domain.errors import GatewayError
from pitch_count_markov.domain.game import EMPTY_ROSTER, Play, Roster
from pitch_count_markov.domain.result import Err, Ok, Result, unwrap_or
from pitch_count_markov.ingest.payloads import (
    MalformedPayloadError,
    parse_boxscore,
    parse_play_by_play,
    parse_season_game_ids,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://statsapi.mlb.com/api/v1"


class MLBStatsGateway:
    """Async client for the three MLB Stats API endpoints the aggregator needs.

    The ``load_*`` methods return a :class:`Result`; the ``fetch_*`` methods
    log any :class:`GatewayError` and substitute an empty value, so callers
    always receive a well-formed record. Requests are neither retried nor
    timed out unless *timeout* is given.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url.rstrip("/")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _load[T](
        self,
        endpoint: str,
        resource_id: int,
        path: str,
        parse: Callable[[Any], T],
        params: dict[str, Any] | None = None,
    ) -> Result[T, GatewayError]:
        url = f"{self._base_url}/{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            return Err(
                GatewayError(
                    message=f"HTTP {e.response.status_code} from {url}",
                    endpoint=endpoint,
                    resource_id=resource_id,
                    status_code=e.response.status_code,
                )
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Err(GatewayError(message=f"{type(e).__name__}: {e}", endpoint=endpoint, resource_id=resource_id))
        logger.debug("MLB API responded %d", response.status_code)

        try:
            return Ok(parse(response.json()))
        except MalformedPayloadError as e:
            return Err(GatewayError(message=str(e), endpoint=endpoint, resource_id=resource_id))
        except (ValueError, RecursionError) as e:
            message = f"Undecodable body: {type(e).__name__}"
            return Err(GatewayError(message=message, endpoint=endpoint, resource_id=resource_id))

    async def load_boxscore(self, game_id: int) -> Result[Roster, GatewayError]:
        return await self._load("boxscore", game_id, f"game/{game_id}/boxscore", parse_boxscore)

    async def load_play_by_play(self, game_id: int) -> Result[tuple[Play, ...], GatewayError]:
        return await self._load("playByPlay", game_id, f"game/{game_id}/playByPlay", parse_play_by_play)

    async def load_player_season_games(self, player_id: int, season: int) -> Result[frozenset[int], GatewayError]:
        return await self._load(
            "gameLog",
            player_id,
            f"people/{player_id}/stats",
            parse_season_game_ids,
            params={"stats": "gameLog", "season": season},
        )

    async def fetch_boxscore(self, game_id: int) -> Roster:
        return unwrap_or(await self.load_boxscore(game_id), EMPTY_ROSTER, _log_failure)

    async def fetch_play_by_play(self, game_id: int) -> tuple[Play, ...]:
        plays = unwrap_or(await self.load_play_by_play(game_id), (), _log_failure)
        logger.debug("Game %d: %d plays", game_id, len(plays))
        return plays

    async def fetch_player_season_games(self, player_id: int, season: int) -> frozenset[int]:
        return unwrap_or(await self.load_player_season_games(player_id, season), frozenset(), _log_failure)


def _log_failure(error: GatewayError) -> None:
    logger.warning("Error fetching %s for %d: %s", error.endpoint, error.resource_id, error.message)
