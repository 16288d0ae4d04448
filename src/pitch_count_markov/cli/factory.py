from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pitch_count_markov.config import Settings
from pitch_count_markov.ingest.mlb_stats_gateway import MLBStatsGateway
from pitch_count_markov.services.season_aggregator import SeasonAggregator


@asynccontextmanager
async def build_aggregator(settings: Settings) -> AsyncIterator[SeasonAggregator]:
    """Yield an aggregator backed by a live gateway; the HTTP client is closed on exit."""
    async with MLBStatsGateway(base_url=settings.base_url, timeout=settings.timeout) as gateway:
        yield SeasonAggregator(gateway, space=settings.space, rules=settings.rules)
