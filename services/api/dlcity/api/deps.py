from __future__ import annotations

from functools import lru_cache

from dlcity.core.config import settings
from dlcity.domain.centers import CenterRegistry, default_registry
from dlcity.services.aggregator import AvailabilityAggregator
from dlcity.services.fetcher import CenterDatesFetcher
from dlcity.services.time_slots import TimeSlotProxy
from dlcity.services.upstream.client import HttpxUpstreamClient, UpstreamClient
from dlcity.services.upstream.endpoints import UpstreamEndpoints
from fastapi import Depends


@lru_cache
def get_registry() -> CenterRegistry:
    if settings.centers:
        return CenterRegistry.from_mapping(settings.centers)
    return default_registry()


@lru_cache
def get_endpoints() -> UpstreamEndpoints:
    return UpstreamEndpoints(
        base_url=settings.upstream_base_url,
        category_code=settings.upstream_category_code,
    )


@lru_cache
def get_upstream_client() -> UpstreamClient:
    return HttpxUpstreamClient(
        timeout=settings.upstream_timeout_secs,
        verify=settings.upstream_verify_tls,
        user_agent=settings.user_agent,
    )


def get_fetcher(
    client: UpstreamClient = Depends(get_upstream_client),
    endpoints: UpstreamEndpoints = Depends(get_endpoints),
) -> CenterDatesFetcher:
    return CenterDatesFetcher(client, endpoints)


def get_aggregator(
    fetcher: CenterDatesFetcher = Depends(get_fetcher),
) -> AvailabilityAggregator:
    return AvailabilityAggregator(fetcher, max_workers=settings.aggregator_max_workers)


def get_time_slot_proxy(
    client: UpstreamClient = Depends(get_upstream_client),
    endpoints: UpstreamEndpoints = Depends(get_endpoints),
) -> TimeSlotProxy:
    return TimeSlotProxy(client, endpoints)


def close_upstream_client() -> None:
    """Release the shared connection pool if one was ever created."""
    if get_upstream_client.cache_info().currsize:
        client = get_upstream_client()
        close = getattr(client, "close", None)
        if callable(close):
            close()
        get_upstream_client.cache_clear()
