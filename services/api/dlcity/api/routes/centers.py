from __future__ import annotations

import logging
import re

from dlcity.api.deps import get_aggregator, get_fetcher, get_registry, get_time_slot_proxy
from dlcity.domain.centers import CenterRegistry
from dlcity.schemas.centers import CenterResult
from dlcity.services.aggregator import AvailabilityAggregator
from dlcity.services.encoder import encode_aggregate, encode_model
from dlcity.services.errors import EncodeError, TransportError, UpstreamError
from dlcity.services.fetcher import CenterDatesFetcher
from dlcity.services.time_slots import TimeSlotProxy
from fastapi import APIRouter, Depends, HTTPException, Query, Response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["centers"])

JSON = "application/json"

# Optionally signed ASCII digits only; int() alone also takes "0_3", " 3"
# and non-ASCII digits.
_CENTER_ID_RE = re.compile(r"[+-]?[0-9]+")


@router.get("/available-dates", response_model=dict[str, CenterResult])
def available_dates(
    registry: CenterRegistry = Depends(get_registry),
    aggregator: AvailabilityAggregator = Depends(get_aggregator),
) -> Response:
    aggregate = aggregator.fetch_all(registry)
    try:
        body = encode_aggregate(aggregate)
    except EncodeError:
        logger.exception("error encoding available dates response")
        raise HTTPException(status_code=500, detail="Failed to create response")
    return Response(content=body, media_type=JSON)


@router.get("/city-info", response_model=CenterResult)
def city_info(
    center_id: str | None = Query(default=None, alias="centerId"),
    registry: CenterRegistry = Depends(get_registry),
    fetcher: CenterDatesFetcher = Depends(get_fetcher),
) -> Response:
    # Parsed by hand: a bad id is a 400 here, not FastAPI's 422.
    if center_id is None or not _CENTER_ID_RE.fullmatch(center_id):
        raise HTTPException(status_code=400, detail="Invalid centerId")
    cid = int(center_id)

    entry = registry.get(cid)
    if entry is None:
        raise HTTPException(status_code=404, detail="Center not found")

    try:
        dates = fetcher.fetch_dates(entry)
    except UpstreamError as exc:
        logger.warning("city info for center %s failed: %s", cid, exc)
        raise HTTPException(status_code=500, detail=str(exc))

    result = CenterResult(center_id=entry.center_id, center_name=entry.name, dates=dates)
    try:
        body = encode_model(result)
    except EncodeError:
        logger.exception("error encoding city info for center %s", cid)
        raise HTTPException(status_code=500, detail="Failed to create city info response")
    return Response(content=body, media_type=JSON)


@router.get("/available-hours")
def available_hours(
    center_id: str | None = Query(default=None, alias="centerId"),
    exam_date: str | None = Query(default=None, alias="examDate"),
    proxy: TimeSlotProxy = Depends(get_time_slot_proxy),
) -> Response:
    if not center_id or not exam_date:
        raise HTTPException(
            status_code=400,
            detail="Missing required query parameters: 'centerId' and 'examDate'",
        )

    try:
        upstream = proxy.fetch(center_id, exam_date)
    except TransportError as exc:
        logger.warning("time slot lookup for center %s on %s failed: %s", center_id, exam_date, exc)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch data from external API: {exc}",
        )

    if upstream.status_code != 200:
        logger.info("upstream answered %s for time slots of center %s", upstream.status, center_id)
    return Response(
        content=upstream.body,
        status_code=upstream.status_code,
        media_type=upstream.content_type or JSON,
    )
