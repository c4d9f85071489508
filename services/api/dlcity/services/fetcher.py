from __future__ import annotations

import json
import logging

from dlcity.domain.centers import CenterEntry
from dlcity.schemas.centers import BookingDate, CenterResult
from dlcity.services.errors import DecodeError, TransportError, UpstreamError, UpstreamStatusError
from dlcity.services.upstream.client import UpstreamClient
from dlcity.services.upstream.endpoints import UpstreamEndpoints
from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

_dates_adapter = TypeAdapter(list[BookingDate])


def parse_dates(body: bytes) -> list[BookingDate]:
    """Decode a dates payload: a JSON array of booking date objects."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"error decoding JSON: {exc}") from exc
    if payload is None:
        # A bare null decodes to "no dates", not a failure.
        return []
    try:
        return _dates_adapter.validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(f"error decoding JSON: {exc.errors()[0]['msg']}") from exc


class CenterDatesFetcher:
    """Fetches the bookable exam dates of one center."""

    def __init__(self, client: UpstreamClient, endpoints: UpstreamEndpoints):
        self._client = client
        self._endpoints = endpoints

    def dates_url(self, center_id: int) -> str:
        return self._endpoints.dates_url(center_id)

    def fetch_dates(self, entry: CenterEntry) -> list[BookingDate]:
        """Make exactly one upstream call; raise an UpstreamError on failure."""
        try:
            resp = self._client.get(self.dates_url(entry.center_id))
        except TransportError as exc:
            raise TransportError(f"error fetching data: {exc}") from exc

        if resp.status_code != 200:
            raise UpstreamStatusError(resp.status_code, resp.reason)

        return parse_dates(resp.body)

    def fetch_one(self, entry: CenterEntry) -> CenterResult:
        """Like fetch_dates, but failures are reported inside the result."""
        try:
            dates = self.fetch_dates(entry)
        except UpstreamError as exc:
            logger.warning(
                "center %s (%s) fetch failed: %s", entry.center_id, entry.name, exc
            )
            return CenterResult(center_id=entry.center_id, center_name=entry.name, error=str(exc))

        return CenterResult(center_id=entry.center_id, center_name=entry.name, dates=dates)
