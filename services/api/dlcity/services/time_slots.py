from __future__ import annotations

from dlcity.services.upstream.client import UpstreamClient, UpstreamResponse
from dlcity.services.upstream.endpoints import UpstreamEndpoints


class TimeSlotProxy:
    """Forwards a time-slot query to the booking API without interpreting it."""

    def __init__(self, client: UpstreamClient, endpoints: UpstreamEndpoints):
        self._client = client
        self._endpoints = endpoints

    def fetch(self, center_id: str, exam_date: str) -> UpstreamResponse:
        # TransportError propagates; any received response is returned as-is.
        return self._client.get(self._endpoints.date_frames_url(center_id, exam_date))
