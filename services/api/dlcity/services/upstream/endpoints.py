from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

DATES_PATH = "DrivingLicenseExamsDates2"
DATE_FRAMES_PATH = "DrivingLicenseExamsDateFrames2"


@dataclass(frozen=True)
class UpstreamEndpoints:
    """URL templates of the booking API, all pinned to one license category."""

    base_url: str
    category_code: int = 4

    def _url(self, path: str, params: dict[str, object]) -> str:
        query = urlencode({"CategoryCode": self.category_code, **params})
        return f"{self.base_url.rstrip('/')}/{path}?{query}"

    def dates_url(self, center_id: int) -> str:
        return self._url(DATES_PATH, {"CenterId": center_id})

    def date_frames_url(self, center_id: str, exam_date: str) -> str:
        return self._url(DATE_FRAMES_PATH, {"CenterId": center_id, "ExamDate": exam_date})
