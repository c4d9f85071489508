from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from dlcity.services.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    reason: str
    body: bytes
    content_type: str | None = None

    @property
    def status(self) -> str:
        """Status line in the ``"503 Service Unavailable"`` form."""
        return f"{self.status_code} {self.reason}".rstrip()


class UpstreamClient(Protocol):
    def get(self, url: str) -> UpstreamResponse: ...


class HttpxUpstreamClient:
    """Single-shot GET client shared by every fetch worker.

    ``httpx.Client`` is safe to use from several threads at once, so one
    instance (and one connection pool) serves a whole fan-out.
    """

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        verify: bool = True,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"User-Agent": user_agent} if user_agent else None
        if not verify:
            logger.warning("TLS certificate verification is disabled for upstream calls")
        self._client = httpx.Client(
            timeout=timeout,
            verify=verify,
            headers=headers,
            transport=transport,
        )

    def get(self, url: str) -> UpstreamResponse:
        try:
            resp = self._client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        return UpstreamResponse(
            status_code=resp.status_code,
            reason=resp.reason_phrase,
            body=resp.content,
            content_type=resp.headers.get("content-type"),
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxUpstreamClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
