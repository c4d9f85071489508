from __future__ import annotations


class UpstreamError(Exception):
    """Any failure talking to the booking API for a single request."""


class TransportError(UpstreamError):
    """No response was received (DNS, connect, TLS, timeout, ...)."""


class UpstreamStatusError(UpstreamError):
    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"API returned non-200 status: {status_code} {reason}".rstrip())


class DecodeError(UpstreamError):
    """The response body was not the expected JSON shape."""


class EncodeError(Exception):
    """The outgoing response body could not be produced."""
