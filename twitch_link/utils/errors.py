"""Exceptions raised while resolving streams and videos into playlists."""

from __future__ import annotations

from typing import Optional


class TwitchLinkError(Exception):
    """Base class for every failure surfaced by twitch_link."""


class TransportError(TwitchLinkError):
    """Raised when an endpoint answers with an unexpected HTTP status.

    ``status_code`` is ``None`` when the request never produced a response
    (connection reset, DNS failure, timeout).
    """

    def __init__(self, status_code: Optional[int], message: str = "") -> None:
        self.status_code = status_code
        if not message:
            message = f"Unexpected HTTP status {status_code}"
        super().__init__(message)


class NotFoundError(TransportError):
    """Raised on HTTP 404 from usher: the content does not exist or the stream is offline."""

    def __init__(self, message: str = "Transcode does not exist or the stream is offline") -> None:
        super().__init__(404, message)


class DecodeError(TwitchLinkError):
    """Raised when a response body does not have the expected token or manifest shape."""


class ContractViolation(DecodeError):
    """Raised when a token is used with a content kind it was not issued for."""
