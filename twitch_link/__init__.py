"""Resolve Twitch channels and videos into directly playable playlist URLs."""

from .api import TwitchLink, resolve_stream, resolve_video
from .models import ContentKind, ManifestEntry
from .utils.errors import ContractViolation, DecodeError, NotFoundError, TransportError, TwitchLinkError
from .utils.http_client import DEFAULT_CLIENT_ID

__all__ = [
    "TwitchLink",
    "resolve_stream",
    "resolve_video",
    "ContentKind",
    "ManifestEntry",
    "TwitchLinkError",
    "TransportError",
    "NotFoundError",
    "DecodeError",
    "ContractViolation",
    "DEFAULT_CLIENT_ID",
]
