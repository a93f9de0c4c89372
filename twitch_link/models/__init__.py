"""Data models for content kinds, access tokens and manifest entries."""

from .enums import ContentKind
from .manifest_models import ManifestEntry
from .token_models import (
    AccessToken,
    ArchivedAccessToken,
    LiveAccessToken,
    PlaybackAccessTokenResponse,
)

__all__ = [
    "ContentKind",
    "ManifestEntry",
    "AccessToken",
    "LiveAccessToken",
    "ArchivedAccessToken",
    "PlaybackAccessTokenResponse",
]
