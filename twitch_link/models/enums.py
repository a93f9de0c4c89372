"""Content kinds accepted by the resolver."""

from enum import Enum


class ContentKind(str, Enum):
    """Whether an identifier names a live channel or an archived video (VOD)."""

    LIVE = "live"
    ARCHIVED = "archived"
