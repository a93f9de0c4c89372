"""API layer for tokens, usher playlists, and the resolver that chains them."""

from .resolver import TwitchLink, resolve_stream, resolve_video
from .token_api import TokenAPI
from .usher_api import UsherAPI

__all__ = ["TwitchLink", "TokenAPI", "UsherAPI", "resolve_stream", "resolve_video"]
