"""Composes token acquisition, playlist fetch and manifest parsing."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Union

from ..models import ContentKind, ManifestEntry
from ..parser.manifest_parser import parse_manifest
from ..utils.http_client import DEFAULT_CLIENT_ID, HttpClient
from .token_api import TokenAPI
from .usher_api import UsherAPI

BatchResult = Dict[str, Union[List[ManifestEntry], Exception]]


class TwitchLink:
    """Resolves channel logins and video ids into playable rendition URLs.

    Each resolution runs token -> playlist -> parse in order and raises the
    first error it meets; nothing is retried and no partial list is returned.
    """

    def __init__(self, client_id: str = DEFAULT_CLIENT_ID, timeout: int = 10) -> None:
        self._http_client = HttpClient(client_id=client_id, timeout=timeout)
        self._token_api = TokenAPI(self._http_client)
        self._usher_api = UsherAPI(self._http_client)

    def resolve_stream(self, streamer: str) -> List[ManifestEntry]:
        return self._resolve(streamer, ContentKind.LIVE)

    def resolve_video(self, video_id: str) -> List[ManifestEntry]:
        return self._resolve(video_id, ContentKind.ARCHIVED)

    async def resolve_stream_async(self, streamer: str) -> List[ManifestEntry]:
        return await self._resolve_async(streamer, ContentKind.LIVE)

    async def resolve_video_async(self, video_id: str) -> List[ManifestEntry]:
        return await self._resolve_async(video_id, ContentKind.ARCHIVED)

    async def resolve_many_async(self, identifiers: Iterable[str], kind: ContentKind) -> BatchResult:
        """Resolves several identifiers concurrently.

        A failure is stored as the value for its identifier instead of
        cancelling the other resolutions.
        """

        identifiers = list(dict.fromkeys(identifiers))
        results = await asyncio.gather(
            *(self._resolve_async(identifier, kind) for identifier in identifiers),
            return_exceptions=True,
        )
        batch: BatchResult = {}
        for identifier, result in zip(identifiers, results):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
            batch[identifier] = result
        return batch

    def _resolve(self, identifier: str, kind: ContentKind) -> List[ManifestEntry]:
        token = self._token_api.acquire_token(identifier, kind)
        raw = self._usher_api.fetch_manifest(identifier, token, kind)
        entries = parse_manifest(raw)
        logging.info("Resolved %s %s into %s renditions", kind.value, identifier, len(entries))
        return entries

    async def _resolve_async(self, identifier: str, kind: ContentKind) -> List[ManifestEntry]:
        token = await self._token_api.acquire_token_async(identifier, kind)
        raw = await self._usher_api.fetch_manifest_async(identifier, token, kind)
        entries = parse_manifest(raw)
        logging.info("Resolved %s %s into %s renditions", kind.value, identifier, len(entries))
        return entries

    async def aclose(self) -> None:
        await self._http_client.aclose()

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> "TwitchLink":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    async def __aenter__(self) -> "TwitchLink":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()
        self.close()


def resolve_stream(streamer: str, client_id: str = DEFAULT_CLIENT_ID, timeout: int = 10) -> List[ManifestEntry]:
    """One-shot resolution of a live channel."""

    with TwitchLink(client_id=client_id, timeout=timeout) as link:
        return link.resolve_stream(streamer)


def resolve_video(video_id: str, client_id: str = DEFAULT_CLIENT_ID, timeout: int = 10) -> List[ManifestEntry]:
    """One-shot resolution of an archived video."""

    with TwitchLink(client_id=client_id, timeout=timeout) as link:
        return link.resolve_video(video_id)
