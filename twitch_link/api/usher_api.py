"""API client that exchanges an access token for a usher master playlist."""

from __future__ import annotations

import logging
from typing import Union
from urllib.parse import quote, urlencode, urljoin

from ..models import ArchivedAccessToken, ContentKind, LiveAccessToken
from ..utils.errors import ContractViolation
from ..utils.http_client import USHER_BASE, HttpClient

VOD_PATH = "vod/{identifier}.m3u8"
CHANNEL_PATH = "api/channel/hls/{identifier}.m3u8"


def build_manifest_url(
    identifier: str,
    token: Union[LiveAccessToken, ArchivedAccessToken],
    kind: ContentKind,
    client_id: str,
) -> str:
    """Builds the signed usher URL; raises ContractViolation if ``token`` was issued for another kind."""

    if token.kind != kind:
        message = f"{kind.value} playlist requested with a {ContentKind(token.kind).value} access token"
        logging.error("Token does not match content kind: %s", message)
        raise ContractViolation(message)
    template = VOD_PATH if kind is ContentKind.ARCHIVED else CHANNEL_PATH
    query = urlencode(
        {
            "client_id": client_id,
            "token": token.value,
            "sig": token.signature,
            "allow_source": "true",
            "allow_audio_only": "true",
        }
    )
    path = template.format(identifier=quote(identifier, safe=""))
    return f"{urljoin(USHER_BASE, path)}?{query}"


class UsherAPI:
    """Fetches raw master playlists for channels and videos."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def fetch_manifest(
        self,
        identifier: str,
        token: Union[LiveAccessToken, ArchivedAccessToken],
        kind: ContentKind,
    ) -> bytes:
        url = build_manifest_url(identifier, token, kind, self._client.client_id)
        logging.debug("Fetching %s playlist for %s", kind.value, identifier)
        return self._client.fetch_usher_manifest(url)

    async def fetch_manifest_async(
        self,
        identifier: str,
        token: Union[LiveAccessToken, ArchivedAccessToken],
        kind: ContentKind,
    ) -> bytes:
        url = build_manifest_url(identifier, token, kind, self._client.client_id)
        logging.debug("Fetching %s playlist for %s", kind.value, identifier)
        return await self._client.fetch_usher_manifest_async(url)
