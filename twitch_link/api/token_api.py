"""API client that negotiates playback access tokens over GQL."""

from __future__ import annotations

import logging
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..models import ArchivedAccessToken, ContentKind, LiveAccessToken, PlaybackAccessTokenResponse
from ..utils.errors import DecodeError
from ..utils.http_client import HttpClient

OPERATION_NAME = "PlaybackAccessToken"
PERSISTED_QUERY_HASH = "0828119ded1c13477966434e15800ff57ddacf13ba1911c129dc2200705b0712"
PLAYER_TYPE = "embed"


def build_token_payload(identifier: str, kind: ContentKind) -> Dict[str, Any]:
    """Returns the persisted-query body for a channel login or video id."""

    is_live = kind is ContentKind.LIVE
    return {
        "operationName": OPERATION_NAME,
        "extensions": {
            "persistedQuery": {
                "version": 1,
                "sha256Hash": PERSISTED_QUERY_HASH,
            }
        },
        "variables": {
            "isLive": is_live,
            "login": identifier if is_live else "",
            "isVod": not is_live,
            "vodID": "" if is_live else identifier,
            "playerType": PLAYER_TYPE,
        },
    }


def decode_token_response(data: Dict[str, Any]) -> Union[LiveAccessToken, ArchivedAccessToken]:
    try:
        response = PlaybackAccessTokenResponse.model_validate(data)
    except ValidationError as exc:
        logging.error("Parsing or serialization failure in token response: %s", exc)
        raise DecodeError("Token response does not match the PlaybackAccessToken shape") from exc
    return response.to_access_token()


class TokenAPI:
    """Requests signed playback tokens for live channels and archived videos."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def acquire_token(self, identifier: str, kind: ContentKind) -> Union[LiveAccessToken, ArchivedAccessToken]:
        logging.debug("Requesting %s access token for %s", kind.value, identifier)
        data = self._client.request_gql(build_token_payload(identifier, kind))
        return decode_token_response(data)

    async def acquire_token_async(
        self, identifier: str, kind: ContentKind
    ) -> Union[LiveAccessToken, ArchivedAccessToken]:
        logging.debug("Requesting %s access token for %s", kind.value, identifier)
        data = await self._client.request_gql_async(build_token_payload(identifier, kind))
        return decode_token_response(data)
