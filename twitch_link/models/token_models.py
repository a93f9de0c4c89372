"""Pydantic models for playback access tokens and their GQL wire format.

GQL answers with a three-level document::

    {"data": {"streamPlaybackAccessToken": {"value": "...", "signature": "..."},
              "videoPlaybackAccessToken": null}}

Only one of the two payloads is populated. Decoding turns the envelope into
either a :class:`LiveAccessToken` or an :class:`ArchivedAccessToken`, so a
token always knows which content kind it was issued for.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..utils.errors import DecodeError
from .enums import ContentKind


class LiveAccessToken(BaseModel):
    """Signed token returned for a live channel."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ContentKind.LIVE] = ContentKind.LIVE
    value: str
    signature: str


class ArchivedAccessToken(BaseModel):
    """Signed token returned for an archived video."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ContentKind.ARCHIVED] = ContentKind.ARCHIVED
    value: str
    signature: str


AccessToken = Annotated[Union[LiveAccessToken, ArchivedAccessToken], Field(discriminator="kind")]


class PlaybackTokenPayload(BaseModel):
    value: str
    signature: str


class PlaybackAccessTokenData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stream_playback_access_token: Optional[PlaybackTokenPayload] = Field(
        default=None, alias="streamPlaybackAccessToken"
    )
    video_playback_access_token: Optional[PlaybackTokenPayload] = Field(
        default=None, alias="videoPlaybackAccessToken"
    )


class PlaybackAccessTokenResponse(BaseModel):
    """Raw body of the PlaybackAccessToken GQL operation."""

    data: PlaybackAccessTokenData

    def to_access_token(self) -> Union[LiveAccessToken, ArchivedAccessToken]:
        stream = self.data.stream_playback_access_token
        video = self.data.video_playback_access_token
        if stream and video:
            logging.error("Token response carries both a stream and a video payload")
            raise DecodeError("Token response carries both a stream and a video payload")
        if stream:
            return LiveAccessToken(value=stream.value, signature=stream.signature)
        if video:
            return ArchivedAccessToken(value=video.value, signature=video.signature)
        logging.error("Token response carries neither a stream nor a video payload")
        raise DecodeError("Token response carries neither a stream nor a video payload")
