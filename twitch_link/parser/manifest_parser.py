"""Splits a usher master playlist into quality/resolution/URL entries.

The playlist is not parsed as generic HLS. Twitch emits a fixed layout::

    0  #EXTM3U
    1  #EXT-X-TWITCH-INFO:...
    2  #EXT-X-MEDIA:...NAME="1080p60 (source)"...     quality
    3  #EXT-X-STREAM-INF:...RESOLUTION=1920x1080...  resolution
    4  https://.../index-dvr.m3u8                     url
    5  #EXT-X-MEDIA:...                              next group
    ...

Every line at index ``i >= 4`` with ``(i - 4) % 3 == 0`` is a URL; the two
lines before it are its quality and resolution lines. Lines are passed
through verbatim.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..models import ManifestEntry
from ..utils.errors import DecodeError

FIRST_URL_INDEX = 4
GROUP_SIZE = 3


def split_manifest_lines(text: str) -> List[str]:
    """Splits on ``\\n`` and drops empty lines."""

    return [line for line in text.split("\n") if line]


def parse_manifest_lines(lines: Sequence[str]) -> List[ManifestEntry]:
    entries: List[ManifestEntry] = []
    for i in range(FIRST_URL_INDEX, len(lines), GROUP_SIZE):
        entries.append(ManifestEntry(quality=lines[i - 2], resolution=lines[i - 1], url=lines[i]))
    return entries


def parse_manifest(raw: bytes) -> List[ManifestEntry]:
    """Decodes a raw usher response and returns its renditions in playlist order.

    Playlists too short to hold a URL line yield an empty list; a trailing
    group without its URL line is dropped.
    """

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        logging.error("Manifest is not valid UTF-8: %s", exc)
        raise DecodeError("Manifest body is not valid UTF-8") from exc

    entries = parse_manifest_lines(split_manifest_lines(text))
    if not entries:
        logging.warning("Manifest did not contain any renditions")
    return entries
