import re

import pytest

from twitch_link.models import ManifestEntry

USHER_LIVE_URL = re.compile(r"^https://usher\.ttvnw\.net/api/channel/hls/([^/?]*)\.m3u8\?.*$")
USHER_VOD_URL = re.compile(r"^https://usher\.ttvnw\.net/vod/([^/?]*)\.m3u8\?.*$")

TWITCH_HEADER = [
    "#EXTM3U",
    '#EXT-X-TWITCH-INFO:NODE="video-edge-c2a3c4.sea01",MANIFEST-NODE="video-weaver.sea01",SERVER-TIME="1700000000.00"',
]

SOURCE_ENTRY = ManifestEntry(
    quality='#EXT-X-MEDIA:TYPE=VIDEO,GROUP-ID="chunked",NAME="1080p60 (source)",AUTOSELECT=YES,DEFAULT=YES',
    resolution='#EXT-X-STREAM-INF:BANDWIDTH=6000000,RESOLUTION=1920x1080,CODECS="avc1.64002A,mp4a.40.2",VIDEO="chunked",FRAME-RATE=60.000',
    url="https://video-weaver.sea01.hls.ttvnw.net/v1/playlist/chunked.m3u8",
)

LOW_ENTRY = ManifestEntry(
    quality='#EXT-X-MEDIA:TYPE=VIDEO,GROUP-ID="720p30",NAME="720p",AUTOSELECT=YES,DEFAULT=YES',
    resolution='#EXT-X-STREAM-INF:BANDWIDTH=2373000,RESOLUTION=1280x720,CODECS="avc1.4D401F,mp4a.40.2",VIDEO="720p30",FRAME-RATE=30.000',
    url="https://video-weaver.sea01.hls.ttvnw.net/v1/playlist/720p30.m3u8",
)


def build_manifest(entries, header=None, trailing=None) -> bytes:
    lines = list(TWITCH_HEADER if header is None else header)
    for entry in entries:
        lines.extend([entry.quality, entry.resolution, entry.url])
    lines.extend(trailing or [])
    return ("\n".join(lines) + "\n").encode("utf-8")


def token_body(kind: str = "live", value: str = '{"channel":"x","expires":1700000000}', signature: str = "abc123"):
    payload = {"value": value, "signature": signature}
    if kind == "live":
        return {"data": {"streamPlaybackAccessToken": payload}}
    return {"data": {"videoPlaybackAccessToken": payload}}


@pytest.fixture
def two_rendition_manifest() -> bytes:
    return build_manifest([SOURCE_ENTRY, LOW_ENTRY])
