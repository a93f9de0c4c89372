import asyncio

import aiohttp
import pytest
from aioresponses import aioresponses

from twitch_link.utils.errors import DecodeError, NotFoundError, TransportError
from twitch_link.utils.http_client import GQL_URL, HttpClient

from .conftest import USHER_LIVE_URL, token_body

MANIFEST_URL = "https://usher.ttvnw.net/api/channel/hls/somechannel.m3u8?sig=s&token=t"


def _run(call):
    async def runner():
        client = HttpClient()
        try:
            return await call(client)
        finally:
            await client.aclose()

    return asyncio.run(runner())


def test_async_gql_returns_json():
    with aioresponses() as mocked:
        mocked.post(GQL_URL, payload=token_body("live"))
        data = _run(lambda client: client.request_gql_async({}))

    assert data == token_body("live")


def test_async_gql_non_200_raises_transport_error():
    with aioresponses() as mocked:
        mocked.post(GQL_URL, status=500, body="Internal Server Error")
        with pytest.raises(TransportError) as excinfo:
            _run(lambda client: client.request_gql_async({}))

    assert excinfo.value.status_code == 500


def test_async_gql_invalid_json_raises_decode_error():
    with aioresponses() as mocked:
        mocked.post(GQL_URL, status=200, body="<html>oops</html>")
        with pytest.raises(DecodeError):
            _run(lambda client: client.request_gql_async({}))


def test_async_gql_connection_failure_has_no_status():
    with aioresponses() as mocked:
        mocked.post(GQL_URL, exception=aiohttp.ClientConnectionError("reset"))
        with pytest.raises(TransportError) as excinfo:
            _run(lambda client: client.request_gql_async({}))

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, aiohttp.ClientConnectionError)


def test_async_usher_returns_raw_bytes():
    with aioresponses() as mocked:
        mocked.get(USHER_LIVE_URL, body=b"#EXTM3U\n")
        raw = _run(lambda client: client.fetch_usher_manifest_async(MANIFEST_URL))

    assert raw == b"#EXTM3U\n"


def test_async_usher_404_raises_not_found():
    with aioresponses() as mocked:
        mocked.get(USHER_LIVE_URL, status=404)
        with pytest.raises(NotFoundError):
            _run(lambda client: client.fetch_usher_manifest_async(MANIFEST_URL))


def test_async_usher_other_status_raises_transport_error():
    with aioresponses() as mocked:
        mocked.get(USHER_LIVE_URL, status=403)
        with pytest.raises(TransportError) as excinfo:
            _run(lambda client: client.fetch_usher_manifest_async(MANIFEST_URL))

    assert excinfo.value.status_code == 403
    assert not isinstance(excinfo.value, NotFoundError)


def test_async_usher_connection_failure_has_no_status():
    with aioresponses() as mocked:
        mocked.get(USHER_LIVE_URL, exception=aiohttp.ClientConnectionError("reset"))
        with pytest.raises(TransportError) as excinfo:
            _run(lambda client: client.fetch_usher_manifest_async(MANIFEST_URL))

    assert excinfo.value.status_code is None


def test_session_from_a_finished_loop_is_closed_on_reuse():
    client = HttpClient()

    async def first_run():
        await client.request_gql_async({})
        return client._async_session

    async def second_run():
        await client.request_gql_async({})
        session = client._async_session
        await client.aclose()
        return session

    with aioresponses() as mocked:
        mocked.post(GQL_URL, payload=token_body("live"), repeat=True)
        first = asyncio.run(first_run())
        second = asyncio.run(second_run())
    client.close()

    assert first is not second
    assert first.closed
    assert second.closed
