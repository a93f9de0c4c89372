"""Shared HTTP helpers for the Twitch GQL and usher endpoints."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp
import requests

from .errors import DecodeError, NotFoundError, TransportError

GQL_URL = "https://gql.twitch.tv/gql"
USHER_BASE = "https://usher.ttvnw.net/"

# Public web client id, the same one streamlink ships with.
DEFAULT_CLIENT_ID = "kimne78kx3ncx6brgo4mv6wki5h1ko"

REAL_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)

GQL_HEADERS_TEMPLATE: Dict[str, str] = {
    "content-type": "application/json",
    "accept": "*/*",
    "user-agent": REAL_USER_AGENT,
}

USHER_HEADERS: Dict[str, str] = {
    "user-agent": REAL_USER_AGENT,
    "accept": "application/x-mpegURL, */*",
}


class HttpClient:
    """Sends GQL and usher requests with the client-id header attached.

    Blocking calls go through ``requests`` sessions; the ``*_async`` variants
    share one ``aiohttp`` session per running event loop.
    """

    def __init__(self, client_id: str = DEFAULT_CLIENT_ID, timeout: int = 10) -> None:
        self.client_id = client_id
        self.timeout = timeout
        self._gql_session = requests.Session()
        self._usher_session = requests.Session()

        self._gql_headers = GQL_HEADERS_TEMPLATE.copy()
        self._gql_headers["Client-ID"] = client_id
        self._gql_session.headers.update(self._gql_headers)

        self._usher_headers = USHER_HEADERS.copy()
        self._usher_session.headers.update(self._usher_headers)

        self._async_session: Optional[aiohttp.ClientSession] = None
        self._async_lock: Optional[asyncio.Lock] = None
        self._async_loop: Optional[asyncio.AbstractEventLoop] = None

    def request_gql(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a GQL operation and return the decoded JSON body."""

        try:
            response = self._gql_session.post(GQL_URL, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logging.error("HTTP POST to %s failed: %s", GQL_URL, exc)
            raise TransportError(None, f"POST {GQL_URL} failed: {exc}") from exc

        if response.status_code != 200:
            logging.error("GQL request failed: status code is not 200, got %s", response.status_code)
            raise TransportError(response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            logging.error("GQL response from %s is not valid JSON: %s", GQL_URL, exc)
            raise DecodeError("GQL response body is not valid JSON") from exc

    def fetch_usher_manifest(self, url: str) -> bytes:
        """GET a master playlist from usher and return the raw body."""

        try:
            response = self._usher_session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logging.error("HTTP GET to usher failed: %s", exc)
            raise TransportError(None, f"GET {USHER_BASE} failed: {exc}") from exc
        return _check_usher_status(response.status_code, response.content)

    async def request_gql_async(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Asynchronous counterpart of :meth:`request_gql`."""

        session = await self._get_async_session()
        try:
            async with session.post(GQL_URL, json=payload, headers=self._gql_headers) as resp:
                status = resp.status
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logging.error("HTTP POST to %s failed: %s", GQL_URL, exc)
            raise TransportError(None, f"POST {GQL_URL} failed: {exc!r}") from exc

        if status != 200:
            logging.error("GQL request failed: status code is not 200, got %s", status)
            raise TransportError(status)

        try:
            return json.loads(body)
        except ValueError as exc:
            logging.error("GQL response from %s is not valid JSON: %s", GQL_URL, exc)
            raise DecodeError("GQL response body is not valid JSON") from exc

    async def fetch_usher_manifest_async(self, url: str) -> bytes:
        """Asynchronous counterpart of :meth:`fetch_usher_manifest`."""

        session = await self._get_async_session()
        try:
            async with session.get(url, headers=self._usher_headers) as resp:
                status = resp.status
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logging.error("HTTP GET to usher failed: %s", exc)
            raise TransportError(None, f"GET {USHER_BASE} failed: {exc!r}") from exc
        return _check_usher_status(status, body)

    async def _get_async_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._async_session:
            if (
                self._async_session.closed
                or not self._async_loop
                or self._async_loop.is_closed()
                or self._async_loop is not current_loop
            ):
                await self._shutdown_async_session()

        if self._async_lock is None:
            self._async_lock = asyncio.Lock()

        async with self._async_lock:
            if self._async_session and not self._async_session.closed:
                return self._async_session
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._async_session = aiohttp.ClientSession(timeout=timeout)
            self._async_loop = current_loop
        return self._async_session

    async def _shutdown_async_session(self) -> None:
        if self._async_session and not self._async_session.closed:
            try:
                await self._async_session.close()
            except RuntimeError as exc:
                # transports bound to a closed loop cannot be closed from here
                logging.debug("Could not close stale aiohttp session: %s", exc)
        self._async_session = None
        self._async_lock = None
        self._async_loop = None

    async def aclose(self) -> None:
        """Close the aiohttp session; must run on the loop that created it."""

        if self._async_session and not self._async_session.closed:
            await self._async_session.close()
        self._async_session = None
        self._async_loop = None
        self._async_lock = None

    def close(self) -> None:
        self._gql_session.close()
        self._usher_session.close()

        if self._async_session and not self._async_session.closed:
            logging.debug("aiohttp session left open; call aclose() from its event loop")
        self._async_session = None
        self._async_loop = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def _check_usher_status(status: int, body: bytes) -> bytes:
    if status == 200:
        return body
    if status == 404:
        logging.error("404 error occurred: transcode doesn't exist or stream is offline")
        raise NotFoundError()
    logging.error("Unexpected error occurred: usher returned status code %s", status)
    raise TransportError(status)
