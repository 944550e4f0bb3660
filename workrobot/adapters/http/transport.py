"""Webhook transport using aiohttp."""

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp

from workrobot.domain.models import Receipt
from workrobot.errors import (
    RequestConstructionFailed,
    ResponseMalformed,
    ResponseUnreadable,
    TransportFailed,
)

JSON_HEADERS = {"Content-Type": "application/json"}


def decode_body(body: bytes) -> Dict[str, Any]:
    """Decode a gateway response, which is always a JSON object."""
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ResponseMalformed(f"wrong http response data: {e}") from e
    if not isinstance(data, dict):
        raise ResponseMalformed(f"wrong http response data: {body[:200]!r}")
    return data


def parse_receipt(body: bytes) -> Receipt:
    data = decode_body(body)
    try:
        code = int(data.get("errcode", 0))
    except (TypeError, ValueError) as e:
        raise ResponseMalformed(f"invalid errcode: {data.get('errcode')!r}") from e
    return Receipt(code=code, message=str(data.get("errmsg", "")))


class HttpAdapter:
    """Shared aiohttp plumbing: optional injected session, error mapping."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None,
    ):
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return
        async with aiohttp.ClientSession() as session:
            yield session

    async def _post(self, url: str, **kwargs) -> bytes:
        if self._timeout is not None:
            kwargs.setdefault("timeout", self._timeout)
        try:
            async with self._client() as session:
                async with session.post(url, **kwargs) as resp:
                    try:
                        return await resp.read()
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        raise ResponseUnreadable(f"unreadable http response: {e}") from e
        except (aiohttp.InvalidURL, ValueError) as e:
            raise RequestConstructionFailed(f"bad request: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportFailed(f"http request failed: {e}") from e


class AiohttpTransport(HttpAdapter):
    """TransportPort implementation posting JSON payloads to the webhook."""

    async def send(self, url: str, payload: bytes) -> Receipt:
        body = await self._post(url, data=payload, headers=JSON_HEADERS)
        return parse_receipt(body)
