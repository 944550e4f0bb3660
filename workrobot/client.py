"""Robot client: webhook addressing plus the dispatcher and uploader."""

from typing import BinaryIO, Optional
from urllib.parse import urlencode

import aiohttp

from workrobot.adapters.http.transport import AiohttpTransport
from workrobot.adapters.http.uploader import Uploader
from workrobot.config import DEFAULT_SEND_GATEWAY, DEFAULT_UPLOAD_GATEWAY, RobotConfig
from workrobot.dispatcher import Dispatcher
from workrobot.domain.models import Media, Message
from workrobot.ports.outbound import TransportPort


def _with_query(gateway: str, **params: str) -> str:
    sep = "&" if "?" in gateway else "?"
    return f"{gateway}{sep}{urlencode(params)}"


def webhook_url(key: str, gateway: str = DEFAULT_SEND_GATEWAY) -> str:
    """Build the send webhook address for a robot key."""
    return _with_query(gateway, key=key)


def upload_url(key: str, gateway: str = DEFAULT_UPLOAD_GATEWAY) -> str:
    return _with_query(gateway, key=key, type="file")


class Client:
    """Group robot client.

    Args:
        key: Robot key; used to build both gateway addresses.
        webhook: Full send address, overriding the one built from ``key``.
        transport: TransportPort implementation (defaults to aiohttp).
        session: aiohttp session shared by the default transport and uploader.
        timeout: Per-request timeout in seconds for the default adapters.
        upload_gateway: Base address of the upload_media gateway.
        verbose: Log dispatch failures to stderr; None defers to
            ``CONFIG["verbose"]``.
    """

    def __init__(
        self,
        key: str = "",
        webhook: Optional[str] = None,
        transport: Optional[TransportPort] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None,
        upload_gateway: str = DEFAULT_UPLOAD_GATEWAY,
        verbose: Optional[bool] = None,
    ):
        self.key = key
        self.webhook = webhook or webhook_url(key)
        self.upload_gateway = upload_gateway
        self._session = session
        self._timeout = timeout
        self.transport = transport or AiohttpTransport(session=session, timeout=timeout)
        self.dispatcher = Dispatcher(self.transport, self.webhook, verbose=verbose)

    @classmethod
    def from_config(cls, config: RobotConfig, **kwargs) -> "Client":
        return cls(
            key=config.key,
            webhook=config.webhook or None,
            timeout=config.timeout,
            upload_gateway=config.upload_gateway,
            verbose=config.verbose,
            **kwargs,
        )

    async def send(self, *messages: Message) -> None:
        """Send messages in order; the first failure stops the rest."""
        await self.dispatcher.send_sequential(*messages)

    async def send_concurrently(self, *messages: Message, fail_fast: bool = False) -> None:
        """Send messages concurrently.

        Delivery order is not guaranteed. See Dispatcher.send_concurrent
        for the two failure policies.
        """
        await self.dispatcher.send_concurrent(*messages, fail_fast=fail_fast)

    def uploader(self) -> Uploader:
        return Uploader(
            upload_url(self.key, self.upload_gateway),
            session=self._session,
            timeout=self._timeout,
        )

    async def upload_media(self, stream: BinaryIO, filename: Optional[str] = None) -> Media:
        """Upload a file and wrap its media id in a ready-to-send message."""
        uploaded = await self.uploader().upload(stream, filename)
        return Media.from_upload(uploaded)
