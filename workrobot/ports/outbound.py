"""Outbound ports — interfaces for the webhook and upload collaborators."""

from typing import BinaryIO, Optional, Protocol, runtime_checkable

from workrobot.domain.models import Receipt, UploadedMedia


@runtime_checkable
class TransportPort(Protocol):
    """Delivers one encoded payload and returns the parsed acknowledgment.

    Raises a DispatchError subclass on transport failure. Cancelling the
    awaiting task aborts the call at its next I/O checkpoint.
    """

    async def send(self, url: str, payload: bytes) -> Receipt: ...


@runtime_checkable
class UploaderPort(Protocol):
    """Uploads a file and returns the remote media id."""

    async def upload(self, stream: BinaryIO, filename: Optional[str] = None) -> UploadedMedia: ...
