"""Media uploader using aiohttp multipart forms."""

import os
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Union

import aiohttp

from workrobot.adapters.http.transport import HttpAdapter, decode_body, parse_receipt
from workrobot.domain.models import UploadedMedia
from workrobot.errors import RemoteRejected, ResponseMalformed


def parse_upload_receipt(body: bytes) -> UploadedMedia:
    receipt = parse_receipt(body)
    if not receipt.ok:
        raise RemoteRejected(receipt.code, receipt.message)
    data = decode_body(body)
    try:
        created_at = int(data.get("created_at"))
    except (TypeError, ValueError) as e:
        raise ResponseMalformed(f"invalid created_at: {data.get('created_at')!r}") from e
    return UploadedMedia(
        media_id=str(data.get("media_id", "")),
        type=str(data.get("type", "file")),
        created_at=created_at,
    )


class Uploader(HttpAdapter):
    """UploaderPort implementation for the upload_media gateway."""

    def __init__(
        self,
        endpoint: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(session=session, timeout=timeout)
        self.endpoint = endpoint

    @staticmethod
    def _filename(stream: BinaryIO, filename: Optional[str]) -> str:
        if filename is None:
            name = getattr(stream, "name", None)
            filename = name if isinstance(name, str) else None
        if not filename:
            return str(uuid.uuid4())
        return os.path.basename(filename)

    async def upload(self, stream: BinaryIO, filename: Optional[str] = None) -> UploadedMedia:
        form = aiohttp.FormData()
        form.add_field(
            "media",
            stream,
            filename=self._filename(stream, filename),
            content_type="application/octet-stream",
        )
        body = await self._post(self.endpoint, data=form)
        return parse_upload_receipt(body)

    async def upload_file(self, path: Union[str, Path]) -> UploadedMedia:
        with open(path, "rb") as f:
            return await self.upload(f)
