"""Unit tests for the media Uploader."""

import io
from unittest.mock import patch

import aiohttp
import pytest

from workrobot.adapters.http.uploader import Uploader, parse_upload_receipt
from workrobot.domain.models import UploadedMedia
from workrobot.errors import RemoteRejected, ResponseMalformed, TransportFailed

ENDPOINT = "https://work.example.com/upload_media?key=test-case&type=file"
OK_BODY = b'{"errcode":0,"errmsg":"ok","type":"file","media_id":"m-1","created_at":"1380000000"}'


def _mock_aiohttp_session(body=b"", post_error=None):
    class FakeResponse:
        async def read(self):
            return body

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        calls = []

        def post(self, url, **kwargs):
            FakeSession.calls.append((url, kwargs))
            if post_error is not None:
                raise post_error
            return FakeResponse()

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


class TestParseUploadReceipt:
    def test_success(self):
        assert parse_upload_receipt(OK_BODY) == UploadedMedia(
            media_id="m-1", type="file", created_at=1380000000
        )

    def test_rejected(self):
        with pytest.raises(RemoteRejected) as exc:
            parse_upload_receipt(b'{"errcode":40058,"errmsg":"media size out of limit"}')
        assert exc.value.code == 40058

    def test_bad_created_at(self):
        with pytest.raises(ResponseMalformed):
            parse_upload_receipt(b'{"errcode":0,"media_id":"m-1","created_at":"yesterday"}')

    def test_missing_created_at(self):
        with pytest.raises(ResponseMalformed):
            parse_upload_receipt(b'{"errcode":0,"media_id":"m-1"}')


class TestFilename:
    def test_explicit(self):
        assert Uploader._filename(io.BytesIO(), "/tmp/dir/report.pdf") == "report.pdf"

    def test_from_stream_name(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"x")
        with open(path, "rb") as f:
            assert Uploader._filename(f, None) == "notes.txt"

    def test_random_when_unnamed(self):
        name = Uploader._filename(io.BytesIO(), None)
        assert len(name) == 36


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload(self):
        fake = _mock_aiohttp_session(body=OK_BODY)
        with patch("workrobot.adapters.http.transport.aiohttp.ClientSession", fake):
            uploaded = await Uploader(ENDPOINT).upload(io.BytesIO(b"data"), "report.pdf")
        assert uploaded.media_id == "m-1"
        url, kwargs = fake.calls[0]
        assert url == ENDPOINT
        assert isinstance(kwargs["data"], aiohttp.FormData)

    @pytest.mark.asyncio
    async def test_upload_file(self, tmp_path):
        path = tmp_path / "report.pdf"
        path.write_bytes(b"%PDF")
        fake = _mock_aiohttp_session(body=OK_BODY)
        with patch("workrobot.adapters.http.transport.aiohttp.ClientSession", fake):
            uploaded = await Uploader(ENDPOINT).upload_file(path)
        assert uploaded.created_at == 1380000000

    @pytest.mark.asyncio
    async def test_upload_transport_failure(self):
        fake = _mock_aiohttp_session(post_error=aiohttp.ClientConnectionError("refused"))
        with patch("workrobot.adapters.http.transport.aiohttp.ClientSession", fake):
            with pytest.raises(TransportFailed):
                await Uploader(ENDPOINT).upload(io.BytesIO(b"data"))

    @pytest.mark.asyncio
    async def test_upload_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await Uploader(ENDPOINT).upload_file(tmp_path / "missing.bin")
