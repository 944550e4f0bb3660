"""aiohttp adapters for the webhook and upload gateways."""

from workrobot.adapters.http.transport import AiohttpTransport, parse_receipt
from workrobot.adapters.http.uploader import Uploader, parse_upload_receipt

__all__ = ["AiohttpTransport", "Uploader", "parse_receipt", "parse_upload_receipt"]
