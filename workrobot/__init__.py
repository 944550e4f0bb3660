"""Group robot webhook client."""

from workrobot.config import CONFIG, RobotConfig, __version__
from workrobot.client import Client, upload_url, webhook_url
from workrobot.dispatcher import Dispatcher
from workrobot.domain import markdown
from workrobot.domain.models import (
    Article,
    Card,
    DispatchOutcome,
    Image,
    Markdown,
    Media,
    Mention,
    Message,
    Receipt,
    Text,
    UploadedMedia,
    encode,
)
from workrobot.errors import (
    DispatchError,
    DispatchErrors,
    ImageTooLarge,
    MessageTooLong,
    MessageValidationError,
    MissingRequiredField,
    RemoteRejected,
    RequestConstructionFailed,
    ResponseMalformed,
    ResponseUnreadable,
    TooManyArticles,
    TransportFailed,
    WorkRobotError,
)
from workrobot.infrastructure.bounded_reader import BoundedReader, read_bounded

__all__ = [
    "__version__",
    "CONFIG",
    "RobotConfig",
    "Client",
    "Dispatcher",
    "upload_url",
    "webhook_url",
    "markdown",
    "Article",
    "Card",
    "DispatchOutcome",
    "Image",
    "Markdown",
    "Media",
    "Mention",
    "Message",
    "Receipt",
    "Text",
    "UploadedMedia",
    "encode",
    "DispatchError",
    "DispatchErrors",
    "ImageTooLarge",
    "MessageTooLong",
    "MessageValidationError",
    "MissingRequiredField",
    "RemoteRejected",
    "RequestConstructionFailed",
    "ResponseMalformed",
    "ResponseUnreadable",
    "TooManyArticles",
    "TransportFailed",
    "WorkRobotError",
    "BoundedReader",
    "read_bounded",
]
