"""Domain layer: message kinds and markdown helpers, no I/O."""

from workrobot.domain import markdown
from workrobot.domain.models import (
    MARKDOWN_MESSAGE_MAX_LENGTH,
    MAX_ARTICLE_COUNT,
    MENTION_ALL,
    TEXT_MESSAGE_MAX_LENGTH,
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

__all__ = [
    "markdown",
    "MARKDOWN_MESSAGE_MAX_LENGTH",
    "MAX_ARTICLE_COUNT",
    "MENTION_ALL",
    "TEXT_MESSAGE_MAX_LENGTH",
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
]
