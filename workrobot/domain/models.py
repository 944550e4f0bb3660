"""Message kinds and their wire payloads.

Every message validates on the mutating call (the object keeps its last
valid state when a call is rejected) and encodes with ``message()``, which
never fails and always yields the same bytes for the same state.

Payload format: https://developer.work.weixin.qq.com/document/path/91770
"""

import base64
import hashlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from workrobot.domain.markdown import Segment
from workrobot.errors import (
    ImageTooLarge,
    MessageTooLong,
    MissingRequiredField,
    TooManyArticles,
)
from workrobot.infrastructure.bounded_reader import MAX_IMAGE_FILE_SIZE, read_bounded

TEXT_MESSAGE_MAX_LENGTH = 2048
MARKDOWN_MESSAGE_MAX_LENGTH = 4096
MAX_ARTICLE_COUNT = 8

MENTION_ALL = "@all"


def _byte_length(s: str) -> int:
    return len(s.encode("utf-8"))


def _build(msgtype: str, body: Dict[str, Any]) -> Dict[str, Any]:
    return {"msgtype": msgtype, msgtype: body}


def _dump(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


# ── Text ────────────────────────────────────────────────────


class Mention:
    """A text message that only mentions group members."""

    def __init__(
        self,
        members: Optional[List[str]] = None,
        mobiles: Optional[List[str]] = None,
        all_members: bool = False,
    ):
        self.members: List[str] = []
        self.mobiles: List[str] = []
        self.all_members = False
        for member in members or ():
            self.mention_member(member)
        for mobile in mobiles or ():
            self.mention_mobile(mobile)
        self.mention_all(all_members)

    def mention_all(self, all_members: bool = True) -> "Mention":
        self.all_members = all_members
        return self

    def mention_member(self, member: str) -> "Mention":
        self.members.append(member)
        return self

    def mention_mobile(self, mobile: str) -> "Mention":
        self.mobiles.append(mobile)
        return self

    def _mentions(self) -> Dict[str, List[str]]:
        members, mobiles = list(self.members), list(self.mobiles)
        # "@all" rides on the mobile list only when mobiles are the sole mentions
        if self.all_members and mobiles and not members:
            mobiles.append(MENTION_ALL)
        elif self.all_members:
            members.append(MENTION_ALL)

        mentions = {}
        if members:
            mentions["mentioned_list"] = members
        if mobiles:
            mentions["mentioned_mobile_list"] = mobiles
        return mentions

    def payload(self) -> Dict[str, Any]:
        return _build("text", {"content": "", **self._mentions()})

    def message(self) -> bytes:
        return _dump(self.payload())


class Text(Mention):
    """Plain text, at most 2048 bytes, with optional mentions."""

    def __init__(
        self,
        content: str = "",
        members: Optional[List[str]] = None,
        mobiles: Optional[List[str]] = None,
        all_members: bool = False,
    ):
        super().__init__(members, mobiles, all_members)
        self.content = ""
        self.set_content(content)

    def set_content(self, content: str) -> "Text":
        if not isinstance(content, str):
            raise TypeError(f"text content must be str, got {type(content).__name__}")
        if _byte_length(content) > TEXT_MESSAGE_MAX_LENGTH:
            raise MessageTooLong(
                f"text content exceeds {TEXT_MESSAGE_MAX_LENGTH} bytes"
            )
        self.content = content
        return self

    def payload(self) -> Dict[str, Any]:
        return _build("text", {"content": self.content, **self._mentions()})


# ── Markdown ────────────────────────────────────────────────


class Markdown:
    """Markdown built line by line, at most 4096 bytes in total.

    Each accepted line counts its own length plus one newline separator.
    """

    def __init__(self, *lines: Any):
        self.lines: List[str] = []
        self.size = 0
        for line in lines:
            self.add_line(line)

    def raw_content(self, raw: str) -> "Markdown":
        """Replace every line with ``raw``."""
        size = _byte_length(raw)
        if size > MARKDOWN_MESSAGE_MAX_LENGTH:
            raise MessageTooLong(
                f"markdown content exceeds {MARKDOWN_MESSAGE_MAX_LENGTH} bytes"
            )
        self.lines = [raw]
        self.size = size
        return self

    def add_segment_line(self, segment: Segment) -> "Markdown":
        return self.add_line(str(segment))

    def add_line(self, line: Any) -> "Markdown":
        if not isinstance(line, str):
            line = str(line)
        size = self.size + _byte_length(line) + 1  # \n
        if size > MARKDOWN_MESSAGE_MAX_LENGTH:
            raise MessageTooLong(
                f"markdown content exceeds {MARKDOWN_MESSAGE_MAX_LENGTH} bytes"
            )
        self.lines.append(line)
        self.size = size
        return self

    def payload(self) -> Dict[str, Any]:
        return _build("markdown", {"content": "\n".join(self.lines)})

    def message(self) -> bytes:
        return _dump(self.payload())


# ── Image ───────────────────────────────────────────────────


class Image:
    """Raw image bytes, at most 2 MiB."""

    def __init__(self, data: bytes = b""):
        if len(data) > MAX_IMAGE_FILE_SIZE:
            raise ImageTooLarge(f"image exceeds {MAX_IMAGE_FILE_SIZE} bytes")
        self.data = bytes(data)

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "Image":
        return cls(read_bounded(stream, MAX_IMAGE_FILE_SIZE))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Image":
        with open(path, "rb") as f:
            return cls.from_stream(f)

    @property
    def md5(self) -> str:
        return hashlib.md5(self.data).hexdigest()

    def payload(self) -> Dict[str, Any]:
        return _build(
            "image",
            {"base64": base64.b64encode(self.data).decode("ascii"), "md5": self.md5},
        )

    def message(self) -> bytes:
        return _dump(self.payload())


# ── Card ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Article:
    title: str
    link: str
    description: str = ""
    image_url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "url": self.link,
            "picurl": self.image_url,
        }


class Card:
    """Linked-article card holding up to 8 articles."""

    def __init__(self, *articles: Article):
        self.articles: List[Article] = []
        for article in articles:
            self.add_article(article)

    def add_article(self, article: Article) -> "Card":
        if len(self.articles) >= MAX_ARTICLE_COUNT:
            raise TooManyArticles(f"a card holds at most {MAX_ARTICLE_COUNT} articles")
        if not article.title:
            raise MissingRequiredField("title")
        if not article.link:
            raise MissingRequiredField("link")
        self.articles.append(article)
        return self

    def payload(self) -> Dict[str, Any]:
        return _build("news", {"articles": [a.to_dict() for a in self.articles]})

    def message(self) -> bytes:
        return _dump(self.payload())


# ── File ────────────────────────────────────────────────────


@dataclass
class UploadedMedia:
    """Receipt of a media upload."""

    media_id: str
    type: str = "file"
    created_at: int = 0


class Media:
    """A previously uploaded file, referenced by its media id."""

    def __init__(self, media_id: str):
        self.media_id = media_id

    @classmethod
    def from_upload(cls, uploaded: UploadedMedia) -> "Media":
        return cls(uploaded.media_id)

    def payload(self) -> Dict[str, Any]:
        return _build("file", {"media_id": self.media_id})

    def message(self) -> bytes:
        return _dump(self.payload())


Message = Union[Text, Mention, Markdown, Image, Card, Media]

MESSAGE_TYPES = (Text, Mention, Markdown, Image, Card, Media)


def encode(message: Message) -> bytes:
    """Wire bytes for any supported message kind."""
    if not isinstance(message, MESSAGE_TYPES):
        raise TypeError(f"unsupported message type: {type(message).__name__}")
    return message.message()


# ── Dispatch results ────────────────────────────────────────


@dataclass
class Receipt:
    """Acknowledgment returned by the webhook."""

    code: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0


@dataclass
class DispatchOutcome:
    """Result of delivering one message of a batch."""

    index: int
    success: bool
    error: Optional[BaseException] = field(default=None, repr=False)
