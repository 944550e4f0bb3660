"""Relay routes that accept messages over HTTP and forward them to the robot."""

import base64
import binascii
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from workrobot.client import Client
from workrobot.config import RobotConfig
from workrobot.domain.models import Article, Card, Image, Markdown, Media, Message, Text
from workrobot.errors import DispatchError, DispatchErrors, MessageValidationError, MissingRequiredField

robot_router = APIRouter(prefix="/robot", tags=["Robot"])

robot_config = RobotConfig.from_env()
robot_client: Optional[Client] = (
    Client.from_config(robot_config) if robot_config.is_configured else None
)


class ArticleSpec(BaseModel):
    title: str = ""
    url: str = ""
    description: str = ""
    picurl: str = ""


class MessageSpec(BaseModel):
    type: Literal["text", "markdown", "image", "news", "file"]
    # text
    content: Optional[str] = None
    mentioned_list: List[str] = []
    mentioned_mobile_list: List[str] = []
    mention_all: bool = False
    # markdown
    lines: List[str] = []
    # image
    base64: Optional[str] = None
    # news
    articles: List[ArticleSpec] = []
    # file
    media_id: Optional[str] = None


class SendRequest(BaseModel):
    messages: List[MessageSpec]
    concurrent: bool = False
    fail_fast: bool = False


class SendResponse(BaseModel):
    success: bool
    sent: int = 0


def build_message(spec: MessageSpec) -> Message:
    """Turn a request item into a message; raises on invalid content."""
    if spec.type == "text":
        return Text(
            spec.content or "",
            members=spec.mentioned_list,
            mobiles=spec.mentioned_mobile_list,
            all_members=spec.mention_all,
        )
    if spec.type == "markdown":
        if spec.content is not None:
            return Markdown().raw_content(spec.content)
        return Markdown(*spec.lines)
    if spec.type == "image":
        if not spec.base64:
            raise MissingRequiredField("base64")
        try:
            data = base64.b64decode(spec.base64, validate=True)
        except binascii.Error as e:
            raise ValueError(f"invalid base64 image data: {e}") from e
        return Image(data)
    if spec.type == "news":
        return Card(*(
            Article(title=a.title, link=a.url, description=a.description, image_url=a.picurl)
            for a in spec.articles
        ))
    if not spec.media_id:
        raise MissingRequiredField("media_id")
    return Media(spec.media_id)


@robot_router.post("/send", response_model=SendResponse)
async def robot_send(req: SendRequest):
    if robot_client is None:
        raise HTTPException(status_code=503, detail="Robot key not configured")

    try:
        messages = [build_message(spec) for spec in req.messages]
    except (MessageValidationError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        if req.concurrent:
            await robot_client.send_concurrently(*messages, fail_fast=req.fail_fast)
        else:
            await robot_client.send(*messages)
    except DispatchErrors as e:
        raise HTTPException(status_code=502, detail=[str(err) for err in e])
    except DispatchError as e:
        raise HTTPException(status_code=502, detail=[str(e)])

    return SendResponse(success=True, sent=len(messages))
