"""Markdown segment helpers for markdown messages."""

from typing import Any

MAXIMAL_TITLE = 1
MEDIUM_TITLE = 3
MINIMUM_TITLE = 6


class Segment(str):
    """An inline markdown fragment, usable anywhere a str is."""


def title(level: int, text: str) -> Segment:
    """Leveled heading; out-of-range levels are clamped to 1..6."""
    level = max(MAXIMAL_TITLE, min(MINIMUM_TITLE, int(level)))
    return Segment("#" * level + " " + text)


def link(text: str, url: str) -> Segment:
    return Segment(f"[{text}]({url})")


def bold(text: Any) -> Segment:
    return Segment(f"**{text}**")


def code(text: str) -> Segment:
    return Segment(f"`{text}`")


def quote(text: str) -> Segment:
    return Segment("> " + "\n> ".join(text.split("\n")))


def _font(color: str, text: Any) -> Segment:
    return Segment(f'<font color="{color}">{text}</font>')


def color_green(text: Any) -> Segment:
    return _font("info", text)


def color_gray(text: Any) -> Segment:
    return _font("comment", text)


def color_red(text: Any) -> Segment:
    return _font("warning", text)


def join(sep: str, *items: Any) -> Segment:
    """Concatenate segments, strings or anything printable."""
    return Segment(sep.join(str(item) for item in items))
