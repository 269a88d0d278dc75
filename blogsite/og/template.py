"""Declarative layout for open-graph preview images.

The layout only describes what goes on the card: the rasterizer in
:mod:`blogsite.og.image` decides how it is drawn. Sizes are in layout units;
the rasterizer scales them to the output canvas.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..utils import as_utc

DEFAULT_BRAND = "ダーニエル"

BACKGROUND = (10, 10, 10)
BRAND_RED = (229, 62, 62)
WHITE = (255, 255, 255)
GREY = (128, 128, 128)

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True, slots=True)
class OgData:
    title: str
    description: str
    date: dt.datetime
    tags: Optional[tuple[str, ...]] = None


@dataclass(frozen=True, slots=True)
class Block:
    kind: str  # "text" or "tags"
    color: tuple[int, int, int]
    font_size: int
    align: str = "start"  # "start" or "center"
    text: str = ""
    items: tuple[str, ...] = ()
    pill_color: Optional[tuple[int, int, int]] = None
    pill_radius: int = 0
    pill_padding: int = 0
    gap: int = 0


@dataclass(frozen=True, slots=True)
class OgLayout:
    width: int = 600
    height: int = 315
    background: tuple[int, int, int] = BACKGROUND
    padding: tuple[int, int] = (10, 20)  # vertical, horizontal
    font_family: tuple[str, ...] = ("JetBrainsMono-Bold", "DejaVuSansMono-Bold")
    # Used per block when the primary font lacks glyphs, e.g. for the katakana brand.
    fallback_family: tuple[str, ...] = (
        "NotoSansCJK-Bold",
        "NotoSansCJK-Regular",
        "NotoSansCJKjp-Bold",
        "NotoSansCJKjp-Regular",
        "NotoSansJP-Bold",
        "NotoSansJP-Regular",
    )
    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def texts(self) -> list[str]:
        out = []
        for block in self.blocks:
            if block.kind == "tags":
                out.extend(block.items)
            else:
                out.append(block.text)
        return out


def coerce_date(value: object) -> dt.datetime:
    """Turn a date-like value into an aware UTC datetime.

    Accepts datetimes (naive ones are read as UTC), dates, ISO-8601 strings
    and epoch milliseconds. Invalid strings raise ``ValueError``.
    """
    if isinstance(value, dt.date):
        return as_utc(value)
    if isinstance(value, bool):
        raise TypeError("Cannot build a date from a bool")
    if isinstance(value, (int, float)):
        return dt.datetime.fromtimestamp(value / 1000, tz=dt.timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if "T" in text or " " in text:
            return as_utc(dt.datetime.fromisoformat(text))
        return as_utc(dt.date.fromisoformat(text))
    raise TypeError(f"Cannot build a date from {type(value).__name__}")


def format_og_date(value: dt.date) -> str:
    value = as_utc(value)
    return f"{MONTHS[value.month - 1]} {value.day}, {value.year}"


def tag_row(tags: Sequence[str]) -> Block:
    return Block(
        kind="tags",
        color=WHITE,
        font_size=16,
        align="center",
        items=tuple(tags),
        pill_color=GREY,
        pill_radius=18,
        pill_padding=4,
        gap=8,
    )


def build_layout(data: OgData, brand: str = DEFAULT_BRAND) -> OgLayout:
    blocks = [
        Block(kind="text", text=brand, color=BRAND_RED, font_size=28),
        Block(kind="text", text=data.title, color=WHITE, font_size=25, align="center"),
        Block(kind="text", text=data.description, color=GREY, font_size=18, align="center"),
    ]
    tags = data.tags if data.tags is not None else ()
    if len(tags) > 0:
        blocks.append(tag_row(tags))
    blocks.append(Block(kind="text", text=format_og_date(data.date), color=WHITE, font_size=12))
    return OgLayout(blocks=tuple(blocks))
