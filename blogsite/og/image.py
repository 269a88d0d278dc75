from __future__ import annotations

import functools
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .template import DEFAULT_BRAND, Block, OgData, OgLayout, build_layout

SCALE = 2
LINE_HEIGHT = 1.25
FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("C:/Windows/Fonts"),
)
FONT_SUFFIXES = (".ttf", ".otf", ".ttc")
MISSING_GLYPH = "\U0010ffff"


@functools.lru_cache(maxsize=None)
def find_font(family: tuple[str, ...]) -> Optional[str]:
    for name in family:
        for root in FONT_DIRS:
            if not root.is_dir():
                continue
            for suffix in FONT_SUFFIXES:
                match = next(root.rglob(f"{name}{suffix}"), None)
                if match is not None:
                    return str(match)
    return None


@functools.lru_cache(maxsize=None)
def glyph_signature(font_path: str, char: str) -> bytes:
    """Bitmap of one character at a fixed size, for comparing glyphs."""
    font = ImageFont.truetype(font_path, 16)
    img = Image.new("L", (32, 32))
    ImageDraw.Draw(img).text((4, 4), char, font=font, fill=255)
    return img.tobytes()


def covers(font_path: str, text: str) -> bool:
    missing = glyph_signature(font_path, MISSING_GLYPH)
    return all(char.isspace() or glyph_signature(font_path, char) != missing for char in set(text))


def choose_font(text: str, primary: Optional[str], fallback: Optional[str]) -> Optional[str]:
    """Pick the first font that has a glyph for every character of ``text``."""
    candidates = [path for path in (primary, fallback) if path]
    for path in candidates:
        if covers(path, text):
            return path
    return candidates[0] if candidates else None


def load_font(size: int, font_path: Optional[str]):
    if font_path:
        return ImageFont.truetype(font_path, size)
    return ImageFont.load_default(size=size)


def text_width(draw: ImageDraw.ImageDraw, text: str, font) -> int:
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0]


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if not current or text_width(draw, candidate, font) <= max_width:
            current = candidate
            continue
        lines.append(current)
        current = word
    if current:
        lines.append(current)
    return lines or [""]


@dataclass
class _Placed:
    """A block with its font and measured height on the canvas."""

    block: Block
    font: object
    lines: list[str]
    height: int


def _measure(
    draw: ImageDraw.ImageDraw, block: Block, primary: Optional[str], fallback: Optional[str], max_width: int
) -> _Placed:
    size = block.font_size * SCALE
    text = "".join(block.items) if block.kind == "tags" else block.text
    font = load_font(size, choose_font(text, primary, fallback))
    if block.kind == "tags":
        height = size + 2 * block.pill_padding * SCALE
        return _Placed(block, font, list(block.items), height)
    lines = wrap_text(draw, block.text, font, max_width)
    return _Placed(block, font, lines, int(len(lines) * size * LINE_HEIGHT))


def _draw_text(draw: ImageDraw.ImageDraw, placed: _Placed, left: int, width: int, top: int) -> None:
    size = placed.block.font_size * SCALE
    y = top
    for line in placed.lines:
        line_w = text_width(draw, line, placed.font)
        x = left + (width - line_w) // 2 if placed.block.align == "center" else left
        draw.text((x, y), line, font=placed.font, fill=placed.block.color)
        y += int(size * LINE_HEIGHT)


def _draw_tags(draw: ImageDraw.ImageDraw, placed: _Placed, left: int, width: int, top: int) -> None:
    block = placed.block
    pad = block.pill_padding * SCALE
    gap = block.gap * SCALE
    widths = [text_width(draw, tag, placed.font) + 2 * pad for tag in placed.lines]
    total = sum(widths) + gap * (len(widths) - 1)
    x = left + (width - total) // 2
    for tag, pill_w in zip(placed.lines, widths):
        draw.rounded_rectangle(
            [x, top, x + pill_w, top + placed.height],
            radius=block.pill_radius * SCALE,
            fill=block.pill_color,
        )
        bbox = draw.textbbox((0, 0), tag, font=placed.font)
        text_y = top + (placed.height - (bbox[3] - bbox[1])) // 2 - bbox[1]
        draw.text((x + pad - bbox[0], text_y), tag, font=placed.font, fill=block.color)
        x += pill_w + gap


def rasterize(layout: OgLayout, font_path: Optional[str] = None) -> bytes:
    """Draw a layout and return the PNG-encoded bytes."""
    primary = font_path or find_font(layout.font_family)
    fallback = find_font(layout.fallback_family)
    width, height = layout.width * SCALE, layout.height * SCALE
    pad_y, pad_x = (value * SCALE for value in layout.padding)
    inner_width = width - 2 * pad_x

    img = Image.new("RGB", (width, height), layout.background)
    draw = ImageDraw.Draw(img)
    placed = [_measure(draw, block, primary, fallback, inner_width) for block in layout.blocks]

    # Blocks are spread from top to bottom with equal space between them.
    free = height - 2 * pad_y - sum(item.height for item in placed)
    spacing = max(0, free // (len(placed) - 1)) if len(placed) > 1 else 0
    y = pad_y
    for item in placed:
        if item.block.kind == "tags":
            _draw_tags(draw, item, pad_x, inner_width, y)
        else:
            _draw_text(draw, item, pad_x, inner_width, y)
        y += item.height + spacing

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def generate_og_image(data: OgData, brand: str = DEFAULT_BRAND, font_path: Optional[str] = None) -> bytes:
    return rasterize(build_layout(data, brand=brand), font_path=font_path)
