"""Content collections read from Markdown files with front matter."""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .utils import parse_bool

COLLECTIONS = ("posts", "tils")
LIST_KEYS = {"tags"}
DATE_KEYS = ("publishedat", "published_at", "date")
LIST_ITEM_RE = re.compile(r"^\s*-\s+(?P<item>.+)$")


class ContentError(ValueError):
    """Raised when an authored content file is missing data or is malformed."""


@dataclass(frozen=True, slots=True)
class Post:
    slug: str
    title: str
    description: str
    published_at: dt.date
    body: str = ""
    source: Optional[Path] = None


@dataclass(frozen=True, slots=True)
class Til:
    slug: str
    title: str
    published_at: dt.date
    tags: tuple[str, ...] = ()
    body: str = ""
    source: Optional[Path] = None


Record = Union[Post, Til]


def slugify(text: str) -> str:
    text = text.lower()
    text = re.sub(r"[^\w]+", "-", text, flags=re.UNICODE)
    text = text.strip("-_").replace("_", "-")
    return text or "post"


def entry_slug(path: Path, root: Path, explicit: str = "") -> str:
    """Slug an entry by its path under the collection root, e.g. ``2024/intro``."""
    if explicit:
        parts = explicit.strip("/").split("/")
    else:
        parts = path.relative_to(root).with_suffix("").parts
    return "/".join(slugify(part) for part in parts if part) or "post"


def unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def parse_list(value: str) -> list[str]:
    value = value.strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        items = [item.strip().strip("'\"") for item in inner.split(",")]
    else:
        items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def parse_front_matter(text: str) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    meta: dict = {}
    current_list = None
    for line in lines[1:end]:
        item_match = LIST_ITEM_RE.match(line)
        if item_match and current_list is not None:
            meta[current_list].append(unquote(item_match.group("item").strip()))
            continue
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip().lower()
        value = value.strip()
        current_list = None
        if key in LIST_KEYS:
            meta[key] = parse_list(value)
            if not value:
                current_list = key
        else:
            meta[key] = unquote(value)
    body = "\n".join(lines[end + 1 :])
    return meta, body


def parse_published(meta: dict, path: Path) -> dt.date:
    value = ""
    for key in DATE_KEYS:
        if meta.get(key):
            value = meta[key].strip()
            break
    if not value:
        raise ContentError(f"{path}: missing publishedAt")
    try:
        if "T" in value or " " in value:
            return dt.datetime.fromisoformat(value)
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise ContentError(f"{path}: invalid publishedAt {value!r}") from exc


def require(meta: dict, key: str, path: Path) -> str:
    value = (meta.get(key) or "").strip()
    if not value:
        raise ContentError(f"{path}: missing {key}")
    return value


def load_post(path: Path, root: Path) -> Optional[Post]:
    meta, body = parse_front_matter(path.read_text(encoding="utf-8"))
    if parse_bool(meta.get("draft")):
        return None
    explicit_slug = (meta.get("slug") or "").strip()
    return Post(
        slug=entry_slug(path, root, explicit_slug),
        title=require(meta, "title", path),
        description=require(meta, "description", path),
        published_at=parse_published(meta, path),
        body=body,
        source=path,
    )


def load_til(path: Path, root: Path) -> Optional[Til]:
    meta, body = parse_front_matter(path.read_text(encoding="utf-8"))
    if parse_bool(meta.get("draft")):
        return None
    explicit_slug = (meta.get("slug") or "").strip()
    tags = meta.get("tags") or []
    return Til(
        slug=entry_slug(path, root, explicit_slug),
        title=require(meta, "title", path),
        published_at=parse_published(meta, path),
        tags=tuple(tags),
        body=body,
        source=path,
    )


LOADERS = {"posts": load_post, "tils": load_til}


def get_collection(name: str, content_dir: Path) -> list:
    """Load every published record of a collection in file path order.

    Raises ``ValueError`` for an unknown collection name and ``ContentError``
    for malformed files or slugs that collide within the collection.
    """
    if name not in LOADERS:
        raise ValueError(f"Unknown collection: {name!r} (expected one of {', '.join(COLLECTIONS)})")
    loader = LOADERS[name]
    root = Path(content_dir) / name
    if not root.exists():
        return []
    records = []
    seen: dict[str, Path] = {}
    for path in sorted(root.rglob("*.md"), key=lambda p: p.as_posix()):
        record = loader(path, root)
        if record is None:
            continue
        if record.slug in seen:
            raise ContentError(f"{path}: duplicate slug {record.slug!r} (already used by {seen[record.slug]})")
        seen[record.slug] = path
        records.append(record)
    return records
