from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Optional

from .content import Post, Record, Til

TIL_IMAGE_TITLE = "Today I Learned"


@dataclass(frozen=True, slots=True)
class ImageTarget:
    """One open-graph image to generate: its route path plus display data."""

    path: str
    title: str
    description: str
    date: dt.date
    tags: Optional[tuple[str, ...]] = None

    def props(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "tags": self.tags,
        }


def target_for_post(post: Post) -> ImageTarget:
    return ImageTarget(
        path=f"posts/{post.slug}",
        title=post.title,
        description=post.description,
        date=post.published_at,
        tags=None,
    )


def target_for_til(til: Til) -> ImageTarget:
    # The til's own title becomes the subtitle.
    return ImageTarget(
        path=f"til/{til.slug}",
        title=TIL_IMAGE_TITLE,
        description=til.title,
        date=til.published_at,
        tags=til.tags,
    )


def target_for(record: Record) -> ImageTarget:
    if isinstance(record, Post):
        return target_for_post(record)
    if isinstance(record, Til):
        return target_for_til(record)
    raise TypeError(f"Unsupported content record: {type(record).__name__}")


def get_static_paths(posts: Iterable[Post], tils: Iterable[Til]) -> list[ImageTarget]:
    """Enumerate image targets, posts first then tils, in collection order."""
    targets = [target_for_post(post) for post in posts]
    targets.extend(target_for_til(til) for til in tils)
    seen = set()
    for target in targets:
        if target.path in seen:
            raise ValueError(f"Duplicate open-graph path: {target.path}")
        seen.add(target.path)
    return targets
