from __future__ import annotations

import datetime as dt
import html
from dataclasses import dataclass
from typing import Iterable, Sequence

from .content import Post
from .utils import as_utc, join_url, rfc822_date


@dataclass(frozen=True, slots=True)
class FeedItem:
    title: str
    pub_date: dt.date
    description: str
    link: str


def feed_item(post: Post) -> FeedItem:
    return FeedItem(
        title=post.title,
        pub_date=post.published_at,
        description=post.description,
        link=f"/posts/{post.slug}/",
    )


def feed_items(posts: Iterable[Post]) -> list[FeedItem]:
    return [feed_item(post) for post in posts]


def rss(title: str, description: str, site: str, items: Sequence[FeedItem]) -> str:
    """Serialize an RSS 2.0 document; item links are resolved against the absolute ``site`` URL."""
    site_url = site.rstrip("/")
    entries = []
    for item in items:
        link = join_url(site_url, item.link)
        entries.append(
            "\n".join(
                [
                    "<item>",
                    f"<title>{html.escape(item.title)}</title>",
                    f"<link>{html.escape(link)}</link>",
                    f'<guid isPermaLink="true">{html.escape(link)}</guid>',
                    f"<pubDate>{rfc822_date(item.pub_date)}</pubDate>",
                    f"<description>{html.escape(item.description)}</description>",
                    "</item>",
                ]
            )
        )
    if items:
        last_build = rfc822_date(max(as_utc(item.pub_date) for item in items))
    else:
        last_build = rfc822_date(dt.datetime.now(dt.timezone.utc))
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<rss version="2.0">',
            "<channel>",
            f"<title>{html.escape(title)}</title>",
            f"<link>{html.escape(site_url)}/</link>",
            f"<description>{html.escape(description)}</description>",
            f"<lastBuildDate>{last_build}</lastBuildDate>",
            *entries,
            "</channel>",
            "</rss>",
        ]
    )
