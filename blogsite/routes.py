"""URL routes the site exposes, answered as in-memory responses.

The build writes each static route's response body to disk; the same
handlers can answer a request for one path directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from .config import DEFAULT_SITE_URL, SiteConfig
from .content import Post, Til
from .feed import feed_items, rss
from .og import OgData, coerce_date, generate_og_image
from .paths import ImageTarget, get_static_paths

OG_PREFIX = "/open-graph/"
RSS_PATH = "/rss.xml"
PNG_TYPE = "image/png"
RSS_TYPE = "application/xml; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        return self.headers.get("Content-Type", "")


def og_image_url(target_path: str) -> str:
    return f"{OG_PREFIX}{target_path}.png"


def og_image_route(props: Mapping, config: Optional[SiteConfig] = None) -> Response:
    config = config or SiteConfig()
    tags = props.get("tags")
    data = OgData(
        title=props["title"],
        description=props["description"],
        date=coerce_date(props["date"]),
        tags=tuple(tags) if tags is not None else None,
    )
    body = generate_og_image(data, brand=config.brand, font_path=config.og_font)
    return Response(status=200, body=body, headers={"Content-Type": PNG_TYPE})


def rss_route(posts: Sequence[Post], config: SiteConfig, site: Optional[str] = None) -> Response:
    document = rss(
        title=config.site_name,
        description=config.site_description,
        site=site or config.site_url or DEFAULT_SITE_URL,
        items=feed_items(posts),
    )
    return Response(status=200, body=document.encode("utf-8"), headers={"Content-Type": RSS_TYPE})


def static_routes(posts: Sequence[Post], tils: Sequence[Til]) -> list[tuple[str, ImageTarget]]:
    return [(og_image_url(target.path), target) for target in get_static_paths(posts, tils)]


def resolve(url_path: str, posts: Sequence[Post], tils: Sequence[Til], config: SiteConfig) -> Response:
    if url_path == RSS_PATH:
        return rss_route(posts, config)
    if url_path.startswith(OG_PREFIX):
        for route, target in static_routes(posts, tils):
            if route == url_path:
                return og_image_route(target.props(), config)
    return Response(status=404, body=b"Not Found", headers={"Content-Type": "text/plain; charset=utf-8"})
