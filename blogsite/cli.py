from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path

from .config import DEFAULT_SITE_DESCRIPTION, DEFAULT_SITE_NAME, DEFAULT_SITE_URL, SiteConfig, load_config
from .content import ContentError, get_collection
from .og.template import DEFAULT_BRAND
from .pages import build_entries, build_index, build_pygments_css, build_til_index, run_parallel
from .render import read_template, write_bytes
from .routes import RSS_PATH, og_image_route, rss_route, static_routes
from .utils import clean_output_dir, parse_bool, parse_int


def resolve_workers(value: object) -> int:
    workers = parse_int(value, 0)
    if workers <= 0:
        workers = os.cpu_count() or 1
    return max(1, min(workers, 32))


def build_site(args: argparse.Namespace) -> dict:
    """Build every page, feed and preview image into ``args.output``.

    Returns a count of written artifacts per kind.
    """
    content_dir = Path(args.content)
    output_dir = Path(args.output)
    project_root = Path.cwd()
    workers = resolve_workers(getattr(args, "build_workers", 0))
    config = SiteConfig.from_args(args)

    if not content_dir.exists():
        print(f"Content directory not found: {content_dir}", file=sys.stderr)
        sys.exit(1)

    try:
        posts = get_collection("posts", content_dir)
        tils = get_collection("tils", content_dir)
    except ContentError as exc:
        print(f"Invalid content: {exc}", file=sys.stderr)
        sys.exit(1)

    if parse_bool(getattr(args, "clean", True)):
        clean_output_dir(output_dir, project_root)
    output_dir.mkdir(parents=True, exist_ok=True)

    base_template = read_template("base.html")
    build_index(base_template, output_dir, posts, config)
    build_til_index(base_template, output_dir, tils, config)
    pages = build_entries(base_template, output_dir, [*posts, *tils], config, workers=workers)
    build_pygments_css(output_dir)
    counts = {"posts": len(posts), "tils": len(tils), "pages": len(pages) + 2, "images": 0, "feeds": 0}

    if parse_bool(getattr(args, "enable_rss", True)):
        response = rss_route(posts, config)
        write_bytes(output_dir / RSS_PATH.lstrip("/"), response.body)
        counts["feeds"] = 1

    if parse_bool(getattr(args, "enable_og_images", True)):
        routes = static_routes(posts, tils)

        def write_image(route: tuple) -> None:
            url_path, target = route
            response = og_image_route(target.props(), config)
            write_bytes(output_dir / url_path.lstrip("/"), response.body)

        run_parallel(write_image, routes, workers)
        counts["images"] = len(routes)

    return counts


def main() -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args()
    config = load_config(Path(pre_args.config))

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        value = cfg_value(key, default)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = cfg_value(key, default)
        return parse_bool(value) if value is not None else default

    def cfg_int(key: str, default: int) -> int:
        value = cfg_value(key, default)
        return parse_int(value, default)

    parser = argparse.ArgumentParser(description="Blog generator with open-graph images and an RSS feed.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--content",
        default=cfg_str("content", "content"),
        help="Directory holding the posts/ and tils/ collections.",
    )
    parser.add_argument("--output", default=cfg_str("output", "dist"), help="Output directory for the site.")
    parser.add_argument("--site-name", default=cfg_str("site_name", DEFAULT_SITE_NAME), help="Site and feed title.")
    parser.add_argument(
        "--site-description",
        default=cfg_str("site_description", DEFAULT_SITE_DESCRIPTION),
        help="Site and feed description.",
    )
    parser.add_argument(
        "--site-url",
        default=cfg_str("site_url", DEFAULT_SITE_URL),
        help="Public site URL used for feed links and og:image URLs.",
    )
    parser.add_argument(
        "--brand",
        default=cfg_str("brand", DEFAULT_BRAND),
        help="Brand marker drawn at the top of preview images.",
    )
    parser.add_argument(
        "--og-font",
        default=cfg_str("og_font", ""),
        help="TrueType/OpenType font for preview images (default: search system fonts).",
    )
    parser.add_argument(
        "--build-workers",
        default=cfg_int("build_workers", 0),
        type=int,
        help="Number of worker threads for rendering (0 = auto).",
    )
    parser.add_argument(
        "--clean",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("clean", True),
        help="Clean output directory before build.",
    )
    parser.add_argument(
        "--enable-rss",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("enable_rss", True),
        help="Generate rss.xml.",
    )
    parser.add_argument(
        "--enable-og-images",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("enable_og_images", True),
        help="Generate open-graph preview images.",
    )
    args = parser.parse_args()
    start = time.perf_counter()
    counts = build_site(args)
    elapsed = time.perf_counter() - start
    print(
        f"Built {counts['pages']} pages, {counts['images']} images, {counts['feeds']} feed "
        f"from {counts['posts']} posts and {counts['tils']} tils in {elapsed:.2f}s."
    )
    print(f"Site generated in: {args.output}")
