from __future__ import annotations

import datetime as dt
import html
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Sequence

import markdown
from pygments.formatters import HtmlFormatter

from .config import SiteConfig
from .content import Post, Til
from .og import format_og_date
from .paths import target_for
from .render import render_template, strip_tags, write_text
from .routes import og_image_url
from .utils import join_url

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "codehilite"]
HIGHLIGHT_CLASS = "highlight"
PYGMENTS_STYLE = "monokai"


def render_markdown(text: str) -> str:
    md = markdown.Markdown(
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs={"codehilite": {"css_class": HIGHLIGHT_CLASS, "guess_lang": False}},
    )
    return md.convert(text)


def build_pygments_css(output_dir: Path, style: str = PYGMENTS_STYLE) -> None:
    css = HtmlFormatter(style=style).get_style_defs(f".{HIGHLIGHT_CLASS}")
    write_text(output_dir / "pygments.css", css)


def og_image_href(config: SiteConfig, target_path: str) -> str:
    if not target_path:
        return ""
    url = og_image_url(target_path)
    if config.site_url:
        return join_url(config.site_url, url)
    return url


def escape_field(value: str) -> str:
    """HTML-escape a page field so its braces can never form a template placeholder."""
    return html.escape(value).replace("{", "&#123;").replace("}", "&#125;")


def render_page(
    base_template: str,
    config: SiteConfig,
    root: str,
    title: str,
    description: str,
    og_path: str,
    content: str,
) -> str:
    return render_template(
        base_template,
        title=escape_field(f"{title} | {config.site_name}" if title != config.site_name else title),
        og_title=escape_field(title),
        description=escape_field(description),
        og_image=escape_field(og_image_href(config, og_path)),
        root=root,
        site_name=escape_field(config.site_name),
        year=str(dt.datetime.now().year),
        content=content,
    )


def tag_chips(tags: Sequence[str]) -> str:
    if len(tags) == 0:
        return ""
    chips = "".join(f'<span class="chip">{html.escape(tag)}</span>' for tag in tags)
    return f'<div class="post-tags">{chips}</div>'


def build_entry_list(records: Sequence, prefix: str, root: str) -> str:
    if not records:
        return '<p class="empty">Nothing published yet.</p>'
    rows = []
    for record in records:
        summary = record.description if isinstance(record, Post) else ", ".join(record.tags)
        rows.append(
            '<li class="entry">'
            f'<a href="{root}/{prefix}/{record.slug}/">{html.escape(record.title)}</a>'
            f'<span class="entry-date">{format_og_date(record.published_at)}</span>'
            f'<p class="entry-summary">{html.escape(summary)}</p>'
            "</li>"
        )
    return f'<ul class="entry-list">{"".join(rows)}</ul>'


def build_index(base_template: str, output_dir: Path, posts: Sequence[Post], config: SiteConfig) -> None:
    root = "."
    content = (
        '<div class="section-head">'
        "<h1>Posts</h1>"
        f"<p>{html.escape(config.site_description)}</p>"
        "</div>"
        f"{build_entry_list(posts, 'posts', root)}"
    )
    og_path = f"posts/{posts[0].slug}" if posts else ""
    html_doc = render_page(
        base_template, config, root, config.site_name, config.site_description, og_path, content
    )
    write_text(output_dir / "index.html", html_doc)


def build_til_index(base_template: str, output_dir: Path, tils: Sequence[Til], config: SiteConfig) -> None:
    root = ".."
    content = (
        '<div class="section-head">'
        "<h1>Today I Learned</h1>"
        "<p>Short notes on small things.</p>"
        "</div>"
        f"{build_entry_list(tils, 'til', root)}"
    )
    og_path = f"til/{tils[0].slug}" if tils else ""
    html_doc = render_page(base_template, config, root, "Today I Learned", "Short notes on small things.", og_path, content)
    write_text(output_dir / "til" / "index.html", html_doc)


def render_entry(base_template: str, output_dir: Path, record, config: SiteConfig) -> Path:
    """Render one post or til page to ``<prefix>/<slug>/index.html``."""
    target = target_for(record)
    root = "/".join([".."] * len(target.path.split("/")))
    body_html = render_markdown(record.body)
    if isinstance(record, Post):
        description = record.description
        chips = ""
    else:
        description = strip_tags(body_html).strip().replace("\n", " ")[:200] or record.title
        chips = tag_chips(record.tags)
    content = (
        '<article class="post">'
        '<div class="post-meta">'
        f'<time class="post-date" datetime="{record.published_at.isoformat()}">'
        f"{format_og_date(record.published_at)}</time>"
        f"{chips}"
        "</div>"
        f'<h1 class="post-title">{html.escape(record.title)}</h1>'
        f'<div class="post-body">{body_html}</div>'
        f'<div class="post-footer"><a href="{root}/index.html">Back to home</a></div>'
        "</article>"
    )
    html_doc = render_page(base_template, config, root, record.title, description, target.path, content)
    path = output_dir / target.path / "index.html"
    write_text(path, html_doc)
    return path


def run_parallel(func: Callable, items: Sequence, workers: int) -> list:
    workers = max(1, int(workers or 1))
    if workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=min(workers, len(items))) as executor:
        return list(executor.map(func, items))


def build_entries(
    base_template: str,
    output_dir: Path,
    records: Sequence,
    config: SiteConfig,
    workers: int = 1,
) -> list[Path]:
    return run_parallel(lambda record: render_entry(base_template, output_dir, record, config), records, workers)
