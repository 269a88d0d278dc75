from __future__ import annotations

import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .og.template import DEFAULT_BRAND

DEFAULT_SITE_NAME = "Daniel Boll’s Blog"
DEFAULT_SITE_DESCRIPTION = (
    "Salve! I'm a Tech Lead from Brazil. I'm passionate about technology and constantly seeking new "
    "challenges to expand my skillset. I enjoy mastering new programming languages and frameworks and "
    "contributing to open source projects. I also like sharing my progress through live coding."
)
DEFAULT_SITE_URL = "https://daniel-boll.me"


@dataclass(frozen=True, slots=True)
class SiteConfig:
    site_name: str = DEFAULT_SITE_NAME
    site_description: str = DEFAULT_SITE_DESCRIPTION
    site_url: str = DEFAULT_SITE_URL
    brand: str = DEFAULT_BRAND
    og_font: Optional[str] = None

    @classmethod
    def from_args(cls, args: object) -> "SiteConfig":
        return cls(
            site_name=getattr(args, "site_name", DEFAULT_SITE_NAME),
            site_description=getattr(args, "site_description", DEFAULT_SITE_DESCRIPTION),
            site_url=(getattr(args, "site_url", "") or "").strip() or DEFAULT_SITE_URL,
            brand=getattr(args, "brand", DEFAULT_BRAND),
            og_font=(getattr(args, "og_font", "") or "").strip() or None,
        )


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be an object: {path}", file=sys.stderr)
        sys.exit(1)
    return data

