"""JSON serialization for sidecars and the index listing"""

import hashlib
import json
from datetime import date
from typing import Any

from mdsite.core.models import IndexEntry, Post, SiteMeta


def json_default(value: Any) -> str:
    """Serialize dates (including nested front-matter values) as ISO strings."""
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_json(data: dict) -> str:
    """Deterministic JSON text: sorted keys, 2-space indent, trailing newline."""
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False, default=json_default) + "\n"


def build_sidecar(post: Post) -> dict:
    """Return the per-post metadata dict written next to its HTML page."""
    return {
        "slug": post.slug,
        "path": post.path,
        "title": post.title,
        "date": post.date.isoformat(),
        "draft": post.draft,
        "content_hash": hashlib.sha256(post.body.encode("utf-8")).hexdigest(),
        "frontmatter": post.frontmatter,
    }


def build_index(entries: list[IndexEntry], meta: SiteMeta) -> dict:
    return {
        "title": meta.title,
        "posts": [
            {"slug": e.slug, "title": e.title, "date": e.date.isoformat(), "url": e.url}
            for e in entries
        ],
    }
