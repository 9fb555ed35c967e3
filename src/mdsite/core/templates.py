"""Jinja2 page templates: packaged defaults with optional per-site overrides"""

from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined, select_autoescape

from mdsite.core.models import IndexEntry, Post, SiteMeta


DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def isoformat(value: datetime) -> str:
    return value.isoformat()


def format_date(value: datetime, format_str: str = "%Y-%m-%d") -> str:
    """Format a datetime for display; non-datetimes are stringified."""
    if not isinstance(value, datetime):
        return str(value)
    return value.strftime(format_str)


class TemplateLoader:
    """Loads post/index templates, preferring template_dir over the packaged defaults."""

    def __init__(self, template_dir: Path | None = None, date_format: str = "%Y-%m-%d") -> None:
        loaders = [FileSystemLoader(DEFAULT_TEMPLATE_DIR)]
        if template_dir is not None:
            loaders.insert(0, FileSystemLoader(template_dir))
        self.template_dir = template_dir
        self.date_format = date_format
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["isoformat"] = isoformat
        self.env.filters["format_date"] = lambda value, fmt=None: format_date(value, fmt or self.date_format)

    def render_template(self, template_name: str, **context: Any) -> str:
        return self.env.get_template(template_name).render(**context)

    def render_post(self, post: Post, body_html: str, site: SiteMeta) -> str:
        """Render a full post page; body_html is inserted unescaped."""
        return self.render_template("post.html", post=post, content=body_html, site=site)

    def render_index(self, entries: list[IndexEntry], site: SiteMeta) -> str:
        return self.render_template("index.html", entries=entries, site=site)
