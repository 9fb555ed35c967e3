"""Scaffolding for new posts"""

import logging
from datetime import date
from pathlib import Path

import yaml

from mdsite.core.errors import BuildError
from mdsite.core.utils.slug import slugify


logger = logging.getLogger(__name__)


def new_post(content_dir: Path, title: str, when: date, draft: bool = True) -> Path:
    """Write <slug>.md with title/date/draft front-matter and an empty body."""
    slug = slugify(title)
    if not slug:
        raise BuildError(f"cannot derive a slug from title {title!r}")
    path = content_dir / f"{slug}.md"
    if path.exists():
        raise BuildError(f"{path}: already exists")

    fm = yaml.safe_dump({"title": title, "date": when, "draft": draft}, sort_keys=False, allow_unicode=True)
    content_dir.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{fm}---\n\n", encoding="utf-8")
    logger.info("created %s", path)
    return path
