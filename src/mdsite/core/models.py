"""Data models shared by the load, assemble, and write stages"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """A single Markdown post as loaded from disk; immutable for the rest of the build."""
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    date: datetime                  # naive; aware inputs are normalized to UTC
    draft: bool = False
    body: str                       # markdown after the front-matter block
    path: str                       # source path relative to the content root (posix)
    body_line: int = 1              # 1-based source line where body starts
    frontmatter: dict[str, Any] = Field(default_factory=dict)   # keys other than title/date/draft


class SiteMeta(BaseModel):
    """Site-wide values exposed to every template as `site`."""
    title: str = "Blog"
    language: str = "en"


class IndexEntry(BaseModel):
    slug: str
    title: str
    date: datetime
    url: str                        # relative to the output root


@dataclass
class RenderedPage:
    """One output page, derived from exactly one Post."""
    post: Post
    body_html: str
    html: str
    path: str                       # relative to the output root, e.g. posts/<slug>.html
    sidecar: str = ""                # JSON text written next to the page


@dataclass
class Site:
    """Everything a build writes, held in memory until all rendering succeeded."""
    pages: list[RenderedPage]
    entries: list[IndexEntry]
    index_html: str
    meta: SiteMeta
    index_json: str = ""
    drafts_excluded: int = 0


@dataclass
class BuildResult:
    written: list = field(default_factory=list)
    pages: int = 0
    drafts_excluded: int = 0
