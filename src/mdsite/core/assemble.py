"""Site assembly: collision checks, draft filtering, ordering, and page rendering"""

import logging
from collections import defaultdict

from jinja2 import TemplateError

from mdsite.core.errors import CollisionError, RenderError
from mdsite.core.models import IndexEntry, Post, RenderedPage, Site, SiteMeta
from mdsite.core.render import Renderer
from mdsite.core.serialize import build_index, build_sidecar, dump_json
from mdsite.core.templates import TemplateLoader


logger = logging.getLogger(__name__)

POSTS_DIR = "posts"


def page_path(slug: str) -> str:
    return f"{POSTS_DIR}/{slug}.html"


def check_collisions(posts: list[Post]) -> None:
    """Raise CollisionError for the first slug (alphabetically) shared by more than one post."""
    by_slug: dict[str, list[str]] = defaultdict(list)
    for post in posts:
        by_slug[post.slug].append(post.path)
    for slug in sorted(by_slug):
        if len(by_slug[slug]) > 1:
            raise CollisionError(slug, by_slug[slug])


def select_posts(posts: list[Post], include_drafts: bool = False) -> list[Post]:
    """Drop drafts unless include_drafts is set."""
    return [p for p in posts if include_drafts or not p.draft]


def order_posts(posts: list[Post]) -> list[Post]:
    """Newest first; equal dates fall back to slug ascending."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(by_slug, key=lambda p: p.date, reverse=True)


def assemble_site(
    posts: list[Post],
    renderer: Renderer,
    templates: TemplateLoader,
    site: SiteMeta,
    include_drafts: bool = False,
    ) -> Site:
    """Render every selected post plus the index, entirely in memory.

    Every page, sidecar, and the index are finished strings on return, so CollisionError
    or RenderError is always raised before anything is written.
    """
    check_collisions(posts)
    selected = order_posts(select_posts(posts, include_drafts))
    excluded = len(posts) - len(selected)
    if excluded:
        logger.info("excluded %d draft(s)", excluded)

    pages = []
    for post in selected:
        body_html = renderer.render(post)
        try:
            html = templates.render_post(post, body_html, site)
        except TemplateError as e:
            raise RenderError(post.path, f"template error: {e}") from e
        try:
            sidecar = dump_json(build_sidecar(post))
        except (TypeError, ValueError) as e:
            raise RenderError(post.path, f"front-matter cannot be written as JSON: {e}") from e
        pages.append(RenderedPage(post=post, body_html=body_html, html=html, path=page_path(post.slug), sidecar=sidecar))

    entries = [
        IndexEntry(slug=p.slug, title=p.title, date=p.date, url=page_path(p.slug))
        for p in selected
    ]
    try:
        index_html = templates.render_index(entries, site)
    except TemplateError as e:
        raise RenderError("index", f"template error: {e}") from e
    index_json = dump_json(build_index(entries, site))

    logger.info("assembled %d page(s)", len(pages))
    return Site(
        pages=pages, entries=entries, index_html=index_html, index_json=index_json,
        meta=site, drafts_excluded=excluded,
    )
