"""Build orchestration: load -> assemble -> write"""

import logging
from pathlib import Path

from mdsite.config import Settings
from mdsite.core.assemble import assemble_site, check_collisions, order_posts, select_posts
from mdsite.core.load import load_posts
from mdsite.core.models import BuildResult, Post, SiteMeta
from mdsite.core.render import Renderer
from mdsite.core.templates import TemplateLoader
from mdsite.core.write import write_site


logger = logging.getLogger(__name__)


def collect_posts(settings: Settings, include_drafts: bool | None = None) -> list[Post]:
    """Load, collision-check, filter, and order posts without rendering anything."""
    posts = load_posts(Path(settings.content_dir), settings.jobs)
    check_collisions(posts)
    drafts = settings.include_drafts if include_drafts is None else include_drafts
    return order_posts(select_posts(posts, drafts))


def run_build(settings: Settings) -> BuildResult:
    """Run a full build. Every error is raised before the first file is written."""
    content_dir = Path(settings.content_dir)
    posts = load_posts(content_dir, settings.jobs)

    templates = TemplateLoader(
        Path(settings.templates_dir) if settings.templates_dir else None,
        date_format=settings.date_format,
    )
    site = assemble_site(
        posts,
        Renderer(settings.parser_config),
        templates,
        SiteMeta(title=settings.site_title, language=settings.language),
        include_drafts=settings.include_drafts,
    )

    written = write_site(site, Path(settings.output_dir), clean=settings.clean, content_dir=content_dir)
    logger.info("built %d page(s) into %s", len(site.pages), settings.output_dir)
    return BuildResult(written=written, pages=len(site.pages), drafts_excluded=site.drafts_excluded)

