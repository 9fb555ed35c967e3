"""CLI command implementations"""

from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.errors import BuildError
from mdsite.core.pipeline import collect_posts, run_build
from mdsite.core.scaffold import new_post
from mdsite.log import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def build_cmd(
    content: Annotated[Optional[str], typer.Argument(help="Directory of Markdown posts")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include draft posts")] = None,
    clean: Annotated[Optional[bool], typer.Option("--clean/--no-clean", help="Remove output dir first")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    jobs: Annotated[Optional[int], typer.Option("--jobs", help="Parallel file reads while loading")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Render every post plus the index into the output directory."""
    settings = _settings(overrides={
        "content_dir": content, "output_dir": out, "include_drafts": drafts, "clean": clean,
        "parser_config": parser, "jobs": jobs, "log_level": log_level,
    })
    try:
        result = run_build(settings)
    except BuildError as e:
        _fail(str(e))

    for path in result.written:
        typer.echo(f"  {path}")
    summary = f"Built {result.pages} post(s) into {settings.output_dir}/"
    if result.drafts_excluded:
        summary += f" ({result.drafts_excluded} draft(s) skipped)"
    typer.echo(summary)


def list_cmd(
    content: Annotated[Optional[str], typer.Argument(help="Directory of Markdown posts")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Include draft posts")] = None,
    ):
    """List posts in index order: date, slug, title."""
    settings = _settings(overrides={"content_dir": content, "include_drafts": drafts})
    try:
        posts = collect_posts(settings)
    except BuildError as e:
        _fail(str(e))
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for post in posts:
        marker = "  [draft]" if post.draft else ""
        typer.echo(f"{post.date.date().isoformat()}  {post.slug}  {post.title}{marker}")


def new_cmd(
    title: Annotated[str, typer.Argument(help="Title of the new post")],
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Directory of Markdown posts")] = None,
    publish: Annotated[bool, typer.Option("--publish", help="Create as published instead of draft")] = False,
    ):
    """Create a new post with front-matter (a draft unless --publish)."""
    settings = _settings(overrides={"content_dir": content})
    try:
        path = new_post(Path(settings.content_dir), title, date.today(), draft=not publish)
    except BuildError as e:
        _fail(str(e))
    typer.echo(f"Created {path}")
