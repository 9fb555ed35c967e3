"""Markdown body rendering via markdown-it, with structural checks for unterminated blocks"""

import logging
import re

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdsite.core.errors import RenderError
from mdsite.core.models import Post


logger = logging.getLogger(__name__)

_CONTAINER_PREFIX_RE = re.compile(r'^(?:[ \t]*>)*[ \t]*')


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset; raw HTML on, linkify off."""
    return MarkdownIt(preset, options_update={"html": True, "linkify": False})


def _closes_fence(line: str, markup: str) -> bool:
    """True if line (container prefixes stripped) is a closing marker for a fence opened with markup."""
    stripped = _CONTAINER_PREFIX_RE.sub('', line, count=1).rstrip()
    if not stripped or stripped[0] != markup[0]:
        return False
    run = len(stripped) - len(stripped.lstrip(markup[0]))
    return run >= len(markup) and run == len(stripped)


def find_unterminated(tokens: list[Token], source_lines: list[str]) -> tuple[int, str] | None:
    """Return (0-based body line, description) of the first unterminated block, else None.

    markdown-it closes an open fence or HTML comment implicitly at the end of
    its container; both cases are detected from the token's source span.
    """
    for tok in tokens:
        if tok.map is None:
            continue
        start, end = tok.map
        if tok.type == 'fence':
            if end - start < 2 or not _closes_fence(source_lines[end - 1], tok.markup):
                return start, f"unterminated code fence (opened with {tok.markup!r})"
        elif tok.type == 'html_block':
            if tok.content.lstrip().startswith('<!--') and '-->' not in tok.content:
                return start, "unterminated HTML comment"
    return None


class Renderer:
    """Converts a Post body to HTML, leaving code and raw HTML spans untouched."""

    def __init__(self, preset: str = 'gfm-like'):
        self.preset = preset
        self._md = _make_parser(preset)

    def render(self, post: Post) -> str:
        """Render post.body to HTML or raise RenderError for unterminated blocks."""
        env: dict = {}
        tokens = self._md.parse(post.body, env)
        problem = find_unterminated(tokens, post.body.splitlines(keepends=True))
        if problem is not None:
            line, message = problem
            raise RenderError(post.path, message, line=post.body_line + line)
        logger.debug("rendered %s (%d tokens)", post.slug, len(tokens))
        return self._md.renderer.render(tokens, self._md.options, env)
