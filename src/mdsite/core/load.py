"""Content loading: file discovery, front-matter parsing, and Post validation"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mdsite.core.errors import BuildError, ParseError
from mdsite.core.models import Post
from mdsite.core.serialize import dump_json
from mdsite.core.utils.slug import slugify


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = {'.md', '.markdown'}
RESERVED_KEYS = ('title', 'date', 'draft')


def split_frontmatter(text: str, path: Path | str) -> tuple[dict[str, Any], str, int]:
    """Return (frontmatter, body, body_line) or raise ParseError naming path."""
    text = text.removeprefix('\ufeff')
    if not re.match(r'---[ \t]*(\n|\Z)', text):
        raise ParseError(path, "missing front-matter block (file must start with '---')")
    m = FRONTMATTER_RE.match(text)
    if m is None:
        raise ParseError(path, "unterminated front-matter block (no closing '---')")
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ParseError(path, f"invalid YAML front-matter: {e}") from e
    if not isinstance(fm, dict):
        raise ParseError(path, f"front-matter must be a mapping, got {type(fm).__name__}")
    bad_keys = [k for k in fm if not isinstance(k, str)]
    if bad_keys:
        raise ParseError(path, f"front-matter keys must be text, got {bad_keys[0]!r}")
    return fm, text[m.end():], text.count('\n', 0, m.end()) + 1


def _parse_date(value: Any, path: Path | str) -> datetime:
    """Coerce a YAML date/datetime or ISO-8601 string to a naive datetime (UTC if it was aware)."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith(('Z', 'z')):
            raw = raw[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise ParseError(path, f"malformed 'date': {value!r} is not an ISO-8601 timestamp") from None
    else:
        raise ParseError(path, f"malformed 'date': expected a timestamp, got {type(value).__name__}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _validate(fm: dict[str, Any], path: Path | str) -> tuple[str, datetime, bool]:
    """Check the recognized keys and return (title, date, draft)."""
    if 'title' not in fm or fm['title'] is None:
        raise ParseError(path, "missing required field 'title'")
    title = fm['title']
    if not isinstance(title, str) or not title.strip():
        raise ParseError(path, "malformed 'title': expected non-empty text")

    if 'date' not in fm or fm['date'] is None:
        raise ParseError(path, "missing required field 'date'")
    when = _parse_date(fm['date'], path)

    draft = fm.get('draft', False)
    if not isinstance(draft, bool):
        raise ParseError(path, f"malformed 'draft': expected true or false, got {draft!r}")
    return title.strip(), when, draft


def discover_files(root: Path) -> list[Path]:
    """Return sorted Markdown files under root (or [root] for a single file), skipping dot-paths."""
    if root.is_file():
        return [root] if root.suffix.lower() in MD_EXTENSIONS else []
    return sorted(
        p for p in root.rglob('*')
        if p.is_file()
        and p.suffix.lower() in MD_EXTENSIONS
        and not any(part.startswith('.') for part in p.relative_to(root).parts)
    )


def load_post(path: Path, root: Path | None = None) -> Post:
    """Read and validate a single post. The slug always comes from the filename."""
    rel = path.relative_to(root) if root is not None else Path(path.name)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise ParseError(path, f"cannot read as UTF-8: {e}") from e
    except OSError as e:
        raise ParseError(path, f"cannot read file: {e.strerror or e}") from e
    fm, body, body_line = split_frontmatter(text, path)
    title, when, draft = _validate(fm, path)

    slug = slugify(path.stem)
    if not slug:
        raise ParseError(path, f"cannot derive a slug from filename {path.name!r}")

    extra = {k: v for k, v in fm.items() if k not in RESERVED_KEYS}
    try:
        dump_json(extra)
    except (TypeError, ValueError) as e:
        raise ParseError(path, f"front-matter value cannot be written as JSON: {e}") from e

    try:
        post = Post(
            slug=slug,
            title=title,
            date=when,
            draft=draft,
            body=body,
            path=rel.as_posix(),
            body_line=body_line,
            frontmatter=extra,
        )
    except ValidationError as e:
        raise ParseError(path, f"invalid front-matter: {e}") from e
    logger.debug("loaded %s as %s", path, slug)
    return post


def load_posts(root: Path, jobs: int = 1) -> list[Post]:
    """Load every post under root. Reads run in a thread pool when jobs > 1.

    Errors surface in sorted file order regardless of jobs, so the reported
    failure is deterministic.
    """
    if not root.exists():
        raise BuildError(f"{root}: content directory not found")
    base = root if root.is_dir() else root.parent
    files = discover_files(root)
    if jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            posts = list(pool.map(lambda p: load_post(p, base), files))
    else:
        posts = [load_post(p, base) for p in files]
    logger.info("loaded %d post(s) from %s", len(posts), root)
    return posts
