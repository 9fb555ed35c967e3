"""Output writing: HTML pages, index, and sidecar JSON"""

import logging
import shutil
from pathlib import Path

from mdsite.core.assemble import POSTS_DIR
from mdsite.core.errors import BuildError
from mdsite.core.models import Site


logger = logging.getLogger(__name__)

MANAGED_SUFFIXES = {".html", ".json"}


def _check_clean_target(output_dir: Path, content_dir: Path | None) -> None:
    """Refuse to remove a directory that is, or contains, the content directory."""
    if content_dir is None:
        return
    out, src = output_dir.resolve(), content_dir.resolve()
    if out == src or out in src.parents:
        raise BuildError(f"{output_dir}: refusing to clean, it contains the content directory {content_dir}")


def prune_stale(output_dir: Path, written: list[Path]) -> list[Path]:
    """Delete posts/*.html|json left by earlier builds that this build did not produce."""
    posts_dir = output_dir / POSTS_DIR
    if not posts_dir.is_dir():
        return []
    keep = set(written)
    removed = []
    for path in sorted(posts_dir.iterdir()):
        if path.is_file() and path.suffix in MANAGED_SUFFIXES and path not in keep:
            path.unlink()
            removed.append(path)
    if removed:
        logger.info("removed %d stale file(s) from %s", len(removed), posts_dir)
    return removed


def write_site(
    site: Site,
    output_dir: Path,
    clean: bool = False,
    content_dir: Path | None = None,
    ) -> list[Path]:
    """Write index.html/index.json and posts/<slug>.{html,json}. Returns written paths in order.

    Only pre-rendered strings are written here. Pages from earlier builds that
    are no longer produced (removed posts, drafts in a published build) are pruned.
    """
    if clean and output_dir.exists():
        _check_clean_target(output_dir, content_dir)
        logger.info("removing %s", output_dir)
        shutil.rmtree(output_dir)

    written: list[Path] = []

    def _write(rel: str, text: str) -> None:
        dest = output_dir / rel
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
        written.append(dest)

    for page in site.pages:
        _write(page.path, page.html)
        _write(str(Path(page.path).with_suffix(".json")), page.sidecar)
    _write("index.html", site.index_html)
    _write("index.json", site.index_json)

    prune_stale(output_dir, written)
    logger.info("wrote %d file(s) to %s", len(written), output_dir)
    return written
