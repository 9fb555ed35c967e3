"""Root test configuration: environment isolation and content-tree helpers"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Run each test from tmp_path with no MDSITE_* variables leaking in."""
    for name in list(os.environ):
        if name.startswith("MDSITE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


def post_source(title="A Post", date="2024-01-01", draft=None, body="Body text.\n", extra="") -> str:
    """Return the text of a post file with the given front-matter values."""
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    if date is not None:
        lines.append(f"date: {date}")
    if draft is not None:
        lines.append(f"draft: {'true' if draft else 'false'}")
    if extra:
        lines.append(extra.rstrip("\n"))
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture(name="write_post")
def write_post_fixture(content_dir):
    """Factory: write_post('name.md', title=..., date=..., draft=..., body=...) -> Path."""
    def _write(name: str, **kwargs):
        path = content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(post_source(**kwargs), encoding="utf-8")
        return path
    return _write
