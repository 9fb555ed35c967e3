"""Integration tests for core/pipeline.py: load -> assemble -> write"""

import json

import pytest

from mdsite.config import load_config
from mdsite.core.errors import CollisionError, ParseError, RenderError
from mdsite.core.pipeline import collect_posts, run_build


@pytest.fixture(name="settings_for")
def settings_for_fixture(content_dir, tmp_path):
    def _settings(**overrides):
        return load_config(overrides={"content_dir": str(content_dir), "output_dir": str(tmp_path / "dist"), **overrides})
    return _settings


@pytest.fixture(name="blog")
def blog_fixture(write_post):
    write_post("audio-player.md", title="Building an Audio Player", date="2024-03-01",
               body="# Waveforms\n\n```js\nconst ctx = new AudioContext();\n```\n")
    write_post("state-machines.md", title="State Machines", date="2024-02-01")
    write_post("oauth.md", title="OAuth Flows", date="2024-01-01")
    write_post("supabase.md", title="Supabase Notes", date="2024-04-01", draft=True)


def _index(tmp_path):
    return json.loads((tmp_path / "dist" / "index.json").read_text())


def test_build_writes_pages_and_index(blog, settings_for, tmp_path):
    result = run_build(settings_for())
    dist = tmp_path / "dist"
    assert result.pages == 3
    assert result.drafts_excluded == 1
    assert (dist / "index.html").exists()
    assert (dist / "posts" / "audio-player.html").exists()
    assert "const ctx = new AudioContext();" in (dist / "posts" / "audio-player.html").read_text()


def test_build_orders_index_by_date(blog, settings_for, tmp_path):
    run_build(settings_for())
    assert [p["slug"] for p in _index(tmp_path)["posts"]] == ["audio-player", "state-machines", "oauth"]


def test_build_excludes_drafts_unless_requested(blog, settings_for, tmp_path):
    run_build(settings_for())
    assert "supabase" not in [p["slug"] for p in _index(tmp_path)["posts"]]
    assert not (tmp_path / "dist" / "posts" / "supabase.html").exists()

    run_build(settings_for(include_drafts=True, clean=True))
    assert _index(tmp_path)["posts"][0]["slug"] == "supabase"
    assert (tmp_path / "dist" / "posts" / "supabase.html").exists()


def test_build_is_idempotent(blog, settings_for, tmp_path):
    run_build(settings_for())
    first = {p: p.read_bytes() for p in (tmp_path / "dist").rglob("*") if p.is_file()}
    run_build(settings_for(clean=True))
    second = {p: p.read_bytes() for p in (tmp_path / "dist").rglob("*") if p.is_file()}
    assert first == second


def test_build_parallel_load_matches_serial(blog, settings_for, tmp_path):
    run_build(settings_for(output_dir=str(tmp_path / "serial")))
    run_build(settings_for(output_dir=str(tmp_path / "parallel"), jobs=4))
    serial = tmp_path / "serial"
    for f in serial.rglob("*"):
        if f.is_file():
            assert f.read_bytes() == (tmp_path / "parallel" / f.relative_to(serial)).read_bytes()


def test_collision_fails_with_zero_output(write_post, settings_for, tmp_path):
    write_post("Hello World.md", title="One")
    write_post("archive/hello-world.md", title="Two")
    with pytest.raises(CollisionError, match="hello-world"):
        run_build(settings_for())
    assert not (tmp_path / "dist").exists()


def test_parse_error_fails_with_zero_output(write_post, settings_for, tmp_path):
    write_post("good.md")
    write_post("bad.md", date=None)
    with pytest.raises(ParseError, match="bad.md"):
        run_build(settings_for())
    assert not (tmp_path / "dist").exists()


def test_render_error_fails_with_zero_output(write_post, settings_for, tmp_path):
    write_post("good.md")
    write_post("open-fence.md", body="Intro\n\n```sh\nnpm install\n")
    with pytest.raises(RenderError, match="open-fence.md:7"):
        run_build(settings_for())
    assert not (tmp_path / "dist").exists()


def test_failed_build_leaves_previous_output_untouched(blog, write_post, settings_for, tmp_path):
    run_build(settings_for())
    before = (tmp_path / "dist" / "index.json").read_bytes()
    write_post("broken.md", title=None)
    with pytest.raises(ParseError):
        run_build(settings_for(clean=True))
    assert (tmp_path / "dist" / "index.json").read_bytes() == before


def test_custom_templates(blog, settings_for, tmp_path):
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "index.html").write_text("{% for e in entries %}{{ e.slug }}\n{% endfor %}")
    run_build(settings_for(templates_dir=str(templates)))
    assert (tmp_path / "dist" / "index.html").read_text() == "audio-player\nstate-machines\noauth\n"


def test_collect_posts(blog, settings_for):
    assert [p.slug for p in collect_posts(settings_for())] == ["audio-player", "state-machines", "oauth"]
    assert collect_posts(settings_for(), include_drafts=True)[0].slug == "supabase"


def test_published_rebuild_drops_drafts_from_earlier_build(blog, settings_for, tmp_path):
    """A --drafts build followed by a published build leaves no draft page behind."""
    run_build(settings_for(include_drafts=True))
    assert (tmp_path / "dist" / "posts" / "supabase.html").exists()

    run_build(settings_for())
    assert not (tmp_path / "dist" / "posts" / "supabase.html").exists()
    assert not (tmp_path / "dist" / "posts" / "supabase.json").exists()
    assert sorted(p.name for p in (tmp_path / "dist" / "posts").iterdir()) == [
        "audio-player.html", "audio-player.json",
        "oauth.html", "oauth.json",
        "state-machines.html", "state-machines.json",
    ]


def test_unserializable_frontmatter_fails_with_zero_output(write_post, settings_for, tmp_path):
    write_post("a.md")
    write_post("b.md", extra="blob: !!binary aGVsbG8=")
    with pytest.raises(ParseError, match="b.md"):
        run_build(settings_for())
    assert not (tmp_path / "dist").exists()
