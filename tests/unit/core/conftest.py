"""Shared fixtures for core unit tests"""

from datetime import datetime

import pytest

from mdsite.core.models import Post, SiteMeta
from mdsite.core.render import Renderer
from mdsite.core.templates import TemplateLoader


SAMPLE_BODY = """\
# Building an audio player

Some commentary with <kbd>Ctrl</kbd> inline HTML.

```jsx
const player = useRef(null);
if (a < b && ready) { play("track"); }
```

<figure class="waveform"><img src="wave.png"></figure>
"""


@pytest.fixture(name="make_post")
def make_post_fixture():
    """Factory for Post records with sensible defaults."""
    def _make(slug="post", title="Post", date=datetime(2024, 1, 1), draft=False, body="Body.\n", **kwargs):
        return Post(slug=slug, title=title, date=date, draft=draft, body=body,
                    path=kwargs.pop("path", f"{slug}.md"), **kwargs)
    return _make


@pytest.fixture(name="renderer")
def renderer_fixture():
    return Renderer("gfm-like")


@pytest.fixture(name="templates")
def templates_fixture():
    return TemplateLoader()


@pytest.fixture(name="site_meta")
def site_meta_fixture():
    return SiteMeta(title="Test Blog")


@pytest.fixture(name="sample_body")
def sample_body_fixture():
    return SAMPLE_BODY
