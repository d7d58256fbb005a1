"""Shared fixtures: in-memory renderers built from template dicts."""

from collections.abc import Callable
from typing import Any

import pytest

from strata.config import RenderConfig
from strata.renderer import Renderer

SITE_PAGES: dict[str, str] = {
    "": "<html><body>{{ content }}</body></html>",
    "index": "<h1>Home</h1>",
    "a": "<div class=\"a\">{{ content }}</div>",
    "a/b": "<p>b for {{ name }}</p>",
    "404": "<h1>Not found</h1>",
    "500": "<h1>Server error</h1>",
}


@pytest.fixture
def make_renderer() -> Callable[..., Renderer]:
    """Build and freeze a Renderer from page and standalone dicts."""

    def _make(
        pages: dict[str, str] | None = None,
        standalone: dict[str, str] | None = None,
        **config: Any,
    ) -> Renderer:
        renderer = Renderer(RenderConfig(**config))
        for path, source in (SITE_PAGES if pages is None else pages).items():
            renderer.add_page(path, source)
        for path, source in (standalone or {}).items():
            renderer.add_standalone(path, source)
        renderer.freeze()
        return renderer

    return _make


@pytest.fixture
def site(make_renderer: Callable[..., Renderer]) -> Renderer:
    """A frozen renderer over SITE_PAGES."""
    return make_renderer()


@pytest.fixture
def site_pages() -> dict[str, str]:
    """A copy of the standard site's page sources."""
    return dict(SITE_PAGES)
