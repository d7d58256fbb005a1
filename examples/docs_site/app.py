"""Docs site — a tiny WSGI app serving a nested pages tree.

Demonstrates layout nesting (``pages/_layout.html`` wraps
``pages/docs/_layout.html`` wraps ``pages/docs/guide.html``), the 404
error page, and a ``$``-prefixed standalone template.

Run:
    python app.py
"""

from pathlib import Path

from strata import RenderConfig, Renderer

HERE = Path(__file__).parent

renderer = Renderer(
    RenderConfig(
        pages_dir=HERE / "pages",
        standalone_dir=HERE / "standalone",
    )
)
renderer.freeze()

_REASONS = {200: "OK", 404: "Not Found", 500: "Internal Server Error"}


def application(environ, start_response):
    """WSGI entry point: every GET path is a page path."""
    result = renderer.render(environ.get("PATH_INFO", "/"), {"title": "Strata docs"})
    status = result.status
    start_response(
        f"{status} {_REASONS.get(status, 'Error')}",
        [("Content-Type", "text/html; charset=utf-8")],
    )
    return [result.body]


if __name__ == "__main__":
    from wsgiref.simple_server import make_server

    with make_server("127.0.0.1", 8000, application) as server:
        print("Serving on http://127.0.0.1:8000")
        server.serve_forever()
