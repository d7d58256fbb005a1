"""Strata — hierarchical HTML page rendering with error-page fallback.

A request path resolves to a page template nested inside the layouts of
every directory above it.  Failures never leave the caller empty-handed:
they turn into the matching error page, then the 500 page, then static
bytes.

Basic usage::

    from strata import Renderer, RenderConfig

    renderer = Renderer(RenderConfig(pages_dir="pages"))
    renderer.freeze()

    result = renderer.render("docs/guide", {"title": "Guide"})
    send(result.status, result.body)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "ExecutionError",
    "NotFound",
    "ReadinessError",
    "RenderConfig",
    "RenderError",
    "RenderResult",
    "Renderer",
    "StrataError",
    "error_code",
    "error_path",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import strata`` fast (no kida import) while providing a clean
    top-level API.
    """
    if name == "Renderer":
        from strata.renderer import Renderer

        return Renderer

    if name == "RenderConfig":
        from strata.config import RenderConfig

        return RenderConfig

    if name == "RenderResult":
        from strata.types import RenderResult

        return RenderResult

    if name in ("error_code", "error_path"):
        from strata import classify as _classify

        return getattr(_classify, name)

    if name in (
        "ConfigurationError",
        "ExecutionError",
        "NotFound",
        "ReadinessError",
        "RenderError",
        "StrataError",
    ):
        from strata import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
