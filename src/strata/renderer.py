"""Hierarchical page renderer.

Mutable during setup (templates, filters, globals).  Frozen by
``freeze()``, after which every render entry point is available and the
renderer is safe to share across threads.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida.template import Markup

from strata import cascade
from strata.classify import error_code, error_path
from strata.config import RenderConfig
from strata.errors import ReadinessError, RenderError
from strata.paths import ROOT_LAYOUT, ResolvedPath, normalize_path, resolve
from strata.templating.loading import load_directory
from strata.templating.registry import TemplateSet, TemplateSource
from strata.types import RenderResult

logger = logging.getLogger("strata.render")


class Renderer:
    """Renders pages nested in their layouts, with error-page fallback.

    Setup::

        renderer = Renderer(RenderConfig(pages_dir="pages"))
        renderer.add_standalone("$email", "<p>Hi {{ name }}</p>")
        renderer.freeze()

    Request time::

        body, err = renderer.render(request.path, {"user": user})
        status = renderer.error_code(err) if err else 200

    Thread safety:
        Setup is single-threaded.  ``freeze()`` uses a Lock + double-check
        so exactly one thread builds the registries; afterwards all state
        is read-only and render calls share nothing mutable.
    """

    __slots__ = (
        "_filters",
        "_freeze_lock",
        "_frozen",
        "_globals",
        "_pages",
        "_pending_pages",
        "_pending_standalone",
        "_standalone",
        "config",
    )

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config: RenderConfig = config or RenderConfig()
        self._pending_pages: list[TemplateSource] = []
        self._pending_standalone: list[TemplateSource] = []
        self._filters: dict[str, Callable[..., Any]] = {}
        self._globals: dict[str, Any] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during freeze()
        self._pages: TemplateSet | None = None
        self._standalone: TemplateSet | None = None

    # -- Setup --

    def add_page(self, path: str, source: str) -> None:
        """Register a page or layout template.

        ``""`` registers the root layout; any other path is normalized
        the same way request paths are.
        """
        self._check_not_frozen()
        if path.strip("/"):
            identifier = normalize_path(path, reserved=self.config.standalone_prefix)
        else:
            identifier = ROOT_LAYOUT
        stem = identifier or self.config.layout_name
        self._pending_pages.append(
            TemplateSource(identifier, stem + self.config.extensions[0], source)
        )

    def add_standalone(self, path: str, source: str) -> None:
        """Register a standalone template; ``$``-prefixed names are allowed."""
        self._check_not_frozen()
        identifier = normalize_path(
            path,
            index_page=None,
            reserved=self.config.standalone_prefix,
            allow_reserved=True,
        )
        self._pending_standalone.append(
            TemplateSource(identifier, identifier + self.config.extensions[0], source)
        )

    def load_pages(self, directory: str | Path) -> None:
        """Register every page, layout, and partial under *directory*."""
        self._check_not_frozen()
        self._pending_pages.extend(load_directory(directory, self.config))

    def load_standalone(self, directory: str | Path) -> None:
        """Register every template under *directory* as a standalone."""
        self._check_not_frozen()
        self._pending_standalone.extend(load_directory(directory, self.config, standalone=True))

    def template_filter(self, name: str | None = None) -> Callable[..., Any]:
        """Register a kida filter for both registries.

        Usage::

            @renderer.template_filter()
            def shout(value: str) -> str:
                return value.upper()
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            self._filters[name or func.__name__] = func
            return func

        return decorator

    def template_global(self, name: str, value: Any) -> None:
        """Register a value visible to every template."""
        self._check_not_frozen()
        self._globals[name] = value

    def freeze(self) -> None:
        """Build the template registries.  Idempotent and thread-safe."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    @property
    def ready(self) -> bool:
        return self._frozen

    # -- Rendering --

    def render(self, path: str, data: dict[str, Any] | None = None) -> RenderResult:
        """Render the page at *path*, falling back to error pages.

        Never raises a render failure: the result always carries a body.
        Set the response status from ``result.status`` (or
        ``error_code(result.error)``), not from whether an error is set.
        """
        self._assert_ready()
        try:
            body = self.render_page(path, data)
        except RenderError as exc:
            logger.debug("Render of %r failed: %s", path, exc)
            return self.render_error(exc, data)
        return RenderResult(body, None)

    def render_page(self, path: str, data: dict[str, Any] | None = None) -> bytes:
        """Render a page and, from the inside out, every layout around it.

        Each layout sees the caller's data plus ``content``: the trimmed
        output of the template it encloses, marked safe.  The caller's
        dict is never modified.

        Raises:
            NotFound: The path is invalid or a template in its chain is
                missing.
            ExecutionError: A template in the chain failed to render.
        """
        pages, _ = self._assert_ready()
        data = data if data is not None else {}

        resolved = self.resolve(path)
        context = data
        content = Markup("")
        for identifier in resolved.chain:
            html = pages.execute(identifier, context)
            content = Markup(html.strip())
            context = {**data, "content": content}

        return self._encode(content)

    def render_standalone(self, path: str, data: dict[str, Any] | None = None) -> bytes:
        """Render exactly one template from the standalone registry.

        Raises:
            NotFound: No standalone template is registered at *path*; the
                page registry is never consulted.
            ExecutionError: The template failed to render.
        """
        _, standalone = self._assert_ready()
        identifier = normalize_path(
            path,
            index_page=None,
            reserved=self.config.standalone_prefix,
            allow_reserved=True,
        )
        html = standalone.execute(identifier, data if data is not None else {})
        return self._encode(html)

    def render_error(
        self,
        error: BaseException | None,
        data: dict[str, Any] | None = None,
    ) -> RenderResult:
        """Render the error page for *error*, degrading to static bytes.

        See :func:`strata.cascade.render_error` for the fallback rules.
        """
        self._assert_ready()
        return cascade.render_error(
            error,
            data,
            render_page=self.render_page,
            error_paths=self.config.error_paths,
            failure_bytes=self.config.failure_bytes,
        )

    def resolve(self, path: str) -> ResolvedPath:
        """Validate *path* against the page registry and expand its chain."""
        pages, _ = self._assert_ready()
        return resolve(
            path,
            pages,
            index_page=self.config.index_page,
            reserved=self.config.standalone_prefix,
        )

    def error_code(self, error: BaseException | None) -> int:
        """HTTP status for *error*."""
        return error_code(error)

    def error_path(self, error: BaseException | int | None) -> str:
        """Page path of the error page for *error*, honouring overrides."""
        return error_path(error, self.config.error_paths)

    # -- Internal --

    def _freeze(self) -> None:
        """Compile the registries.

        MUST only be called while holding _freeze_lock.
        """
        config = self.config
        config.validate()

        pages = list(self._pending_pages)
        if config.pages_dir is not None:
            pages = load_directory(config.pages_dir, config) + pages
        standalone = list(self._pending_standalone)
        if config.standalone_dir is not None:
            standalone = load_directory(config.standalone_dir, config, standalone=True) + standalone

        self._pages = TemplateSet(
            "pages", pages, config=config, filters=self._filters, globals_=self._globals
        )
        self._standalone = TemplateSet(
            "standalone", standalone, config=config, filters=self._filters, globals_=self._globals
        )
        if not self._pages.lookup(ROOT_LAYOUT):
            logger.warning("No root layout registered; every page render will 404")

        logger.debug(
            "Renderer ready: %d pages, %d standalone templates",
            len(self._pages),
            len(self._standalone),
        )
        self._frozen = True

    def _assert_ready(self) -> tuple[TemplateSet, TemplateSet]:
        """Return the page and standalone registries, or raise if not frozen."""
        if not self._frozen or self._pages is None or self._standalone is None:
            msg = "Renderer used before freeze(). Register templates, then call renderer.freeze()."
            raise ReadinessError(msg)
        return self._pages, self._standalone

    def _encode(self, html: str) -> bytes:
        # Characters outside the output encoding become HTML character references.
        return str(html).encode(self.config.encoding, errors="xmlcharrefreplace")

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the renderer after freeze(). "
                "Register templates, filters, and globals first."
            )
            raise RuntimeError(msg)
