"""Strata exception hierarchy.

Shared across the resolver, registries, renderer, and cascade so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class StrataError(Exception):
    """Base for all strata-specific errors."""


class ConfigurationError(StrataError):
    """Raised when renderer configuration or template layout is invalid.

    Typically caught during ``Renderer.freeze()`` at startup.
    """


class ReadinessError(StrataError, RuntimeError):
    """Raised when a render entry point is used before ``freeze()``.

    A programming error, not a render outcome: the error cascade never
    catches it.
    """


@dataclass(frozen=True, slots=True)
class RenderError(StrataError):
    """A render failure that maps to an HTTP status code.

    Raised by the path resolver, template registries, and page renderer.
    ``Renderer.render()`` catches these and turns them into error pages.
    """

    status: int = 500
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(RenderError):  # noqa: N818 — conventional name in web frameworks
    """404 — the path or one of its templates is not registered."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class ExecutionError(RenderError):
    """500 — a registered template failed while executing.

    The engine exception is kept as ``__cause__``.
    """

    def __init__(self, detail: str = "Template execution failed") -> None:
        super().__init__(status=500, detail=detail)


class ErrorPageFailed(RenderError):
    """500 — the internal-error page itself could not be rendered.

    Wraps the failure of the 500 page so callers see an internal error even
    when that page was simply missing.  The failure is kept as ``__cause__``.
    """

    def __init__(
        self,
        detail: str = "Error page failed",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(status=500, detail=detail)
        if cause is not None:
            object.__setattr__(self, "__cause__", cause)
