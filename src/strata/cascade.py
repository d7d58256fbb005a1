"""Error-page fallback cascade.

Turns a render failure into the best error page that can still be
rendered.  Each non-500 status gets one attempt at its own page; a status
that comes back a second time is promoted to 500; a failing 500 page ends
the cascade with static bytes.  The loop is capped, so the cascade always
terminates no matter which failures the error pages produce.
"""

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from strata.classify import INTERNAL_ERROR, error_code, error_path
from strata.config import DEFAULT_FAILURE_MESSAGE
from strata.errors import ErrorPageFailed, RenderError
from strata.types import RenderResult

logger = logging.getLogger("strata.cascade")

# Original status page, then 404 (the only other status the page renderer
# raises), then 500.
MAX_ATTEMPTS = 3

PageRenderer = Callable[[str, dict[str, Any] | None], bytes]


class CascadeState(Enum):
    """What the cascade does with the status of the current failure."""

    PENDING = "pending"  # First time this status is seen: try its page
    ESCALATED = "escalated"  # Status repeated: try the 500 page instead
    TERMINATED = "terminated"  # 500 repeated: serve static bytes


def next_state(code: int, seen: set[int] | frozenset[int]) -> CascadeState:
    """Decide the transition for a failure with status *code*."""
    if code not in seen:
        return CascadeState.PENDING
    if code == INTERNAL_ERROR or INTERNAL_ERROR in seen:
        return CascadeState.TERMINATED
    return CascadeState.ESCALATED


def render_error(
    error: BaseException | None,
    data: dict[str, Any] | None,
    *,
    render_page: PageRenderer,
    error_paths: Mapping[int, str] | None = None,
    failure_bytes: bytes = DEFAULT_FAILURE_MESSAGE,
) -> RenderResult:
    """Render the error page matching *error*, falling back as pages fail.

    Args:
        error: The failure to report.  ``None`` is treated as a 500.
        data: Data bag forwarded to every error page render.
        render_page: The hierarchical page renderer.
        error_paths: Status to page path overrides.
        failure_bytes: Body served when no error page can be rendered.

    Returns:
        The rendered body and the failure that led to it.  When an error
        page renders, ``error`` is the failure that page reports; when the
        cascade bottoms out, it is the final 500-class failure.
    """
    seen: set[int] = set()

    for _ in range(MAX_ATTEMPTS):
        code = error_code(error)
        state = next_state(code, seen)

        if state is CascadeState.TERMINATED:
            break
        if state is CascadeState.ESCALATED:
            logger.debug("Status %d repeated in error cascade, escalating to 500", code)
            code = INTERNAL_ERROR

        seen.add(code)
        path = error_path(code, error_paths)

        try:
            body = render_page(path, data)
        except RenderError as exc:
            logger.debug("Error page %r for status %d failed: %s", path, code, exc)
            if code == INTERNAL_ERROR and error_code(exc) != INTERNAL_ERROR:
                error = ErrorPageFailed(f"Error page {path!r} failed: {exc}", cause=exc)
            else:
                error = exc
            continue

        return RenderResult(body, error)

    if error_code(error) != INTERNAL_ERROR:
        error = ErrorPageFailed(f"No error page could be rendered: {error}", cause=error)
    logger.error("Internal rendering error: %s", error)
    return RenderResult(failure_bytes, error)
