"""Error classification — failures to status codes and error page paths.

Pure functions. The cascade uses them to choose the next error page and
callers use them to set the outward HTTP status from ``RenderResult.error``.
"""

from collections.abc import Mapping

from kida.environment.exceptions import TemplateNotFoundError

from strata.errors import RenderError

INTERNAL_ERROR = 500


def error_code(exc: BaseException | None) -> int:
    """Map a failure to an HTTP status code.

    ``RenderError`` carries its own status, a kida
    ``TemplateNotFoundError`` is a 404, and anything else is a 500.
    """
    if isinstance(exc, RenderError):
        return exc.status
    if isinstance(exc, TemplateNotFoundError):
        return 404
    return INTERNAL_ERROR


def error_path(
    exc: BaseException | int | None,
    error_paths: Mapping[int, str] | None = None,
) -> str:
    """Return the page path of the error page for a failure or status code.

    An override registered in *error_paths* wins; otherwise the code's
    decimal string is used, so a 404 renders the page at ``"404"``.
    """
    code = exc if isinstance(exc, int) else error_code(exc)
    if error_paths:
        override = error_paths.get(code)
        if override:
            return override
    return str(code)
