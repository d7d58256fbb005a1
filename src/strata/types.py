"""Result type returned by the never-failing render entry points."""

from collections.abc import Iterator
from dataclasses import dataclass

from strata.classify import error_code


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Rendered bytes plus the last failure met while producing them.

    ``error`` is informational: the body is always renderable.  Unpacks as
    a pair so handlers can write ``body, err = renderer.render(path)``::

        result = renderer.render("docs/guide", {"user": user})
        return Response(body=result.body, status=result.status)
    """

    body: bytes
    error: BaseException | None = None

    @property
    def status(self) -> int:
        """HTTP status for the response: 200, or the code of ``error``."""
        if self.error is None:
            return 200
        return error_code(self.error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[object]:
        yield self.body
        yield self.error
