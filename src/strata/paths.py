"""Page path validation, normalization, and template chain expansion.

A page path such as ``"Docs/Guide/"`` normalizes to ``"docs/guide"`` and
expands into the chain of templates that wrap it, leaf first::

    ("docs/guide", "docs", "")

The empty identifier is the root layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from strata.errors import NotFound

if TYPE_CHECKING:
    from strata.templating.registry import TemplateSet

ROOT_LAYOUT = ""


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """A validated page path and the templates that compose it.

    Attributes:
        path: Normalized page path.
        chain: Template identifiers from the page itself (first) to the
            root layout (last).
    """

    path: str
    chain: tuple[str, ...]


def normalize_path(
    path: str,
    *,
    index_page: str | None = "index",
    reserved: str = "$",
    allow_reserved: bool = False,
) -> str:
    """Normalize separators and casing of a requested path.

    Backslashes become ``/``, empty and ``.`` segments are dropped, ``..``
    pops a segment, and letters are lowercased.  A path that reduces to
    the root maps to *index_page*, or is rejected when that is ``None``.

    Raises:
        NotFound: The path is empty, climbs above the root, or starts
            with the *reserved* marker without *allow_reserved*.
    """
    if not path or not path.strip():
        raise NotFound("Empty path")

    parts: list[str] = []
    for segment in path.strip().replace("\\", "/").lower().split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not parts:
                raise NotFound(f"Path escapes the template root: {path!r}")
            parts.pop()
            continue
        parts.append(segment)

    if not parts:
        if index_page is None:
            raise NotFound(f"No template at the root path: {path!r}")
        return index_page.strip("/").lower()

    normalized = "/".join(parts)
    if reserved and not allow_reserved and normalized.startswith(reserved):
        raise NotFound(f"Reserved path: {path!r}")
    return normalized


def template_chain(path: str) -> tuple[str, ...]:
    """Expand a normalized page path into its template chain, leaf first.

    ``"a/b/c"`` becomes ``("a/b/c", "a/b", "a", "")``.
    """
    parts = path.split("/") if path else []
    chain = ["/".join(parts[:depth]) for depth in range(len(parts), 0, -1)]
    chain.append(ROOT_LAYOUT)
    return tuple(chain)


def resolve(
    path: str,
    registry: TemplateSet,
    *,
    index_page: str = "index",
    reserved: str = "$",
) -> ResolvedPath:
    """Validate *path* against the page registry and build its chain.

    Raises:
        NotFound: The path is invalid, the page is not registered, or the
            registry has no root layout.
    """
    normalized = normalize_path(path, index_page=index_page, reserved=reserved)
    if not registry.lookup(normalized):
        raise NotFound(f"No page registered at {normalized!r}")
    if not registry.lookup(ROOT_LAYOUT):
        raise NotFound("No root layout registered")
    return ResolvedPath(path=normalized, chain=template_chain(normalized))
