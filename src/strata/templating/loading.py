"""Template discovery for pages and standalone directories.

Walks a template directory tree and registers every file whose suffix is
one of ``RenderConfig.extensions``:

- ``docs/guide.html`` registers page ``docs/guide``
- ``docs/_layout.html`` registers ``docs``, the layout wrapping
  everything below ``docs/``; the root ``_layout.html`` registers ``""``
- other ``_``-prefixed files are partials, loadable only via include

Standalone directories are flat: each file registers its relative path,
``$``-prefixed names included, and no layout convention applies.
"""

from __future__ import annotations

from pathlib import Path

from strata.config import RenderConfig
from strata.errors import ConfigurationError
from strata.templating.registry import TemplateSource


def load_directory(
    directory: str | Path,
    config: RenderConfig,
    *,
    standalone: bool = False,
) -> list[TemplateSource]:
    """Walk a template directory and collect its templates.

    Args:
        directory: Root of the template tree.
        config: Supplies the extensions, layout stem, and reserved marker.
        standalone: Load a flat standalone registry instead of pages.

    Returns:
        Templates in deterministic (sorted) order.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise ConfigurationError(f"Template directory not found: {root}")

    templates: list[TemplateSource] = []
    _walk_directory(root, root, config=config, standalone=standalone, templates=templates)
    return templates


def _walk_directory(
    directory: Path,
    root: Path,
    *,
    config: RenderConfig,
    standalone: bool,
    templates: list[TemplateSource],
) -> None:
    for item in sorted(directory.iterdir()):
        if item.name.startswith("."):
            continue
        if item.is_dir():
            _walk_directory(
                item,
                root,
                config=config,
                standalone=standalone,
                templates=templates,
            )
            continue
        if not item.is_file() or item.suffix not in config.extensions:
            continue

        rel = item.relative_to(root)
        templates.append(
            TemplateSource(
                identifier=_identifier_for(rel, config, standalone=standalone),
                key=rel.as_posix(),
                source=item.read_text(encoding="utf-8"),
            )
        )


def _identifier_for(rel: Path, config: RenderConfig, *, standalone: bool) -> str | None:
    """Map a relative template file to its lookup identifier."""
    parts = [p.lower() for p in rel.with_suffix("").parts]
    if standalone:
        return "/".join(parts)

    stem = rel.stem
    if stem == config.layout_name:
        return "/".join(parts[:-1])
    if stem.startswith("_"):
        return None
    if config.standalone_prefix and stem.startswith(config.standalone_prefix):
        msg = (
            f"Page template {rel.as_posix()!r} uses the standalone marker "
            f"{config.standalone_prefix!r}; move it to the standalone directory"
        )
        raise ConfigurationError(msg)
    return "/".join(parts)
