"""Named template registries backed by a kida environment.

A TemplateSet is built once during ``Renderer.freeze()`` and is immutable
for the lifetime of the renderer.  Identifiers are the normalized page or
standalone paths; loader keys are the file names kida reports in errors.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from kida import DictLoader, Environment

from strata.config import RenderConfig
from strata.errors import ConfigurationError, ExecutionError, NotFound

logger = logging.getLogger("strata.templating")


@dataclass(frozen=True, slots=True)
class TemplateSource:
    """One registered template.

    Attributes:
        identifier: Lookup name (``""`` for the root layout), or ``None``
            for partials that are only reachable through includes.
        key: Loader name, usually the file path relative to its root.
        source: Template source text.
    """

    identifier: str | None
    key: str
    source: str


def create_environment(
    config: RenderConfig,
    sources: dict[str, str],
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment over in-memory template sources.

    Called once per registry during ``Renderer.freeze()``.
    """
    env = Environment(
        loader=DictLoader(sources),
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    if filters:
        env.update_filters(filters)

    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env


class TemplateSet:
    """An immutable, named collection of templates.

    Thread safety:
        Lookups read a frozen mapping; kida environments are safe to
        share across threads, so concurrent render calls need no locks.
    """

    __slots__ = ("_env", "_keys", "name")

    def __init__(
        self,
        name: str,
        templates: Iterable[TemplateSource],
        *,
        config: RenderConfig,
        filters: dict[str, Callable[..., Any]] | None = None,
        globals_: dict[str, Any] | None = None,
    ) -> None:
        self.name = name
        keys: dict[str, str] = {}
        sources: dict[str, str] = {}
        for tpl in templates:
            if tpl.key in sources:
                msg = f"Template key {tpl.key!r} registered twice in {name}"
                raise ConfigurationError(msg)
            sources[tpl.key] = tpl.source
            if tpl.identifier is None:
                continue
            if tpl.identifier in keys:
                msg = (
                    f"Duplicate template {tpl.identifier!r} in {name}: "
                    f"{keys[tpl.identifier]!r} and {tpl.key!r}"
                )
                raise ConfigurationError(msg)
            keys[tpl.identifier] = tpl.key
        self._keys = keys
        self._env = create_environment(config, sources, filters, globals_)

    @property
    def names(self) -> frozenset[str]:
        """All registered identifiers."""
        return frozenset(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._keys

    def lookup(self, identifier: str) -> bool:
        """Whether a template is registered under *identifier*."""
        return identifier in self._keys

    def execute(self, identifier: str, data: dict[str, Any]) -> str:
        """Render the template registered under *identifier*.

        Raises:
            NotFound: Nothing is registered under *identifier*.
            ExecutionError: The template failed to compile or render;
                the kida exception is chained as ``__cause__``.
        """
        key = self._keys.get(identifier)
        if key is None:
            raise NotFound(f"Template {identifier!r} not found in {self.name}")

        try:
            template = self._env.get_template(key)
            return template.render(data)
        except Exception as exc:
            logger.exception("Template %r (%s) failed in %s", identifier, key, self.name)
            raise ExecutionError(f"Template {key!r} failed: {exc}") from exc
