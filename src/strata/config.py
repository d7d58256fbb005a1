"""Renderer configuration.

RenderConfig is a frozen dataclass — immutable after creation, shared by
every render call without locking.
"""

import codecs
from dataclasses import dataclass, field
from pathlib import Path

from strata.errors import ConfigurationError

DEFAULT_FAILURE_MESSAGE = b"500 Internal Server Error"


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Renderer configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RenderConfig(
            pages_dir="pages",
            error_paths={404: "errors/missing"},
            ultimate_failure=b"<h1>Something broke</h1>",
        )
    """

    # Template sources
    pages_dir: str | Path | None = None
    standalone_dir: str | Path | None = None
    extensions: tuple[str, ...] = (".html",)
    layout_name: str = "_layout"  # Directory layout file stem

    # Paths
    index_page: str = "index"  # Page served for the root path "/"
    standalone_prefix: str = "$"  # Marker allowed only on standalone paths

    # Error pages
    error_paths: dict[int, str] = field(default_factory=dict)  # status -> page path override
    ultimate_failure: bytes = b""  # Served when even the 500 page fails

    # Output
    encoding: str = "utf-8"

    # kida environment
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    @property
    def failure_bytes(self) -> bytes:
        """Static last-resort body: ``ultimate_failure`` or the built-in message."""
        return self.ultimate_failure or DEFAULT_FAILURE_MESSAGE

    def validate(self) -> None:
        """Check field values, raising ConfigurationError on the first problem."""
        if not self.extensions:
            msg = "RenderConfig.extensions must name at least one file extension"
            raise ConfigurationError(msg)
        for ext in self.extensions:
            if not ext.startswith("."):
                msg = f"Template extension {ext!r} must start with '.'"
                raise ConfigurationError(msg)
        if len(self.standalone_prefix) > 1 or self.standalone_prefix in ("/", "\\", "."):
            msg = f"Invalid standalone prefix {self.standalone_prefix!r}"
            raise ConfigurationError(msg)
        if not self.index_page.strip("/"):
            msg = "RenderConfig.index_page must not be empty"
            raise ConfigurationError(msg)
        for code, path in self.error_paths.items():
            if not isinstance(code, int) or not 100 <= code <= 599:
                msg = f"Error path key {code!r} is not an HTTP status code"
                raise ConfigurationError(msg)
            if not path.strip("/"):
                msg = f"Error path for {code} must not be empty"
                raise ConfigurationError(msg)
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            msg = f"Unknown output encoding {self.encoding!r}"
            raise ConfigurationError(msg) from exc
