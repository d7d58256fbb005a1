"""Tests for strata.config — RenderConfig frozen dataclass."""

from pathlib import Path

import pytest

from strata.config import DEFAULT_FAILURE_MESSAGE, RenderConfig
from strata.errors import ConfigurationError


class TestRenderConfig:
    def test_defaults(self) -> None:
        cfg = RenderConfig()

        assert cfg.pages_dir is None
        assert cfg.standalone_dir is None
        assert cfg.extensions == (".html",)
        assert cfg.layout_name == "_layout"
        assert cfg.index_page == "index"
        assert cfg.standalone_prefix == "$"
        assert cfg.error_paths == {}
        assert cfg.ultimate_failure == b""
        assert cfg.encoding == "utf-8"
        assert cfg.autoescape is True

    def test_override(self) -> None:
        cfg = RenderConfig(pages_dir=Path("views"), error_paths={404: "missing"})

        assert cfg.pages_dir == Path("views")
        assert cfg.error_paths == {404: "missing"}

    def test_frozen(self) -> None:
        cfg = RenderConfig()

        with pytest.raises(AttributeError):
            cfg.encoding = "latin-1"  # type: ignore[misc]

    def test_failure_bytes_default(self) -> None:
        assert RenderConfig().failure_bytes == DEFAULT_FAILURE_MESSAGE

    def test_failure_bytes_configured(self) -> None:
        assert RenderConfig(ultimate_failure=b"down").failure_bytes == b"down"


class TestValidate:
    def test_defaults_are_valid(self) -> None:
        RenderConfig().validate()

    def test_empty_extensions(self) -> None:
        with pytest.raises(ConfigurationError, match="extension"):
            RenderConfig(extensions=()).validate()

    def test_extension_without_dot(self) -> None:
        with pytest.raises(ConfigurationError, match="must start with"):
            RenderConfig(extensions=("html",)).validate()

    def test_bad_prefix(self) -> None:
        with pytest.raises(ConfigurationError, match="prefix"):
            RenderConfig(standalone_prefix="/").validate()

    def test_bad_status_key(self) -> None:
        with pytest.raises(ConfigurationError, match="status code"):
            RenderConfig(error_paths={42: "x"}).validate()

    def test_empty_error_path(self) -> None:
        with pytest.raises(ConfigurationError, match="must not be empty"):
            RenderConfig(error_paths={404: "/"}).validate()

    def test_unknown_encoding(self) -> None:
        with pytest.raises(ConfigurationError, match="encoding"):
            RenderConfig(encoding="no-such-codec").validate()
