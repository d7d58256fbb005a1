"""Tests for strata.cli — argument parsing, render, and chain commands."""

from pathlib import Path

import pytest

from strata.cli import main
from strata.cli._render import parse_error_paths
from strata.errors import ConfigurationError


@pytest.fixture
def pages_dir(tmp_path: Path) -> Path:
    pages = tmp_path / "pages"
    (pages / "docs").mkdir(parents=True)
    (pages / "_layout.html").write_text("<body>{{ content }}</body>")
    (pages / "index.html").write_text("<h1>Home</h1>")
    (pages / "docs" / "_layout.html").write_text("<section>{{ content }}</section>")
    (pages / "docs" / "guide.html").write_text("<p>Guide for {{ user }}</p>")
    (pages / "404.html").write_text("<h1>Missing</h1>")
    return pages


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_render_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", "--help"])
        assert exc_info.value.code == 0

    def test_chain_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["chain", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_render_missing_path(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", "pages"])
        assert exc_info.value.code == 2

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "strata" in capsys.readouterr().out


class TestRenderCommand:
    def test_renders_nested_page(
        self, pages_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["render", str(pages_dir), "docs/guide", "--data", '{"user": "Ada"}'])
        captured = capsys.readouterr()
        assert "<body><section><p>Guide for Ada</p></section></body>" in captured.out
        assert "status: 200" in captured.err

    def test_missing_page_exits_one_with_404_body(
        self, pages_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(pages_dir), "nope"])
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "<h1>Missing</h1>" in captured.out
        assert "status: 404" in captured.err

    def test_ultimate_failure_flag(
        self, pages_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit):
            main(
                [
                    "render",
                    str(pages_dir),
                    "nope",
                    "--error-path",
                    "404=gone",
                    "--ultimate-failure",
                    "all broken",
                ]
            )
        assert "all broken" in capsys.readouterr().out

    def test_standalone(
        self, pages_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        standalone = tmp_path / "standalone"
        standalone.mkdir()
        (standalone / "$email.html").write_text("Hi {{ name }}")
        main(
            [
                "render",
                str(pages_dir),
                "$email",
                "--standalone",
                "--standalone-dir",
                str(standalone),
                "--data",
                '{"name": "Ada"}',
            ]
        )
        assert "Hi Ada" in capsys.readouterr().out

    def test_standalone_missing(
        self, pages_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(pages_dir), "$email", "--standalone"])
        assert exc_info.value.code == 1
        assert "404" in capsys.readouterr().err

    def test_bad_data(self, pages_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", str(pages_dir), "index", "--data", "[1, 2]"])
        assert exc_info.value.code == 2
        assert "JSON object" in capsys.readouterr().err


class TestChainCommand:
    def test_prints_chain(self, pages_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["chain", str(pages_dir), "/Docs/Guide/"])
        out = capsys.readouterr().out
        assert "path: docs/guide" in out
        assert out.index("docs/guide\n") < out.index("  1  docs\n") < out.index("(root layout)")

    def test_unknown_page(self, pages_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["chain", str(pages_dir), "nope"])
        assert exc_info.value.code == 1
        assert "No page registered" in capsys.readouterr().err


class TestParseErrorPaths:
    def test_pairs(self) -> None:
        assert parse_error_paths(["404=errors/missing", "500=oops"]) == {
            404: "errors/missing",
            500: "oops",
        }

    @pytest.mark.parametrize("value", ["404", "abc=x", "404="])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_error_paths([value])
