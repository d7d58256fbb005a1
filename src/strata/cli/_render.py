"""``strata render`` and ``strata chain`` — shell access to the renderer.

Builds a Renderer from command-line flags, freezes it, and writes the
result.  ``render`` always writes a body (that is the renderer's
contract); the status goes to stderr and a non-200 status sets exit
code 1.
"""

import argparse
import json
import sys
from typing import Any

from strata.config import RenderConfig
from strata.errors import ConfigurationError, RenderError
from strata.renderer import Renderer


def parse_error_paths(values: list[str]) -> dict[int, str]:
    """Parse ``CODE=PATH`` pairs into an error path mapping."""
    error_paths: dict[int, str] = {}
    for value in values:
        code, sep, path = value.partition("=")
        if not sep or not code.strip().isdigit() or not path.strip():
            msg = f"Invalid --error-path {value!r}; expected CODE=PATH"
            raise ConfigurationError(msg)
        error_paths[int(code)] = path.strip()
    return error_paths


def _parse_data(raw: str | None) -> dict[str, Any]:
    if raw is None:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"--data is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(data, dict):
        msg = "--data must be a JSON object"
        raise ConfigurationError(msg)
    return data


def _build_renderer(args: argparse.Namespace) -> Renderer:
    ultimate = getattr(args, "ultimate_failure", None)
    config = RenderConfig(
        pages_dir=args.pages_dir,
        standalone_dir=args.standalone_dir,
        error_paths=parse_error_paths(getattr(args, "error_path", [])),
        ultimate_failure=ultimate.encode("utf-8") if ultimate else b"",
    )
    renderer = Renderer(config)
    renderer.freeze()
    return renderer


def run_render(args: argparse.Namespace) -> None:
    """Render a page (or standalone template) and write it to stdout."""
    try:
        data = _parse_data(args.data)
        renderer = _build_renderer(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    if args.standalone:
        try:
            body = renderer.render_standalone(args.path, data)
        except RenderError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
        status = 200
    else:
        result = renderer.render(args.path, data)
        body = result.body
        status = result.status

    sys.stdout.buffer.write(body)
    sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()
    print(f"status: {status}", file=sys.stderr)
    if status != 200:
        raise SystemExit(1)


def run_chain(args: argparse.Namespace) -> None:
    """Print the normalized path and the templates that compose it."""
    try:
        renderer = _build_renderer(args)
        resolved = renderer.resolve(args.path)
    except (ConfigurationError, RenderError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"path: {resolved.path}")
    for depth, identifier in enumerate(resolved.chain):
        print(f"  {depth}  {identifier or '(root layout)'}")
