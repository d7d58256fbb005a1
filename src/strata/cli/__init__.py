"""Strata CLI — render pages and inspect template chains from a shell.

Entry point registered as ``strata`` in ``pyproject.toml``::

    [project.scripts]
    strata = "strata.cli:main"
"""

import argparse
import sys


def _add_template_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pages_dir", help="Directory of page and layout templates")
    parser.add_argument("path", help="Page path (e.g. docs/guide)")
    parser.add_argument(
        "--standalone-dir",
        default=None,
        help="Directory of standalone templates",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``strata`` command."""
    parser = argparse.ArgumentParser(
        prog="strata",
        description="Strata — hierarchical HTML page rendering.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log render steps to stderr")
    subparsers = parser.add_subparsers(dest="command")

    # -- strata render ----------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render a page to stdout")
    _add_template_args(render_parser)
    render_parser.add_argument(
        "--data",
        default=None,
        help="JSON object passed to the templates",
    )
    render_parser.add_argument(
        "--error-path",
        action="append",
        default=[],
        metavar="CODE=PATH",
        help="Error page override (repeatable), e.g. 404=errors/missing",
    )
    render_parser.add_argument(
        "--ultimate-failure",
        default=None,
        help="Static body served when no error page renders",
    )
    render_parser.add_argument(
        "--standalone",
        action="store_true",
        help="Render PATH from the standalone directory instead of the pages",
    )

    # -- strata chain -----------------------------------------------------
    chain_parser = subparsers.add_parser("chain", help="Print the template chain for a path")
    _add_template_args(chain_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "render":
        from strata.cli._render import run_render

        run_render(args)
    elif args.command == "chain":
        from strata.cli._render import run_chain

        run_chain(args)
