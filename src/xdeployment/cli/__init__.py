"""Command line entry point for the xdeployment function."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from xdeployment import __version__
from xdeployment.config import get_settings
from xdeployment.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xdeployment",
        description="Composition function for XDeployment composites",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Log level (default from XDEPLOYMENT_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Run one function request from a file")
    render_parser.add_argument("request_file", help="Path to a RunFunctionRequest (YAML or JSON)")
    render_parser.add_argument(
        "--output", "-o", choices=["yaml", "json"], default="yaml", help="Output format"
    )
    render_parser.add_argument("--quiet", "-q", action="store_true", help="Only print the response")

    subparsers.add_parser("validate", help="Validate the composer registry")

    serve_parser = subparsers.add_parser("serve", help="Serve the function over HTTP")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    configure_logging(args.log_level or settings.log_level)

    if args.command == "render":
        from xdeployment.cli.render import render_command

        sys.exit(render_command(args.request_file, output_format=args.output, quiet=args.quiet))

    if args.command == "validate":
        from xdeployment.cli.validate import validate_command

        sys.exit(validate_command())

    if args.command == "serve":
        from xdeployment.cli.validate import validate_command

        exit_code = validate_command()
        if exit_code:
            sys.exit(exit_code)

        import uvicorn

        uvicorn.run(
            "xdeployment.api.main:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            log_level=(args.log_level or settings.log_level).lower(),
        )
        return

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
