#!/usr/bin/env python3
"""
Vestaboard - command line entry point

    python -m vestaboard.main render message.json
    python -m vestaboard.main serve --config config.toml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from .compositor import render_json
from .server_app import ServerApp
from .validation import ValidationError

logger = logging.getLogger(__name__)


def _render(args: argparse.Namespace) -> int:
    text = Path(args.file).read_text(encoding="utf-8") if args.file != "-" else sys.stdin.read()
    board = render_json(text, args.rows, args.cols)
    if args.layout:
        print(board.to_layout())
    else:
        print(board.to_display_string(), end="")
    return 0


def _serve(args: argparse.Namespace) -> int:
    config_path = Path(args.config) if args.config else None
    server = ServerApp(config_path)
    uvicorn.run(server.get_fastapi_app(), host=args.host, port=args.port, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Vestaboard VBML renderer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a VBML file and print the board")
    render.add_argument("file", help="Path to a VBML JSON file, or - for stdin")
    render.add_argument("--rows", type=int, default=6, help="Board rows")
    render.add_argument("--cols", type=int, default=22, help="Board columns")
    render.add_argument(
        "--layout", action="store_true", help="Print the nested-list layout instead"
    )
    render.set_defaults(func=_render)

    serve = sub.add_parser("serve", help="Run the render server")
    serve.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve.add_argument("--config", help="Path to configuration file")
    serve.set_defaults(func=_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return args.func(args)
    except (ValidationError, OSError) as e:
        logger.error(f"{e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
