"""Command line entry point for the post directory server.

Parses the server flags, optionally prints a config template, then runs
the app under uvicorn. uvicorn handles SIGINT/SIGTERM: it stops accepting
calls, runs the app shutdown (which closes the store) and exits.
"""
from __future__ import annotations
import argparse
import sys
from typing import Iterable, Optional

import uvicorn

from postdir_lib.config.config import load_server_config, render_template
from postdir_lib.main import create_app, Config


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="postdir", add_help=False)
    p.add_argument("--config", default=None, help="Path to the server YAML config")
    p.add_argument("--host", default=None, help="Listen address (overrides config)")
    p.add_argument("--port", type=int, default=None, help="Listen port (overrides config)")
    p.add_argument("--memory", action="store_true", help="Use the in-memory store instead of MongoDB")
    p.add_argument("--print-template", action="store_true", help="Print the default YAML config to stdout and exit")
    p.add_argument("--help", action="store_true", help="Show this help")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """Parse server args from argv, ignoring unknown ones."""
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.help:
        get_parser().print_help()
        return 0
    if args.print_template:
        sys.stdout.write(render_template())
        return 0

    server_cfg = load_server_config(args.config)
    app = create_app(Config(
        config_path=args.config,
        storage_backend="memory" if args.memory else "mongo",
    ))
    uvicorn.run(
        app,
        host=args.host or server_cfg.host,
        port=args.port or server_cfg.port,
        log_config=None,
    )
    return 0
