#!/usr/bin/env python3
"""Developer commands for the NC News API: serve, create-schema, endpoints, test."""
from __future__ import annotations

import argparse
import asyncio
import json
import subprocess
import sys


def _call(argv: list[str]) -> int:
    print("+", " ".join(argv), file=sys.stderr)
    return subprocess.call(argv)


def serve(opts: argparse.Namespace) -> int:
    argv = [sys.executable, "-m", "uvicorn", "app.main:app", "--host", opts.host, "--port", str(opts.port)]
    if opts.reload:
        argv.append("--reload")
    return _call(argv)


def create_schema(opts: argparse.Namespace) -> int:
    from app import config
    from app.db.sa import create_schema as _create_schema

    dsn = opts.dsn or config.DB_DSN
    return 0 if asyncio.run(_create_schema(dsn)) else 1


def endpoints(opts: argparse.Namespace) -> int:
    from app.api.endpoints import ENDPOINTS

    if opts.names_only:
        print("\n".join(ENDPOINTS))
    else:
        print(json.dumps(ENDPOINTS, indent=2))
    return 0


def run_tests(opts: argparse.Namespace) -> int:
    # Options this parser does not know are handed to pytest
    return _call([sys.executable, "-m", "pytest", *opts.pytest_args])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nc-news", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("serve", help="Run the API under uvicorn")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=9090)
    p.add_argument("--reload", action="store_true")
    p.set_defaults(handler=serve)

    p = commands.add_parser("create-schema", help="Create the news tables if missing")
    p.add_argument("--dsn", help="Overrides DATABASE_URL")
    p.set_defaults(handler=create_schema)

    p = commands.add_parser("endpoints", help="Print the GET /api endpoint descriptor")
    p.add_argument("--names-only", action="store_true")
    p.set_defaults(handler=endpoints)

    p = commands.add_parser("test", help="Run the test suite, unknown options go to pytest")
    p.set_defaults(handler=run_tests)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    opts, extra = parser.parse_known_args(argv)
    if extra and opts.handler is not run_tests:
        parser.error("unrecognized arguments: " + " ".join(extra))
    opts.pytest_args = extra
    return int(opts.handler(opts))


if __name__ == "__main__":
    raise SystemExit(main())
