"""Command-line entry point: serve until one test run posts its results."""
from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from addin_test_server.config import load_config, parse_port
from addin_test_server.errors import StartError
from addin_test_server.test_server import TestServer

LOGGER = logging.getLogger("addin_test_server.cli")

EXIT_OK = 0
EXIT_TIMEOUT = 1
EXIT_START_FAILED = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="HTTPS test server for Office Add-in test runs")
    parser.add_argument("--port", type=parse_port, default=None, help="Port to listen on (default 4201)")
    parser.add_argument("--host", default=None, help="Interface to bind (default localhost)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for results before giving up (default: wait forever)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write received results to this file")
    parser.add_argument(
        "--relax-tls",
        action="store_true",
        help="Accept self-signed certificates in clients built from this server (local test runs only)",
    )
    parser.add_argument("--env-file", default=None, help="Optional .env file to load first")
    return parser.parse_args(argv)


def _write_results(path: Path, results: object) -> Path:
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(results, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
    return path


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)

    config = load_config(args.env_file)
    overrides = {}
    if args.port is not None:
        overrides["port"] = args.port
    if args.host:
        overrides["host"] = args.host
    config = dataclasses.replace(config, **overrides)

    server = TestServer(config=config)
    try:
        server.start(relax_tls_validation=args.relax_tls)
    except StartError as exc:
        LOGGER.error("%s", exc)
        return EXIT_START_FAILED

    try:
        results = server.await_results(timeout=args.timeout)
    except TimeoutError as exc:
        LOGGER.error("%s", exc)
        return EXIT_TIMEOUT
    finally:
        server.stop()

    if args.output is not None:
        LOGGER.info("Results written to %s", _write_results(args.output, results))
    print(json.dumps(results, ensure_ascii=False, indent=2, sort_keys=True))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main(sys.argv[1:]))
