#!/usr/bin/env python3
"""
Command-line interface for the delivered-item alert job.

Usage:
    uv run python cli.py [command] [options]

Commands:
    run         Run one notification pass over all orders
    serve       Start the HTTP trigger API
    test        Run the test suite

Examples:
    uv run python cli.py run
    uv run python cli.py run --environment Local
    uv run python cli.py run --alert-api-url https://alerts.example.com/api/alerts
    uv run python cli.py serve --reload
"""

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from common.http_client import HttpClientWrapper
from common.settings import load_settings
from order_alerts.factory import create_processor

logger = logging.getLogger("cli")

EXIT_OK = 0
EXIT_PASS_FAILED = 1
EXIT_CONFIG_ERROR = 2


def configure_logging(level: str) -> None:
    """Configure root logging for a CLI run."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
        datefmt="%H:%M:%S",
    )
    # basicConfig is a no-op when handlers already exist
    logging.getLogger().setLevel(level)


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Turn command-line options into a settings override layer."""
    api_settings = {}
    if args.orders_api_url:
        api_settings["OrdersApiUrl"] = args.orders_api_url
    if args.update_api_url:
        api_settings["UpdateApiUrl"] = args.update_api_url
    if args.alert_api_url:
        api_settings["AlertApiUrl"] = args.alert_api_url

    overrides: dict[str, Any] = {}
    if api_settings:
        overrides["ApiSettings"] = api_settings
    if args.log_level:
        overrides["LogLevel"] = args.log_level
    return overrides


def run_pass(args: argparse.Namespace) -> int:
    """Run one notification pass and return the process exit code."""
    try:
        settings = load_settings(
            config_dir=args.config_dir,
            environment=args.environment,
            overrides=build_overrides(args),
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(settings.log_level)
    logger.info(f"Runtime environment: {settings.environment}")

    with HttpClientWrapper(timeout=settings.request_timeout) as http_client:
        try:
            processor = create_processor(settings, http_client)
        except ValueError as e:
            logger.error(f"Configuration error: {e}")
            return EXIT_CONFIG_ERROR

        try:
            processor.process_orders()
        except (httpx.HTTPError, ValidationError) as e:
            logger.error(f"Notification pass failed: {e}")
            return EXIT_PASS_FAILED

    return EXIT_OK


def run_tests(args: list[str]) -> int:
    """Run the test suite."""
    cmd = [sys.executable, "-m", "pytest"] + args
    return subprocess.run(cmd).returncode


def run_server(host: str, port: int, reload: bool) -> int:
    """Start the API server."""
    cmd = [sys.executable, "-m", "uvicorn", "api.main:app", f"--host={host}", f"--port={port}"]
    if reload:
        cmd.append("--reload")

    print(f"Starting server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    return subprocess.run(cmd).returncode


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Delivered-item alert job",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s run
  %(prog)s run --environment Local --log-level DEBUG
  %(prog)s test -v
  %(prog)s serve --reload
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run one notification pass")
    run_parser.add_argument(
        "--environment",
        default=None,
        help="Environment name, selects appsettings.{name}.json",
    )
    run_parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory containing appsettings.json (default: current directory)",
    )
    run_parser.add_argument("--orders-api-url", default=None, help="Override ApiSettings:OrdersApiUrl")
    run_parser.add_argument("--update-api-url", default=None, help="Override ApiSettings:UpdateApiUrl")
    run_parser.add_argument("--alert-api-url", default=None, help="Override ApiSettings:AlertApiUrl")
    run_parser.add_argument("--log-level", default=None, help="Override LogLevel")

    # Test command
    test_parser = subparsers.add_parser("test", help="Run the test suite")
    test_parser.add_argument(
        "pytest_args",
        nargs="*",
        default=[],
        help="Arguments to pass to pytest",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return run_pass(args)
    elif args.command == "test":
        return run_tests(args.pytest_args)
    elif args.command == "serve":
        return run_server(args.host, args.port, args.reload)

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
