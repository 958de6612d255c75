"""
bootstrap/entrypoints.py - Application entry points

Provides the command-line entry point: run a voyage manifest (or the
built-in demo) and print the ship reports.
"""

from __future__ import annotations
from typing import List, Optional
import argparse
import json
import logging
import sys

logger = logging.getLogger("bootstrap.entrypoints")

# Handlers installed by setup_logging, replaced on the next call
_installed_handlers: List[logging.Handler] = []


def setup_logging(
    level: str = "INFO",
    log_file: str = None,
    json_format: bool = False,
    log_format: str = None,
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        log_format: Text format string (ignored with json_format)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        class JSONFormatter(logging.Formatter):
            def format(self, record):
                return json.dumps({
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                })

        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # Logs go to stderr so report output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cargo ship loading: run a voyage manifest and print ship reports",
        prog="cargoship",
    )

    parser.add_argument(
        "manifest",
        nargs="?",
        help="Path to a voyage manifest (JSON). Runs the built-in demo when omitted.",
        default=None,
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (overrides configuration)",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the full run result as JSON",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first failed operation",
    )
    return parser


def cli_main(args: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code: 0 if every operation succeeded, 1 otherwise
    """
    parsed = build_parser().parse_args(args)

    try:
        from .config import load_config
        from ..containers.hazard import console_hazard_sink
        from ..errors import CargoError
        from ..manifest import ManifestRunner, demo_manifest, load_manifest

        try:
            config = load_config(parsed.config)

            log_level = "DEBUG" if parsed.verbose else (parsed.log_level or config.logging.level)
            setup_logging(
                level=log_level,
                log_file=parsed.log_file or config.logging.log_file,
                json_format=config.logging.json_logs,
                log_format=config.logging.format,
            )

            manifest = load_manifest(parsed.manifest) if parsed.manifest else demo_manifest()

            runner = ManifestRunner(
                limits=config.limits,
                hazard_sink=None if parsed.json else console_hazard_sink,
                fail_fast=parsed.fail_fast,
                report_sink=None if parsed.json else print,
            )
            result = runner.run(manifest)
        except CargoError as e:
            if parsed.json:
                print(json.dumps(e.to_dict(), indent=2, default=str))
            else:
                print(f"Error: {e}", file=sys.stderr)
            return 1

        if parsed.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            for outcome in result.failures:
                print(
                    f"Operation {outcome.index} ({outcome.action.value} {outcome.target}) "
                    f"failed: {outcome.error['message']}",
                    file=sys.stderr,
                )

        return 0 if result.success else 1

    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


def main():
    """Main entry point for the package."""
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
