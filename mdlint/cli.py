"""CLI entrypoints for mdlint commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, ConfigError, load_config
from .linter import Linter, format_report
from .logging import configure_logging, get_logger
from .rules import discover_rules

logger = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdlint",
        description="Lint markdown heading length and list item spacing.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write diagnostic logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Lint markdown files or directories.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to lint (defaults to current directory).",
    )
    check_parser.add_argument(
        "--config",
        default=None,
        help=f"Path to {CONFIG_FILENAME} or the directory containing it.",
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with a failure status when any warning is reported.",
    )
    check_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only list files that have messages.",
    )

    rules_parser = subparsers.add_parser(
        "rules",
        help="List the available lint rules.",
    )
    _add_verbose_option(rules_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for mdlint commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "rules":
        for name in discover_rules():
            print(name)
        return 0

    if args.command == "check":
        paths = [Path(path) for path in args.paths]
        config_path = Path(args.config) if args.config else Path.cwd()
        try:
            linter = Linter(load_config(config_path))
            files = linter.lint_paths(paths)
        except (ConfigError, FileNotFoundError) as exc:
            parser.exit(1, f"{exc}\n")
        except UnicodeDecodeError as exc:
            parser.exit(1, f"mdlint check failed: {exc}\n")

        if args.quiet:
            files = [file for file in files if file.messages]
        if files:
            sys.stdout.write(format_report(files))
        failed = any(file.has_errors for file in files)
        if args.strict:
            failed = failed or any(file.messages for file in files)
        logger.debug("Checked %d file(s)", len(files))
        return 1 if failed else 0

    parser.exit(1, "Unknown command\n")  # pragma: no cover - argparse enforces choices
    return 1  # pragma: no cover


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
