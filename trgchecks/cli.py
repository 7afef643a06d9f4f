"""CLI entrypoints for trgchecks commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import REPORT_FORMATS, ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .report import write_report


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


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .trgchecks.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trgchecks",
        description="Check GitHub organization products against the Tractus-X release guidelines.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Run all guideline checks and write the report.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_config_option(check_parser)
    check_parser.add_argument(
        "--org",
        default=None,
        help="GitHub organization to check (overrides the configuration).",
    )
    check_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the generated report (defaults to ./report).",
    )
    check_parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=REPORT_FORMATS,
        default=None,
        help="Report format to write; repeat for several (defaults to html and json).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the dashboard over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for trgchecks commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    if args.command == "check":
        if args.org:
            config.github.organization = args.org
        output_dir = args.output_dir or config.report.output_dir or Path("report")
        formats = args.formats or config.report.formats
        try:
            report = Orchestrator.from_config(config).check_products()
            write_report(report, output_dir, formats)
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except Exception as exc:  # pragma: no cover - defensive guard
            parser.exit(1, f"trgchecks check failed: {exc}\nRun with --verbose for more details.\n")
        passed = sum(1 for product in report.products if product.overall_passed)
        print(
            f"Checked {len(report.products)} products ({passed} passed), "
            f"{len(report.unhandled)} unhandled repositories. Report in {_relativize(output_dir)}"
        )
    elif args.command == "serve":
        from .service import run_service

        run_service(config, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
