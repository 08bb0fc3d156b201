"""Command-line entry point for zonediff."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from .config import AppConfig, OUTPUT_FORMATS, build_options, load_config
from .controller import CountReport, DiffReport, ZoneController, configure_logging
from .exporter import count_to_json, count_to_yaml, summary_to_json, summary_to_yaml, write_report
from .models import ZoneDiffError
from .renderer import render_count, render_summary


def _build_parser() -> argparse.ArgumentParser:
    """Create the CLI parser."""
    parser = argparse.ArgumentParser(description="Compare and count DNS zone master files.")
    parser.add_argument("--log-level", help="Override log level (default from config).")

    subparsers = parser.add_subparsers(dest="command", required=True)
    diff_parser = subparsers.add_parser("diff", help="Report record set changes between two zone files.")
    _register_common_arguments(diff_parser)
    diff_parser.add_argument("-b", "--buffer-size", type=int, help="Window size in record sets.")
    diff_parser.add_argument(
        "-s",
        "--ignore-serial",
        action="store_true",
        default=None,
        help="Ignore SOA serial numbers when comparing.",
    )
    diff_parser.add_argument(
        "-d",
        "--skip-dnssec",
        action="store_true",
        default=None,
        help="Skip NSEC, NSEC3 and RRSIG records.",
    )
    diff_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Print every added, removed and changed record.",
    )
    diff_parser.add_argument("old", help="Path to the old zone file.")
    diff_parser.add_argument("new", help="Path to the new zone file.")

    count_parser = subparsers.add_parser("count", help="Count records and record sets per type.")
    _register_common_arguments(count_parser)
    count_parser.add_argument("zonefile", help="Path to the zone file.")

    return parser


def _register_common_arguments(subparser: argparse.ArgumentParser) -> None:
    """Register arguments shared by diff/count."""
    subparser.add_argument("-o", "--origin", help="Zone origin (default: the zone file name).")
    subparser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Report format (default from config).",
    )
    subparser.add_argument("--output", help="Path to write the report (default stdout).")


def _pick(value: Any, default: Any) -> Any:
    """Return the CLI value unless it was omitted."""
    return default if value is None else value


def _emit_report(content: str, output: str | None) -> None:
    """Print the report or write it to a file."""
    if output:
        write_report(Path(output), content)
        print(f"Wrote report to {output}")
    else:
        print(content, end="" if content.endswith("\n") else "\n")


def _format_diff(report: DiffReport, output_format: str) -> str:
    """Serialise a diff report."""
    if output_format == "json":
        return summary_to_json(report.summary, origin=report.origin)
    if output_format == "yaml":
        return summary_to_yaml(report.summary, origin=report.origin)
    return render_summary(report.summary)


def _format_count(report: CountReport, output_format: str) -> str:
    """Serialise a count report."""
    if output_format == "json":
        return count_to_json(report.count, origin=report.origin)
    if output_format == "yaml":
        return count_to_yaml(report.count, origin=report.origin)
    return render_count(report.count)


def _run_diff(config: AppConfig, args: argparse.Namespace) -> DiffReport:
    """Execute the diff command."""
    options = build_options(
        buffer_size=_pick(args.buffer_size, config.buffer_size),
        ignore_serial=_pick(args.ignore_serial, config.ignore_serial),
        skip_dnssec=_pick(args.skip_dnssec, config.skip_dnssec),
        verbose=_pick(args.verbose, config.verbose),
    )
    controller = ZoneController(options)
    report = controller.diff_files(Path(args.old), Path(args.new), origin=args.origin)
    _emit_report(_format_diff(report, _pick(args.format, config.output_format)), args.output)
    return report


def _run_count(config: AppConfig, args: argparse.Namespace) -> CountReport:
    """Execute the count command."""
    report = ZoneController().count_file(Path(args.zonefile), origin=args.origin)
    _emit_report(_format_count(report, _pick(args.format, config.output_format)), args.output)
    return report


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config()
        configure_logging(args.log_level or config.log_level)
        if args.command == "diff":
            _run_diff(config, args)
        elif args.command == "count":
            _run_count(config, args)
        else:  # pragma: no cover - argparse ensures we never reach here
            parser.error(f"Unsupported command {args.command}")
    except ZoneDiffError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as exc:  # noqa: BLE001
        print(f"Unexpected error: {exc}", file=sys.stderr)
        sys.exit(3)


if __name__ == "__main__":
    main()
