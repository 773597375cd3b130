#!/usr/bin/env python3
"""
Dependency updates analyzer - reports outdated Maven dependencies with severities and ratings.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .core.analyzer import DependencyUpdatesAnalyzer
from .models.config import DEFAULT_REPORT_PATH, AnalysisConfig
from .utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dependency-updates-analyzer",
        description="Analyze a Maven dependency updates report",
    )
    parser.add_argument(
        "--report",
        "-r",
        type=Path,
        default=None,
        help=f"Dependency updates XML report (default: {DEFAULT_REPORT_PATH})",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="JSON configuration file",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output JSON file (default: standard output)",
    )
    parser.add_argument(
        "--discrete",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep one minor per major.minor and one major per major version",
    )
    parser.add_argument(
        "--rating-scheme",
        choices=["ratio", "tiered"],
        default=None,
        help="Rating scheme for patch and upgrade ratings (default: ratio)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress output messages",
    )
    return parser


def load_config(args: argparse.Namespace) -> AnalysisConfig:
    """Build the configuration from the config file and command line overrides."""
    config = AnalysisConfig.from_file(args.config) if args.config else AnalysisConfig()

    data = config.model_dump()
    if args.report is not None:
        data["report_path"] = args.report
    if args.discrete is not None:
        data["versions"]["discrete_minor_major"] = args.discrete
    if args.rating_scheme is not None:
        data["rating_scheme"] = args.rating_scheme
    if args.quiet:
        data["quiet"] = True
    return AnalysisConfig.load(data)


def main(argv: Optional[list[str]] = None) -> None:
    """Command line entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(log_file=args.log_file, verbose=args.verbose, quiet=args.quiet)

    try:
        config = load_config(args)

        if not config.quiet:
            print(f"Analyzing: {config.report_path}", file=sys.stderr)

        analyzer = DependencyUpdatesAnalyzer(config)
        result = analyzer.analyze()
        if result is None:
            if not config.quiet:
                print(
                    f"No report found at '{config.report_path}', nothing to analyze.",
                    file=sys.stderr,
                )
            return

        if args.output:
            analyzer.write_result(result, args.output)
            if not config.quiet:
                metrics = result.metrics
                print(f"✓ Analyzed {metrics.dependencies:,} dependencies")
                print(
                    f"✓ {len(result.issues):,} issues, "
                    f"patches rating {metrics.patches_rating.letter}, "
                    f"upgrades rating {metrics.upgrades_rating.letter}"
                )
                print(f"✓ Result written to: {args.output}")
        else:
            analyzer.json_writer.dump_result(result)

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
