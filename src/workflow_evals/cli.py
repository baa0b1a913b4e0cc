"""Command line interface for transcript evaluation and reporting.

Provides evaluate, summary and compare subcommands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from workflow_evals import __version__
from workflow_evals.config import EvalConfig, LogLevel, OutputFormat
from workflow_evals.errors import WorkflowEvalError
from workflow_evals.evaluator import evaluate_directory
from workflow_evals.reporting import (
    ResultRecorder,
    format_summary,
    load_results,
    model_comparison_report,
)
from workflow_evals.tools import Task

logger = logging.getLogger(__name__)


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _add_report_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared by the reporting subcommands."""
    parser.add_argument(
        "--file", default=None,
        help="Results file to read (default: configured output file)",
    )
    parser.add_argument(
        "--format", choices=["terminal", "markdown"], default="terminal",
        help="Output format (default: terminal)",
    )


def _common_parser() -> argparse.ArgumentParser:
    """Parent parser for options every subcommand accepts."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level (default: from config or INFO)",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="workflow-evals",
        description="Evaluate agent transcripts against expected GitHub MCP tool workflows",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    common = _common_parser()

    evaluate_parser = subparsers.add_parser(
        "evaluate", parents=[common], help="Evaluate a directory of transcripts",
    )
    evaluate_parser.add_argument(
        "transcript_dir", nargs="?", default=None,
        help="Directory containing *.json transcripts (default: .)",
    )
    evaluate_parser.add_argument(
        "output_file", nargs="?", default=None,
        help="Results file (default: evaluation_results.csv)",
    )
    evaluate_parser.add_argument(
        "--workers", type=int, default=None,
        help="Number of transcripts evaluated concurrently (default: 1)",
    )
    evaluate_parser.add_argument(
        "--format", dest="output_format",
        choices=[f.value for f in OutputFormat], default=None,
        help="Results file format (default: from output file suffix)",
    )
    evaluate_parser.add_argument(
        "--summary-format", choices=["terminal", "markdown"], default="terminal",
        help="Printed summary format (default: terminal)",
    )

    summary_parser = subparsers.add_parser(
        "summary", parents=[common], help="Summarize an existing results file",
    )
    _add_report_args(summary_parser)

    compare_parser = subparsers.add_parser(
        "compare", parents=[common], help="Compare workflow adherence across models",
    )
    compare_parser.add_argument(
        "--task", choices=[t.value for t in Task], default=None,
        help="Filter by task",
    )
    _add_report_args(compare_parser)

    return parser


def _load_config(args: argparse.Namespace) -> EvalConfig:
    """Build config from the environment with CLI flags taking precedence."""
    overrides: dict[str, Any] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.command == "evaluate":
        if args.transcript_dir:
            overrides["transcript_dir"] = Path(args.transcript_dir)
        if args.output_file:
            overrides["output_file"] = Path(args.output_file)
        if args.workers is not None:
            overrides["workers"] = args.workers
        if args.output_format:
            overrides["output_format"] = args.output_format
    elif args.file:
        overrides["output_file"] = Path(args.file)
    return EvalConfig(**overrides)


def _run_evaluate(config: EvalConfig, fmt: str) -> str:
    logger.info(f"Output will be saved to: {config.output_file}")
    results = evaluate_directory(config.transcript_dir, config)
    recorder = ResultRecorder(config.output_file, config.resolved_output_format)
    recorder.write_all(results)
    return format_summary(results, fmt=fmt)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the workflow-evals CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_config(args)
    except ValidationError as e:
        parser.error(f"invalid configuration: {e}")

    setup_logging(config.log_level)

    try:
        if args.command == "evaluate":
            output = _run_evaluate(config, args.summary_format)
        elif args.command == "summary":
            output = format_summary(load_results(config.output_file), fmt=args.format)
        else:  # compare
            task = Task(args.task) if args.task else None
            output = model_comparison_report(
                load_results(config.output_file), task=task, fmt=args.format,
            )
    except WorkflowEvalError as e:
        logger.error(str(e))
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
