"""Aggregate summary of an evaluation batch."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from workflow_evals.models import EvaluationResult
from workflow_evals.reporting.formatting import format_table, percent, rate_label, with_title
from workflow_evals.tools import ErrorPattern, InstructionsVariant, Task


@dataclass
class GroupTally:
    """Success count for one group of results."""

    total: int = 0
    successful: int = 0

    @property
    def rate(self) -> int:
        return percent(self.successful, self.total)


@dataclass
class EvaluationSummary:
    """Totals and breakdowns over a list of results."""

    total: int = 0
    successful: int = 0
    by_variant: dict[InstructionsVariant, GroupTally] = field(default_factory=dict)
    by_task: dict[Task, GroupTally] = field(default_factory=dict)
    error_types: Counter[ErrorPattern] = field(default_factory=Counter)

    @property
    def rate(self) -> int:
        return percent(self.successful, self.total)


def summarize(results: list[EvaluationResult]) -> EvaluationSummary:
    """Reduce results to totals, per-variant and per-task tallies."""
    summary = EvaluationSummary()
    for r in results:
        summary.total += 1
        summary.error_types[r.error_type] += 1
        variant = summary.by_variant.setdefault(r.instructions_variant, GroupTally())
        task = summary.by_task.setdefault(r.task, GroupTally())
        for tally in (variant, task):
            tally.total += 1
        if r.success:
            summary.successful += 1
            variant.successful += 1
            task.successful += 1
    return summary


def _tally_rows(tallies: dict, order: list) -> list[list[str]]:
    return [
        [key.value, rate_label(tallies[key].successful, tallies[key].total)]
        for key in order
        if key in tallies
    ]


def format_summary(results: list[EvaluationResult], fmt: str = "terminal") -> str:
    """Format the batch summary printed after an evaluation run."""
    if not results:
        return "No evaluation results found."

    summary = summarize(results)
    totals = "\n".join([
        f"Total evaluations: {summary.total}",
        f"Successful: {summary.successful}",
        f"Success rate: {summary.rate}%",
    ])

    variant_table = format_table(
        ["Instructions Variant", "Success"],
        _tally_rows(summary.by_variant, list(InstructionsVariant)),
        ["l", "r"],
        fmt=fmt,
    )
    task_table = format_table(
        ["Task", "Success"],
        _tally_rows(summary.by_task, list(Task)),
        ["l", "r"],
        fmt=fmt,
    )
    error_table = format_table(
        ["Error Type", "Count"],
        [
            [pattern.value, str(summary.error_types[pattern])]
            for pattern in ErrorPattern
            if summary.error_types[pattern]
        ],
        ["l", "r"],
        fmt=fmt,
    )

    sections = [
        with_title("Summary", totals, fmt),
        with_title("By instruction variant", variant_table, fmt),
        with_title("By task", task_table, fmt),
        with_title("Error types", error_table, fmt),
    ]
    return "\n\n".join(sections)
