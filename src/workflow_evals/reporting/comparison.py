"""Model comparison report for evaluation results."""

from __future__ import annotations

from collections import defaultdict

from workflow_evals.models import EvaluationResult
from workflow_evals.reporting.formatting import format_table, percent, truncate, with_title
from workflow_evals.tools import Task


def _avg(values: list[int]) -> str:
    return f"{sum(values) / len(values):.1f}" if values else "0.0"


def model_comparison_report(
    results: list[EvaluationResult],
    task: Task | None = None,
    fmt: str = "terminal",
) -> str:
    """Compare workflow adherence across models.

    Groups results by model and reports pass rate, the most common error
    type, and the average number of calls to each review tool.

    Args:
        results: All evaluation results.
        task: Filter to a specific task (None = all).
        fmt: 'terminal' or 'markdown'.
    """
    if not results:
        return "No evaluation results found."

    filtered = results
    if task is not None:
        filtered = [r for r in filtered if r.task == task]
    if not filtered:
        return f"No results found for task={task.value if task else None}"

    groups: dict[str, list[EvaluationResult]] = defaultdict(list)
    for r in filtered:
        groups[r.model].append(r)

    headers = ["Model", "Runs", "Pass Rate", "Top Error",
               "Pending", "Comments", "Submits", "One-Step"]
    alignments = ["l", "r", "r", "l", "r", "r", "r", "r"]

    row_data: list[tuple[int, list[str]]] = []
    for model, group in groups.items():
        passed = sum(1 for r in group if r.success)
        error_counts: dict[str, int] = defaultdict(int)
        for r in group:
            error_counts[r.error_type.value] += 1
        top_error = max(error_counts, key=lambda k: error_counts[k])

        row = [
            truncate(model, 30),
            str(len(group)),
            f"{passed}/{len(group)} ({percent(passed, len(group))}%)",
            top_error,
            _avg([r.create_pending_count for r in group]),
            _avg([r.add_comment_count for r in group]),
            _avg([r.submit_pending_count for r in group]),
            _avg([r.create_and_submit_count for r in group]),
        ]
        row_data.append((percent(passed, len(group)), row))

    # Best pass rate first
    row_data.sort(key=lambda x: x[0], reverse=True)
    rows = [rd[1] for rd in row_data]

    title = "Model Comparison"
    if task is not None:
        title += f" - {task.value}"

    return with_title(title, format_table(headers, rows, alignments, fmt=fmt), fmt)
